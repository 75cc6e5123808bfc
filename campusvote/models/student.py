from datetime import datetime
from campusvote.utils.security import hash_password, verify_password


class Student:
    """Student account. Students sign up, log in and cast a single vote."""

    collection_name = 'students'

    def __init__(self, name: str, email: str, password_hash: str,
                 enrollment_number: str = None, image_url: str = None,
                 registered_at: datetime = None, _id=None):
        self._id = _id
        self.name = name
        self.email = email
        self.password_hash = password_hash
        self.enrollment_number = enrollment_number
        self.image_url = image_url
        self.registered_at = registered_at or datetime.utcnow()

    def to_dict(self) -> dict:
        """Convert student to dictionary."""
        data = {
            'name': self.name,
            'email': self.email,
            'password_hash': self.password_hash,
            'enrollment_number': self.enrollment_number,
            'image_url': self.image_url,
            'registered_at': self.registered_at
        }
        if self._id:
            data['_id'] = self._id
        return data

    @classmethod
    def from_dict(cls, data: dict):
        """Create Student from dictionary."""
        if not data:
            return None
        return cls(
            name=data.get('name'),
            email=data.get('email'),
            password_hash=data.get('password_hash'),
            enrollment_number=data.get('enrollment_number'),
            image_url=data.get('image_url'),
            registered_at=data.get('registered_at'),
            _id=data.get('_id')
        )

    def to_profile(self, default_image_url: str) -> dict:
        """Public profile fields returned to the client after login."""
        return {
            'email': self.email,
            'name': self.name,
            'enrollmentnum': self.enrollment_number,
            'Imgsrc': self.image_url or default_image_url
        }

    def check_password(self, password: str) -> bool:
        """Verify password."""
        return verify_password(password, self.password_hash)

    def save(self, db):
        """Insert the student.

        Raises pymongo's DuplicateKeyError when the email is already taken.
        """
        result = db[self.collection_name].insert_one(self.to_dict())
        self._id = result.inserted_id
        return self

    @classmethod
    def create(cls, db, name: str, email: str, password: str, rounds: int = 12):
        """Create a new student with a hashed password."""
        student = cls(
            name=name,
            email=email,
            password_hash=hash_password(password, rounds=rounds)
        )
        return student.save(db)

    @classmethod
    def find_by_email(cls, db, email: str):
        """Find student by email."""
        data = db[cls.collection_name].find_one({'email': email})
        return cls.from_dict(data)

    @classmethod
    def email_exists(cls, db, email: str) -> bool:
        """Check if email is already registered."""
        return db[cls.collection_name].find_one({'email': email}, {'_id': 1}) is not None
