"""One-time passcode challenges issued during signup."""
from datetime import datetime, timedelta


class OtpChallenge:
    """A pending signup code for one email address."""

    collection_name = 'otp_challenges'

    def __init__(self, email: str, code: str, created_at: datetime = None, _id=None):
        self._id = _id
        self.email = email
        self.code = code
        self.created_at = created_at or datetime.utcnow()

    def to_dict(self) -> dict:
        data = {
            'email': self.email,
            'code': self.code,
            'created_at': self.created_at
        }
        if self._id:
            data['_id'] = self._id
        return data

    @classmethod
    def from_dict(cls, data: dict):
        if not data:
            return None
        return cls(
            email=data.get('email'),
            code=data.get('code'),
            created_at=data.get('created_at'),
            _id=data.get('_id')
        )

    def is_expired(self, ttl_seconds: int, now: datetime = None) -> bool:
        """A challenge stays valid for exactly ttl_seconds after creation."""
        now = now or datetime.utcnow()
        return now - self.created_at > timedelta(seconds=ttl_seconds)

    @classmethod
    def replace_for_email(cls, db, email: str, code: str):
        """Purge older challenges for the email and store a fresh one."""
        db[cls.collection_name].delete_many({'email': email})
        challenge = cls(email=email, code=code)
        result = db[cls.collection_name].insert_one(challenge.to_dict())
        challenge._id = result.inserted_id
        return challenge

    @classmethod
    def find_for_email(cls, db, email: str) -> list:
        """All challenges stored for an email, newest first."""
        cursor = db[cls.collection_name].find({'email': email}).sort('created_at', -1)
        return [cls.from_dict(c) for c in cursor]

    @classmethod
    def delete_for_email(cls, db, email: str) -> int:
        result = db[cls.collection_name].delete_many({'email': email})
        return result.deleted_count
