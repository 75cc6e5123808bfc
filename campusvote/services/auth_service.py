from pymongo.errors import DuplicateKeyError

from campusvote.errors import ValidationError, DuplicateUser, InvalidCredentials, InvalidToken
from campusvote.models.student import Student
from campusvote.utils.validators import (
    normalize_email,
    sanitize_input,
    validate_email,
    validate_full_name,
    validate_otp,
    validate_password
)


class AuthService:
    """Service for handling signup and login."""

    def __init__(self, db, token_service, otp_service=None,
                 require_otp: bool = True, bcrypt_rounds: int = 12,
                 default_image_url: str = None):
        self.db = db
        self.token_service = token_service
        self.otp_service = otp_service
        self.require_otp = require_otp and otp_service is not None
        self.bcrypt_rounds = bcrypt_rounds
        self.default_image_url = default_image_url

    def signup(self, name: str, email: str, password: str, otp: str = None) -> str:
        """Register a new student.

        Returns: success message
        """
        name = sanitize_input(name)
        email = normalize_email(email)

        if not name or not email or not password or (self.require_otp and not otp):
            raise ValidationError("All fields are required")

        # Validate inputs
        for valid, msg in (validate_full_name(name),
                           validate_email(email),
                           validate_password(password)):
            if not valid:
                raise ValidationError(msg)

        if self.require_otp:
            otp = str(otp).strip()
            valid, msg = validate_otp(otp)
            if not valid:
                raise ValidationError(msg)
            self.otp_service.verify(email, otp)

        # Check if already registered
        if Student.email_exists(self.db, email):
            raise DuplicateUser()

        try:
            Student.create(self.db, name=name, email=email, password=password,
                           rounds=self.bcrypt_rounds)
        except DuplicateKeyError:
            # Lost a race with a concurrent signup for the same email
            raise DuplicateUser()

        if self.otp_service is not None:
            self.otp_service.consume(email)

        return "Signup successful"

    def login(self, email: str, password: str) -> dict:
        """Authenticate a student.

        Returns: token plus public profile fields
        """
        email = normalize_email(email)
        if not email or not password:
            raise ValidationError("Email and password are required")
        if not isinstance(password, str):
            raise ValidationError("Password must be text")

        student = Student.find_by_email(self.db, email)
        if not student or not student.check_password(password):
            raise InvalidCredentials()

        result = {'token': self.token_service.issue_token(student.email)}
        result.update(student.to_profile(self.default_image_url))
        return result

    def current_student(self, token: str) -> dict:
        """Resolve a bearer token to the student's profile."""
        email = self.token_service.verify_token(token)
        student = Student.find_by_email(self.db, email)
        if not student:
            # Account no longer exists; treat like any other bad token
            raise InvalidToken()
        return student.to_profile(self.default_image_url)
