"""Error taxonomy for the voting API.

Every failure a service can report is a ``VotingError`` subclass carrying the
HTTP status it maps to and a message that is safe to show to the client.
"""


class VotingError(Exception):
    """Base class for errors that are reported to API clients."""

    status_code = 500
    default_message = 'Something went wrong'

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {'message': self.message}


class ValidationError(VotingError):
    status_code = 400
    default_message = 'Invalid request'


class DuplicateUser(VotingError):
    status_code = 400
    default_message = 'User already exists'


class InvalidCredentials(VotingError):
    status_code = 400
    default_message = 'Invalid credentials'


class InvalidOtp(VotingError):
    status_code = 400
    default_message = 'Invalid OTP'


class OtpExpired(VotingError):
    status_code = 400
    default_message = 'OTP expired'


class AlreadyVoted(VotingError):
    status_code = 400
    default_message = 'Already voted'


class InvalidToken(VotingError):
    status_code = 401
    default_message = 'Invalid or missing token'


class NotFound(VotingError):
    status_code = 404
    default_message = 'Not found'


class TooManyAttempts(VotingError):
    status_code = 429
    default_message = 'Too many attempts. Please try again later.'


class StoreUnavailable(VotingError):
    status_code = 500
    default_message = 'Database unavailable'


class MailDeliveryError(VotingError):
    status_code = 500
    default_message = 'Failed to send email. Please try again later.'
