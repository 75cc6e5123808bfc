from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from campusvote.errors import InvalidToken


class TokenService:
    """Issues and verifies signed, expiring bearer tokens.

    Tokens carry only the student's email and are signed with the app's
    SECRET_KEY, so nothing has to be stored server side.
    """

    SALT = 'campusvote-session'

    def __init__(self, secret_key: str, max_age_seconds: int = 3600):
        if not secret_key:
            raise ValueError("A secret key is required to sign tokens")
        self.max_age_seconds = max_age_seconds
        self._serializer = URLSafeTimedSerializer(secret_key, salt=self.SALT)

    def issue_token(self, email: str) -> str:
        """Create a token for the given email."""
        return self._serializer.dumps({'email': email})

    def verify_token(self, token: str) -> str:
        """Check a token and return the email it was issued for.

        Raises InvalidToken when the token is missing, tampered with or expired.
        """
        if not token:
            raise InvalidToken()

        try:
            payload = self._serializer.loads(token, max_age=self.max_age_seconds)
        except SignatureExpired:
            raise InvalidToken("Session expired. Please log in again.")
        except BadSignature:
            raise InvalidToken()

        email = payload.get('email') if isinstance(payload, dict) else None
        if not email:
            raise InvalidToken()
        return email
