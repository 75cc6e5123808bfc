from campusvote.errors import ValidationError, InvalidOtp, OtpExpired
from campusvote.models.otp_challenge import OtpChallenge
from campusvote.utils.security import generate_otp_code, codes_match
from campusvote.utils.validators import normalize_email, validate_email


class OtpService:
    """Issues and checks the email codes that gate signup.

    At most one challenge exists per email: requesting a new code purges the
    old one, and a successful signup consumes it.
    """

    def __init__(self, db, send_code, ttl_seconds: int = 300):
        """
        Args:
            db: Application database handle
            send_code: callable(email, code) that delivers the code and raises
                MailDeliveryError on failure
            ttl_seconds: How long a code stays valid
        """
        self.db = db
        self.send_code = send_code
        self.ttl_seconds = ttl_seconds

    def request_otp(self, email: str) -> str:
        """Create a fresh code for email and send it.

        Returns: confirmation message (never the code itself)
        """
        email = normalize_email(email)
        valid, msg = validate_email(email)
        if not valid:
            raise ValidationError(msg)

        code = generate_otp_code()
        OtpChallenge.replace_for_email(self.db, email, code)
        self.send_code(email, code)

        return "OTP sent to your email"

    def verify(self, email: str, code: str) -> OtpChallenge:
        """Check a code against the stored challenge for email.

        Raises InvalidOtp if no stored code matches, OtpExpired if the
        matching code is older than the TTL.
        """
        email = normalize_email(email)
        code = str(code).strip() if code is not None else ''

        for challenge in OtpChallenge.find_for_email(self.db, email):
            if codes_match(challenge.code, code):
                if challenge.is_expired(self.ttl_seconds):
                    raise OtpExpired("OTP expired. Please request a new one.")
                return challenge

        raise InvalidOtp()

    def consume(self, email: str) -> int:
        """Delete every challenge for email once it has been used."""
        return OtpChallenge.delete_for_email(self.db, normalize_email(email))
