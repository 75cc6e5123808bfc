import bcrypt
import hmac
import secrets


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password using bcrypt with salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash."""
    if not password_hash or not isinstance(password, str):
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def generate_otp_code() -> str:
    """Generate a 6-digit one-time passcode.

    Uniform over 100000-999999 so the code never has a leading zero.
    """
    return str(100000 + secrets.randbelow(900000))


def codes_match(expected: str, provided: str) -> bool:
    """Compare two OTP codes in constant time."""
    if expected is None or provided is None:
        return False
    return hmac.compare_digest(str(expected).encode('utf-8'), str(provided).encode('utf-8'))
