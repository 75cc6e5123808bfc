import re

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def normalize_email(email) -> str:
    """Strip and lower-case an email so lookups are case-insensitive."""
    if not isinstance(email, str):
        return ''
    return email.strip().lower()


def validate_email(email: str) -> tuple[bool, str]:
    """Validate email format.

    Returns: (is_valid, error_message)
    """
    if not email:
        return False, "Email is required"

    if len(email) > 254 or not EMAIL_PATTERN.match(email):
        return False, "Email address is not valid"

    return True, ""


def validate_password(password: str) -> tuple[bool, str]:
    """Validate password.

    Requirements:
    - Minimum 8 characters
    - At most 72 bytes (bcrypt ignores anything longer)

    Returns: (is_valid, error_message)
    """
    if not password:
        return False, "Password is required"

    if not isinstance(password, str):
        return False, "Password must be text"

    if len(password) < 8:
        return False, "Password must be at least 8 characters long"

    if len(password.encode('utf-8')) > 72:
        return False, "Password must be at most 72 bytes long"

    return True, ""


def validate_full_name(full_name: str) -> tuple[bool, str]:
    """Validate full name.

    Returns: (is_valid, error_message)
    """
    if not full_name:
        return False, "Name is required"

    if len(full_name) < 2:
        return False, "Name must be at least 2 characters"

    if len(full_name) > 100:
        return False, "Name must be less than 100 characters"

    return True, ""


def validate_otp(otp: str) -> tuple[bool, str]:
    """Validate OTP shape (six digits).

    Returns: (is_valid, error_message)
    """
    if not otp:
        return False, "OTP is required"

    if not re.match(r'^\d{6}$', otp):
        return False, "OTP must be 6 digits"

    return True, ""


def validate_limit(raw_limit, default: int, maximum: int) -> tuple[bool, str, int]:
    """Validate a leaderboard limit query parameter.

    Returns: (is_valid, error_message, limit)
    """
    if raw_limit is None or raw_limit == '':
        return True, "", default

    try:
        limit = int(raw_limit)
    except (TypeError, ValueError):
        return False, "Limit must be a whole number", default

    if limit < 1 or limit > maximum:
        return False, f"Limit must be between 1 and {maximum}", default

    return True, "", limit


def sanitize_input(text: str) -> str:
    """Trim surrounding whitespace and drop control characters."""
    if not isinstance(text, str):
        return ''
    return re.sub(r'[\x00-\x1f\x7f]', '', text).strip()
