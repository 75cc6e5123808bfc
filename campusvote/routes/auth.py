from flask import Blueprint, request, jsonify, current_app

from campusvote import get_services
from campusvote.errors import InvalidCredentials, InvalidToken
from campusvote.utils.validators import normalize_email

auth_bp = Blueprint('auth', __name__)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@auth_bp.route('/send-otp', methods=['POST'])
def send_otp():
    """Email a signup verification code."""
    services = get_services()
    email = normalize_email(_json_body().get('email'))

    # Each request counts, so one address cannot be spammed with codes
    if email:
        services.rate_limiter.check(email, 'send_otp')
        services.rate_limiter.record_attempt(email, 'send_otp', success=False)

    message = services.otp.request_otp(email)
    current_app.logger.info("Signup OTP issued")
    return jsonify({'message': message})


@auth_bp.route('/signup', methods=['POST'])
def signup():
    """Create a student account."""
    data = _json_body()
    message = get_services().auth.signup(
        name=data.get('name'),
        email=data.get('email'),
        password=data.get('password'),
        otp=data.get('otp')
    )
    return jsonify({'message': message}), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """Student login. Returns a bearer token and profile."""
    services = get_services()
    data = _json_body()
    email = normalize_email(data.get('email'))

    # Check rate limiting before attempting login
    if email:
        services.rate_limiter.check(email, 'login')

    try:
        result = services.auth.login(email, data.get('password'))
    except InvalidCredentials:
        services.rate_limiter.record_attempt(email, 'login', success=False)
        raise

    # Clear rate limit on successful login
    services.rate_limiter.record_attempt(email, 'login', success=True)
    return jsonify(result)


@auth_bp.route('/me', methods=['GET'])
def me():
    """Profile of the student holding the bearer token."""
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        raise InvalidToken()

    return jsonify(get_services().auth.current_student(token.strip()))
