"""Shared test fixtures for the Campus Vote API."""

import pytest
from unittest.mock import patch
import mongomock


class TestingConfig:
    """Testing configuration with mocked MongoDB."""
    SECRET_KEY = 'test-secret-key-for-testing-only'
    TESTING = True
    DEBUG = True
    MONGODB_URI = 'mongodb://localhost:27017/'
    DATABASE_NAME = 'test_campus_vote'
    STORE_TIMEOUT_MS = 1000
    PORT = 5000

    # bcrypt - use fewer rounds for faster tests
    BCRYPT_LOG_ROUNDS = 4

    SIGNUP_REQUIRE_OTP = True
    OTP_TTL_SECONDS = 300
    TOKEN_MAX_AGE_SECONDS = 3600
    DEFAULT_AVATAR_URL = 'https://via.placeholder.com/100'

    LEADERBOARD_LIMIT = 5
    LEADERBOARD_MAX_LIMIT = 50
    PROFESSOR_CACHE_TTL_SECONDS = 300

    # Disable rate limiting for most tests
    RATE_LIMIT_ENABLED = False
    RATE_LIMIT_MAX_ATTEMPTS = 5
    RATE_LIMIT_WINDOW_SECONDS = 300
    RATE_LIMIT_LOCKOUT_SECONDS = 900

    # Mail is "enabled" but Flask-Mail suppresses delivery while TESTING
    MAIL_ENABLED = True
    MAIL_SUPPRESS_SEND = True
    MAIL_SERVER = 'localhost'
    MAIL_PORT = 25
    MAIL_USE_TLS = False
    MAIL_USE_SSL = False
    MAIL_USERNAME = None
    MAIL_PASSWORD = None
    MAIL_DEFAULT_SENDER = 'test@test.com'
    MAIL_TIMEOUT_SECONDS = 5


@pytest.fixture
def config_class():
    return TestingConfig


@pytest.fixture
def mock_mongo_client():
    """Create a mock MongoDB client using mongomock."""
    return mongomock.MongoClient()


@pytest.fixture
def app(mock_mongo_client):
    """Create and configure a test application instance."""
    # Patch MongoClient before the store connects
    with patch('campusvote.store.MongoClient', return_value=mock_mongo_client):
        from campusvote import create_app, shutdown_app

        test_app = create_app(TestingConfig)

    yield test_app

    shutdown_app(test_app)


@pytest.fixture
def client(app):
    """Create a test client for the application."""
    return app.test_client()


@pytest.fixture
def services(app):
    """Services wired by the application factory."""
    from campusvote import EXTENSION_KEY
    return app.extensions[EXTENSION_KEY]


@pytest.fixture
def db(services):
    """The indexed test database (fresh per test)."""
    return services.store.db


@pytest.fixture
def sent_codes():
    """Outbox for OtpService: list of (email, code) tuples."""
    return []


@pytest.fixture
def otp_service(db, sent_codes):
    """OTP service whose mail delivery just records the code."""
    from campusvote.services.otp_service import OtpService

    return OtpService(db, send_code=lambda email, code: sent_codes.append((email, code)),
                      ttl_seconds=TestingConfig.OTP_TTL_SECONDS)


@pytest.fixture
def token_service():
    from campusvote.services.token_service import TokenService
    return TokenService(TestingConfig.SECRET_KEY, TestingConfig.TOKEN_MAX_AGE_SECONDS)


@pytest.fixture
def auth_service(db, otp_service, token_service):
    from campusvote.services.auth_service import AuthService

    return AuthService(
        db,
        token_service=token_service,
        otp_service=otp_service,
        require_otp=True,
        bcrypt_rounds=TestingConfig.BCRYPT_LOG_ROUNDS,
        default_image_url=TestingConfig.DEFAULT_AVATAR_URL
    )


@pytest.fixture
def vote_service(db):
    from campusvote.services.vote_service import VoteService
    return VoteService(db)


@pytest.fixture
def test_student_credentials():
    """Test student signup credentials."""
    return {
        'name': 'Test Student',
        'email': 'student@college.edu',
        'password': 'TestPass123!'
    }


@pytest.fixture
def registered_student(auth_service, otp_service, sent_codes, test_student_credentials):
    """Create a registered student through the OTP signup flow."""
    otp_service.request_otp(test_student_credentials['email'])
    _, code = sent_codes[-1]

    auth_service.signup(otp=code, **test_student_credentials)
    return test_student_credentials


@pytest.fixture
def test_candidates(db):
    """Four candidates inserted in order A, B, C, D."""
    from campusvote.models.candidate import Candidate

    return [
        Candidate.create(db, enrollment_number='CAND-A', name='Candidate A'),
        Candidate.create(db, enrollment_number='CAND-B', name='Candidate B'),
        Candidate.create(db, enrollment_number='CAND-C', name='Candidate C'),
        Candidate.create(db, enrollment_number='CAND-D', name='Candidate D'),
    ]
