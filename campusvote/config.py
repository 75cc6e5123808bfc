import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    MONGODB_URI = os.environ.get('MONGODB_URI') or 'mongodb://localhost:27017/'
    DATABASE_NAME = os.environ.get('DATABASE_NAME') or 'campus_vote'
    STORE_TIMEOUT_MS = int(os.environ.get('STORE_TIMEOUT_MS', 5000))
    PORT = int(os.environ.get('PORT', 5000))

    # Environment detection
    FLASK_ENV = os.environ.get('FLASK_ENV', 'development')
    DEBUG = FLASK_ENV == 'development'

    # bcrypt configuration
    BCRYPT_LOG_ROUNDS = 12

    # Signup / session configuration
    SIGNUP_REQUIRE_OTP = os.environ.get('SIGNUP_REQUIRE_OTP', 'true').lower() == 'true'
    OTP_TTL_SECONDS = 300  # Codes are valid for 5 minutes
    TOKEN_MAX_AGE_SECONDS = int(os.environ.get('TOKEN_MAX_AGE_SECONDS', 3600))
    DEFAULT_AVATAR_URL = os.environ.get('DEFAULT_AVATAR_URL', 'https://via.placeholder.com/100')

    # Lookup configuration
    LEADERBOARD_LIMIT = int(os.environ.get('LEADERBOARD_LIMIT', 5))
    LEADERBOARD_MAX_LIMIT = 50
    PROFESSOR_CACHE_TTL_SECONDS = int(os.environ.get('PROFESSOR_CACHE_TTL_SECONDS', 300))

    # Rate limiting configuration
    RATE_LIMIT_ENABLED = True
    RATE_LIMIT_MAX_ATTEMPTS = 5  # Max failed logins / OTP requests
    RATE_LIMIT_WINDOW_SECONDS = 300  # 5 minute window
    RATE_LIMIT_LOCKOUT_SECONDS = 900  # 15 minute lockout after max attempts

    # Email configuration (SMTP)
    MAIL_SERVER = os.environ.get('MAIL_SERVER', 'smtp.gmail.com')
    MAIL_PORT = int(os.environ.get('MAIL_PORT', 587))
    MAIL_USE_TLS = os.environ.get('MAIL_USE_TLS', 'true').lower() == 'true'
    MAIL_USE_SSL = os.environ.get('MAIL_USE_SSL', 'false').lower() == 'true'
    MAIL_USERNAME = os.environ.get('MAIL_USERNAME')
    MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER', 'noreply@campusvote.local')
    MAIL_ENABLED = bool(os.environ.get('MAIL_USERNAME'))
    MAIL_TIMEOUT_SECONDS = int(os.environ.get('MAIL_TIMEOUT_SECONDS', 10))
    MAIL_WORKERS = int(os.environ.get('MAIL_WORKERS', 2))


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    # No fallback: create_app refuses to start without a real key
    SECRET_KEY = os.environ.get('SECRET_KEY')


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    BCRYPT_LOG_ROUNDS = 4
    RATE_LIMIT_ENABLED = False  # Disable rate limiting in tests


def get_config():
    """Get configuration based on FLASK_ENV environment variable."""
    env = os.environ.get('FLASK_ENV', 'development')
    config_map = {
        'development': DevelopmentConfig,
        'production': ProductionConfig,
        'testing': TestingConfig
    }
    return config_map.get(env, DevelopmentConfig)
