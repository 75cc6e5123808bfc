from functools import partial

from flask import Flask, current_app, jsonify
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException

from campusvote.config import get_config
from campusvote.errors import VotingError, StoreUnavailable
from campusvote.store import MongoStore
from campusvote.services.auth_service import AuthService
from campusvote.services.directory_service import DirectoryService
from campusvote.services.email_service import Mailer, send_otp_email
from campusvote.services.otp_service import OtpService
from campusvote.services.rate_limiter import RateLimiter
from campusvote.services.token_service import TokenService
from campusvote.services.vote_service import VoteService
from campusvote.utils.cache import TTLCache

EXTENSION_KEY = 'campusvote'


class Services:
    """Everything the request handlers need, built once per app."""

    def __init__(self, store, mailer, auth, otp, votes, directory, rate_limiter):
        self.store = store
        self.mailer = mailer
        self.auth = auth
        self.otp = otp
        self.votes = votes
        self.directory = directory
        self.rate_limiter = rate_limiter


def get_services() -> Services:
    """Get the services bound to the current app."""
    return current_app.extensions[EXTENSION_KEY]


def create_app(config_class=None):
    """Application factory.

    Args:
        config_class: Configuration class to use. If None, auto-detects based on FLASK_ENV.
    """
    app = Flask(__name__)

    # Use provided config or auto-detect based on environment
    if config_class is None:
        config_class = get_config()
    app.config.from_object(config_class)

    if not app.config.get('SECRET_KEY'):
        raise RuntimeError("SECRET_KEY must be set")

    # Initialize MongoDB
    store = MongoStore.from_config(app.config)
    try:
        store.connect()
        app.logger.info("Successfully connected to MongoDB")
    except StoreUnavailable as e:
        app.logger.error(str(e))
        raise RuntimeError(str(e))

    # Create indexes for collections
    store.ensure_indexes()

    mailer = Mailer(app)
    app.extensions[EXTENSION_KEY] = _build_services(app, store, mailer)

    # Register blueprints
    from campusvote.routes.auth import auth_bp
    from campusvote.routes.voter import voter_bp
    from campusvote.routes.directory import directory_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(voter_bp)
    app.register_blueprint(directory_bp)

    _register_error_handlers(app)

    @app.after_request
    def add_security_headers(response):
        """JSON API responses must not be sniffed or cached by proxies."""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers.setdefault('Cache-Control', 'no-store')
        return response

    return app


def shutdown_app(app):
    """Release the resources opened by create_app."""
    services = app.extensions.get(EXTENSION_KEY)
    if services is None:
        return
    services.mailer.shutdown()
    services.store.close()
    app.logger.info("MongoDB connection closed")


def _build_services(app, store, mailer) -> Services:
    config = app.config
    db = store.db

    tokens = TokenService(config['SECRET_KEY'], config['TOKEN_MAX_AGE_SECONDS'])
    otp = OtpService(
        db,
        send_code=partial(send_otp_email, mailer, ttl_seconds=config['OTP_TTL_SECONDS']),
        ttl_seconds=config['OTP_TTL_SECONDS']
    )
    auth = AuthService(
        db,
        token_service=tokens,
        otp_service=otp,
        require_otp=config['SIGNUP_REQUIRE_OTP'],
        bcrypt_rounds=config['BCRYPT_LOG_ROUNDS'],
        default_image_url=config['DEFAULT_AVATAR_URL']
    )
    directory = DirectoryService(
        db,
        professor_cache=TTLCache(config['PROFESSOR_CACHE_TTL_SECONDS']),
        leaderboard_limit=config['LEADERBOARD_LIMIT'],
        leaderboard_max_limit=config['LEADERBOARD_MAX_LIMIT']
    )

    return Services(
        store=store,
        mailer=mailer,
        auth=auth,
        otp=otp,
        votes=VoteService(db),
        directory=directory,
        rate_limiter=RateLimiter.from_config(db, config)
    )


def _register_error_handlers(app):
    """Every failure leaves the API as JSON with a readable message."""

    @app.errorhandler(VotingError)
    def handle_voting_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(PyMongoError)
    def handle_store_error(error):
        app.logger.error(f"Database error: {str(error)}")
        unavailable = StoreUnavailable()
        return jsonify(unavailable.to_dict()), unavailable.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'message': error.name}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        app.logger.exception("Unhandled error")
        return jsonify({'message': 'Internal server error'}), 500
