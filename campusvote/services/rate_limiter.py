"""Rate limiting for login attempts and OTP requests."""
import logging
from datetime import datetime, timedelta

from campusvote.errors import TooManyAttempts

logger = logging.getLogger(__name__)


def _naive(value: datetime) -> datetime:
    # Drivers configured with tz_aware=True hand back aware datetimes
    if value is not None and value.tzinfo is not None:
        return value.replace(tzinfo=None)
    return value


class RateLimiter:
    """Rate limiter using MongoDB for persistent storage.

    Tracks attempts per (action, email). Once ``max_attempts`` land inside
    ``window_seconds`` the key is locked for ``lockout_seconds``.
    """

    collection_name = 'rate_limits'

    def __init__(self, db, enabled: bool = True, max_attempts: int = 5,
                 window_seconds: int = 300, lockout_seconds: int = 900):
        self.db = db
        self.enabled = enabled
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.lockout_seconds = lockout_seconds

    @classmethod
    def from_config(cls, db, config):
        return cls(
            db,
            enabled=config.get('RATE_LIMIT_ENABLED', True),
            max_attempts=config.get('RATE_LIMIT_MAX_ATTEMPTS', 5),
            window_seconds=config.get('RATE_LIMIT_WINDOW_SECONDS', 300),
            lockout_seconds=config.get('RATE_LIMIT_LOCKOUT_SECONDS', 900)
        )

    @staticmethod
    def _get_key(identifier: str, action: str) -> str:
        return f"{action}:{identifier}"

    def _recent_attempts(self, record: dict, now: datetime) -> list:
        window_start = now - timedelta(seconds=self.window_seconds)
        return [a for a in record.get('attempts', []) if _naive(a) > window_start]

    def check(self, identifier: str, action: str):
        """Raise TooManyAttempts if identifier is locked out for action."""
        if not self.enabled:
            return

        key = self._get_key(identifier, action)
        record = self.db[self.collection_name].find_one({'key': key})
        if not record:
            return

        now = datetime.utcnow()

        # Check if in lockout period
        locked_until = _naive(record.get('locked_until'))
        if locked_until and now < locked_until:
            minutes_remaining = max(1, int((locked_until - now).total_seconds()) // 60)
            raise TooManyAttempts(
                f'Too many attempts. Please try again in {minutes_remaining} minutes.'
            )

        if len(self._recent_attempts(record, now)) >= self.max_attempts:
            lockout_until = now + timedelta(seconds=self.lockout_seconds)
            self.db[self.collection_name].update_one(
                {'key': key},
                {'$set': {'locked_until': lockout_until}}
            )
            logger.warning(f"Rate limit triggered for {action}")
            raise TooManyAttempts(
                f'Too many attempts. Please try again in {self.lockout_seconds // 60} minutes.'
            )

    def record_attempt(self, identifier: str, action: str, success: bool = False):
        """Record an attempt. A success clears the history for the key."""
        if not self.enabled:
            return

        key = self._get_key(identifier, action)
        now = datetime.utcnow()

        if success:
            self.db[self.collection_name].delete_one({'key': key})
            return

        self.db[self.collection_name].update_one(
            {'key': key},
            {
                '$push': {
                    'attempts': {
                        '$each': [now],
                        '$slice': -self.max_attempts  # Keep only recent attempts
                    }
                },
                '$set': {'last_attempt': now},
                '$setOnInsert': {'created_at': now}
            },
            upsert=True
        )

    def attempts_remaining(self, identifier: str, action: str) -> int:
        """Number of attempts left before lockout."""
        if not self.enabled:
            return self.max_attempts

        record = self.db[self.collection_name].find_one(
            {'key': self._get_key(identifier, action)}
        )
        if not record:
            return self.max_attempts

        recent = self._recent_attempts(record, datetime.utcnow())
        return max(0, self.max_attempts - len(recent))
