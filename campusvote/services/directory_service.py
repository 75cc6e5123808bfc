from campusvote.errors import ValidationError, NotFound
from campusvote.models.candidate import Candidate
from campusvote.models.home_banner import HomeBanner
from campusvote.models.professor import Professor
from campusvote.utils.cache import TTLCache
from campusvote.utils.validators import validate_limit


class DirectoryService:
    """Read-only listings: candidates, professors, home banner, leaderboard."""

    PROFESSORS_CACHE_KEY = 'professors'

    def __init__(self, db, professor_cache: TTLCache = None,
                 leaderboard_limit: int = 5, leaderboard_max_limit: int = 50):
        self.db = db
        self.professor_cache = professor_cache or TTLCache(ttl_seconds=0)
        self.leaderboard_limit = leaderboard_limit
        self.leaderboard_max_limit = leaderboard_max_limit

    def list_candidates(self) -> list:
        """All candidates with their tallies, in store order."""
        return [c.to_public() for c in Candidate.get_all(self.db)]

    def list_professors(self) -> list:
        """Professor directory, served from the TTL cache."""
        return self.professor_cache.get_or_load(
            self.PROFESSORS_CACHE_KEY,
            lambda: [p.to_public() for p in Professor.get_all(self.db)]
        )

    def invalidate_professors(self):
        self.professor_cache.invalidate(self.PROFESSORS_CACHE_KEY)

    def get_home_image(self) -> dict:
        banner = HomeBanner.get(self.db)
        if not banner:
            raise NotFound("No image found")
        return {'imageUrl': banner.image_url}

    def top_candidates(self, limit=None) -> list:
        """Highest-voted candidates, ties broken by insertion order.

        Args:
            limit: Number of entries to return; the configured default if None
        """
        valid, msg, limit = validate_limit(limit, self.leaderboard_limit,
                                           self.leaderboard_max_limit)
        if not valid:
            raise ValidationError(msg)
        return [c.to_public() for c in Candidate.get_top(self.db, limit)]
