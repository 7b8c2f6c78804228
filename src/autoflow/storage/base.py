"""Shared Redis plumbing for the stores."""
import redis

from autoflow.config import get_settings


class RedisStore:
    """Base for Redis-backed stores."""

    def __init__(self, redis_client: redis.Redis | None = None):
        """
        Initialize store.

        Args:
            redis_client: Optional Redis client (will create one if not provided)
        """
        if redis_client is None:
            settings = get_settings()
            self.redis_client = redis.from_url(
                settings.redis_url,
                decode_responses=True,
            )
        else:
            self.redis_client = redis_client
