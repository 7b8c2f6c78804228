"""Redis-backed store of per-user third-party access tokens."""
from autoflow.storage.base import RedisStore


class CredentialStore(RedisStore):
    """
    Access tokens keyed by (user, provider).

    Written by the OAuth integration flow; the engine only reads.
    """

    _prefix = "integration:"

    def _key(self, user_id: str, provider: str) -> str:
        return f"{self._prefix}{user_id}:{provider}"

    def get_access_token(self, user_id: str, provider: str) -> str | None:
        """Stored access token, or None when the provider is not connected."""
        return self.redis_client.get(self._key(user_id, provider))

    def set_access_token(self, user_id: str, provider: str, token: str) -> None:
        self.redis_client.set(self._key(user_id, provider), token)

    def delete_access_token(self, user_id: str, provider: str) -> None:
        self.redis_client.delete(self._key(user_id, provider))


def get_credential_store() -> CredentialStore:
    """Get or create credential store instance."""
    return CredentialStore()
