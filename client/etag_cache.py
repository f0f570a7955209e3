"""ETag bookkeeping for a single client session."""


class ETagCache:
    """Maps ``METHOD:endpoint`` keys to the last ETag seen for them."""

    def __init__(self):
        self._cache: dict[str, str] = {}

    def set(self, key: str, etag: str) -> None:
        self._cache[key] = etag

    def get(self, key: str) -> str | None:
        return self._cache.get(key)

    def delete(self, key: str) -> None:
        self._cache.pop(key, None)

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: str) -> bool:
        return key in self._cache

    @staticmethod
    def generate_key(method: str, endpoint: str) -> str:
        return f"{method.upper()}:{endpoint}"
