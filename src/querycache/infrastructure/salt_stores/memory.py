"""In-memory salt store implementation."""


class InMemorySaltStore:
    """Process-local salt store.

    Only suitable for single-process deployments and tests; every
    process sees its own salt.
    """

    def __init__(self, initial: str | None = None) -> None:
        self._salt = initial

    async def read_salt(self) -> str | None:
        return self._salt

    async def replace_salt(self, token: str) -> None:
        self._salt = token
