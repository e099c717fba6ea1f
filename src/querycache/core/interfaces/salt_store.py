"""Invalidation salt store interface."""

from typing import Protocol


class ISaltStore(Protocol):
    """Contract for the durable store holding the invalidation salt.

    The salt is a single shared token. Replacing it changes every cache
    key derived afterwards, which is how all cached entries for writable
    content are invalidated at once.
    """

    async def read_salt(self) -> str | None:
        """Read the current salt.

        Returns:
            The salt token, or None if none has been written yet.

        Raises:
            SaltStoreUnavailableError: If the store cannot be read.
        """
        ...

    async def replace_salt(self, token: str) -> None:
        """Replace the salt wholesale; the latest writer wins.

        Args:
            token: The new salt token.

        Raises:
            SaltStoreUnavailableError: If the store cannot be written.
        """
        ...
