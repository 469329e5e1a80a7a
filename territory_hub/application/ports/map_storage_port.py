"""Port interface for storing uploaded map files."""

from abc import ABC, abstractmethod
from typing import BinaryIO


class MapStoragePort(ABC):
    @abstractmethod
    async def save(self, filename: str, content: BinaryIO) -> str:
        """Store the file and return the public URL it is served from."""
        ...

    @abstractmethod
    async def delete(self, url: str) -> bool:
        """Remove a previously stored file. Returns False if it was not ours."""
        ...
