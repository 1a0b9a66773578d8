"""Byte sources the import pipeline fetches statement files from."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping, Optional

from bankrec.domain.errors import NotFoundError


class ByteSource(ABC):
    """Fetch strategy returning the raw bytes of a named statement file."""

    @abstractmethod
    def fetch(self, name: str) -> bytes:
        """Return the content of ``name``.

        Raises:
            NotFoundError: If the source has no such file
        """
        pass


class FileByteSource(ByteSource):
    """Reads files from the local filesystem, optionally below a base directory."""

    def __init__(self, base_dir: Optional[str] = None):
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def fetch(self, name: str) -> bytes:
        path = self.base_dir / name if self.base_dir is not None else Path(name)
        if not path.is_file():
            raise NotFoundError(f"File not found: {path}")
        return path.read_bytes()


class StaticByteSource(ByteSource):
    """Serves fixed in-memory content, keyed by file name."""

    def __init__(self, files: Mapping[str, bytes]):
        self.files = dict(files)

    def fetch(self, name: str) -> bytes:
        try:
            return self.files[name]
        except KeyError:
            raise NotFoundError(f"File not found: {name}")
