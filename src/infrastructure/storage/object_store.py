"""Attachment storage."""

import asyncio
import logging
import re
from pathlib import Path
from typing import Protocol
from uuid import uuid4

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class IObjectStore(Protocol):
    """Protocol for storing uploaded files and handing back a URL."""

    async def put(self, filename: str, content: bytes, content_type: str | None = None) -> str:
        """Store ``content`` and return the URL it can be fetched from."""
        ...


def safe_filename(filename: str) -> str:
    """Strip directories and unsafe characters from a client-supplied name."""
    name = Path(filename or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "file"


class LocalObjectStore:
    """Store files in a local directory served as static files."""

    def __init__(self, root: str | Path, url_prefix: str = "/uploads") -> None:
        self._root = Path(root)
        self._url_prefix = url_prefix.rstrip("/")

    @property
    def root(self) -> Path:
        """Directory files are written to."""
        return self._root

    async def put(self, filename: str, content: bytes, content_type: str | None = None) -> str:
        """Write the file under a unique key and return its public URL."""
        key = f"{uuid4().hex}-{safe_filename(filename)}"
        await asyncio.to_thread(self._write, key, content)
        logger.info("attachment_stored: key=%s size=%d type=%s", key, len(content), content_type)
        return f"{self._url_prefix}/{key}"

    def _write(self, key: str, content: bytes) -> None:
        self._root.mkdir(parents=True, exist_ok=True)
        (self._root / key).write_bytes(content)
