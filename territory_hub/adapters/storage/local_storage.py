"""Local filesystem map storage: implements MapStoragePort.

Files are written under ``MAP_STORAGE_PATH`` and served by the app from
``MAP_PUBLIC_PREFIX`` (a StaticFiles mount).
"""

from __future__ import annotations

import logging
import re
import shutil
import time
from pathlib import Path
from typing import BinaryIO

from territory_hub.application.ports.map_storage_port import MapStoragePort
from territory_hub.config import settings

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: str) -> str:
    """Strip directories and anything outside [A-Za-z0-9._-]."""
    name = Path(filename).name.strip()
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "map"


class LocalMapStorage(MapStoragePort):
    def __init__(self, root: str | Path | None = None, public_prefix: str | None = None):
        self._root = Path(root or settings.map_storage_path)
        self._prefix = (public_prefix or settings.map_public_prefix).rstrip("/")

    async def save(self, filename: str, content: BinaryIO) -> str:
        self._root.mkdir(parents=True, exist_ok=True)
        stored_name = f"{int(time.time() * 1000)}_{safe_filename(filename)}"
        dest = self._root / stored_name
        with open(dest, "wb") as buffer:
            shutil.copyfileobj(content, buffer)
        logger.info("Stored map file %s", dest)
        return f"{self._prefix}/{stored_name}"

    async def delete(self, url: str) -> bool:
        if not url.startswith(self._prefix + "/"):
            # External link, nothing stored locally
            return False
        path = self._root / safe_filename(url[len(self._prefix) + 1:])
        if not path.exists():
            logger.warning("Map file %s already missing", path)
            return False
        path.unlink()
        logger.info("Deleted map file %s", path)
        return True
