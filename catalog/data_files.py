"""Local JSON snapshots of the inventory and the map points."""
from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any
from urllib.error import URLError
from urllib.request import urlopen

logger = logging.getLogger(__name__)

LFS_POINTER_PREFIX = "version https://git-lfs.github.com/spec/v1"


def ensure_data_file(path: str | Path, source_url: str | None = None) -> Path:
    """Return ``path``, fetching it once from ``source_url`` when it is missing."""
    file_path = Path(path)
    if file_path.exists():
        return file_path
    if not source_url:
        raise FileNotFoundError(f"Snapshot {file_path} is missing and no source URL is configured")
    logger.info("Fetching snapshot %s from %s", file_path, source_url)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with urlopen(source_url) as response, file_path.open("wb") as handle:
            shutil.copyfileobj(response, handle)
    except (OSError, URLError) as exc:
        file_path.unlink(missing_ok=True)
        raise RuntimeError(f"Failed to fetch {source_url} -> {file_path}") from exc
    return file_path


def load_json(path: str | Path) -> Any:
    """Read a UTF-8 JSON snapshot; a Git LFS pointer reads as ``None``."""
    file_path = Path(path)
    with file_path.open("r", encoding="utf-8") as fh:
        first_line = fh.readline()
        if first_line.startswith(LFS_POINTER_PREFIX):
            logger.warning("Snapshot %s is a Git LFS pointer; real data not downloaded", file_path)
            return None
        fh.seek(0)
        return json.load(fh)


def load_snapshot(path: str | Path, source_url: str | None = None) -> Any:
    return load_json(ensure_data_file(path, source_url or None))
