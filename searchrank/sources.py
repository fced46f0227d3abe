from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

from loguru import logger
from pydantic import ValidationError

from .config import SOURCES_PATH, SourceConfig


class SourceConfigError(ValueError):
    """Raised when the sources file exists but cannot be used."""


def load_sources(path: Path = SOURCES_PATH) -> List[SourceConfig]:
    """
    Load the upstream source list from a JSON file.

    Accepts either a bare list of sources or ``{"sources": [...]}``.
    A missing file means "no sources configured" and returns [].
    """
    if not path.exists():
        logger.warning("Sources file {} not found; no upstream sources configured.", path)
        return []

    logger.info("Loading upstream sources from {}", path)
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise SourceConfigError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(raw, dict):
        raw = raw.get("sources", [])
    if not isinstance(raw, list):
        raise SourceConfigError(f"Expected a list of sources in {path}, got {type(raw).__name__}")

    try:
        sources = [SourceConfig.model_validate(item) for item in raw]
    except ValidationError as e:
        raise SourceConfigError(f"Invalid source entry in {path}: {e}") from e

    keys = [s.key for s in sources]
    dupes = sorted({k for k in keys if keys.count(k) > 1})
    if dupes:
        raise SourceConfigError(f"Duplicate source keys in {path}: {', '.join(dupes)}")

    logger.info("Loaded {} upstream sources ({} disabled)", len(sources), sum(s.disabled for s in sources))
    return sources


def find_source(sources: List[SourceConfig], key: str) -> Optional[SourceConfig]:
    for s in sources:
        if s.key == key:
            return s
    return None
