"""Helpers for configuring consistent project logging output."""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOG_LEVEL_ENV = "YOMITAN_AUDIO_LOG_LEVEL"

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_CONFIGURED = False


def _resolve_level(level: Union[str, int, None]) -> int:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    try:
        return int(level)
    except (TypeError, ValueError):
        normalized = str(level).strip().upper()
        resolved = getattr(logging, normalized, logging.INFO)
        return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Optional[Union[str, int]] = None, *, force: bool = False) -> None:
    """Initialise root logging handlers for the application.

    The level comes from ``level`` when given, otherwise from the
    ``YOMITAN_AUDIO_LOG_LEVEL`` environment variable, defaulting to ``INFO``.
    Repeated calls are no-ops unless ``force`` is set.
    """

    global _CONFIGURED

    if _CONFIGURED and not force:
        return

    env_level = os.environ.get(LOG_LEVEL_ENV)
    resolved_level = _resolve_level(level if level is not None else env_level)

    logging.basicConfig(level=resolved_level, format=_DEFAULT_FORMAT, force=force)
    logging.getLogger("yomitan_audio").setLevel(resolved_level)
    _CONFIGURED = True


__all__ = ["LOG_LEVEL_ENV", "configure_logging"]
