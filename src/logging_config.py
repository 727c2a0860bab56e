from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List

import yaml


FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

DEFAULTS: Dict[str, Any] = {
    "level": "INFO",
    "file": None,
    "max_bytes": 1024 * 1024,
    "backup_count": 3,
    "format": FORMAT,
}


def load_logging_options(config_path: str | Path | None) -> Dict[str, Any]:
    """Read the ``logging`` section of a YAML file on top of :data:`DEFAULTS`.

    A missing file yields the defaults unchanged.
    """
    options = dict(DEFAULTS)
    if not config_path:
        return options
    try:
        with open(Path(config_path), encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except FileNotFoundError:
        return options
    section = data.get("logging") if isinstance(data, dict) else None
    if isinstance(section, dict):
        options.update({k: v for k, v in section.items() if k in DEFAULTS})
    return options


def setup_logging(
    level: str,
    log_file: Path | str | None,
    *,
    max_bytes: int = DEFAULTS["max_bytes"],
    backup_count: int = DEFAULTS["backup_count"],
    fmt: str = FORMAT,
) -> None:
    """Configure logging for console and optional file output.

    Parameters
    ----------
    level:
        Log level name (e.g., "INFO", "DEBUG").
    log_file:
        If provided, logs are also written to this file, rotated once it
        grows past ``max_bytes``.
    """
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(log_path, maxBytes=int(max_bytes), backupCount=int(backup_count))
        )

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=fmt,
        handlers=handlers,
        force=True,
    )


def configure_from_settings(settings) -> None:
    """Apply YAML logging options, letting explicit settings take priority."""
    options = load_logging_options(settings.logging_config)
    level = settings.log_level or options["level"]
    log_file = settings.log_file or options["file"]
    setup_logging(
        level,
        log_file,
        max_bytes=options["max_bytes"],
        backup_count=options["backup_count"],
        fmt=options["format"],
    )
