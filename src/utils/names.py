from __future__ import annotations

import re
from pathlib import PurePath
from typing import Iterable, List, Optional

MAX_NAME_LENGTH = 120
FALLBACK_FILENAME = "file"

# Запрещённые для имён файлов символы (Windows-совместимо) и все управляющие C0
INVALID_CHARS_PATTERN = re.compile(r'[\\/:*?"<>|\x00-\x1f\x7f]+')
WHITESPACE_PATTERN = re.compile(r"\s+")


def sanitize_filename(name: Optional[str], replacement: str = "_") -> str:
    """Turn untrusted text into a safe path component.

    Runs of forbidden characters and whitespace become ``replacement`` and the
    result is cut to :data:`MAX_NAME_LENGTH` characters. ``None`` and names that
    would address the directory itself (``""``, ``.``, ``..``) map to
    :data:`FALLBACK_FILENAME`. Applying the function twice changes nothing.
    """
    if name is None:
        return FALLBACK_FILENAME
    sanitized = INVALID_CHARS_PATTERN.sub(replacement, name)
    sanitized = WHITESPACE_PATTERN.sub(replacement, sanitized)
    sanitized = sanitized[:MAX_NAME_LENGTH]
    if sanitized in {"", ".", ".."}:
        return FALLBACK_FILENAME
    return sanitized


def name_part(value: Optional[str], fallback: str) -> str:
    """Trim *value* and join its words with underscores; blank values use *fallback*."""
    text = (value or "").strip()
    if not text:
        text = fallback
    return WHITESPACE_PATTERN.sub("_", text)


def unique_names(names: Iterable[str], reserved: Iterable[str] = ()) -> List[str]:
    """Return *names* with later duplicates renamed to ``stem-2.ext``, ``stem-3.ext``...

    Names listed in *reserved* are treated as already taken.
    """
    taken = set(reserved)
    result: List[str] = []
    for name in names:
        candidate = name
        counter = 1
        while candidate in taken:
            counter += 1
            suffix = PurePath(name).suffix
            if len(suffix) + len(f"-{counter}") >= MAX_NAME_LENGTH:
                suffix = ""
            stem = name[: len(name) - len(suffix)] if suffix else name
            tail = f"-{counter}{suffix}"
            candidate = stem[: MAX_NAME_LENGTH - len(tail)] + tail
        taken.add(candidate)
        result.append(candidate)
    return result


__all__ = [
    "MAX_NAME_LENGTH",
    "FALLBACK_FILENAME",
    "sanitize_filename",
    "name_part",
    "unique_names",
]
