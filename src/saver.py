from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from errors import SubmissionWriteError
from json_encoder import encode_json
from models import Submission
from utils.names import MAX_NAME_LENGTH, name_part, sanitize_filename, unique_names

logger = logging.getLogger(__name__)

JSON_FILENAME = "data.json"
TEXT_FILENAME = "data.txt"
FOLDER_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
DEFAULT_MAX_ATTEMPTS = 100


def folder_name(fields: Dict[str, str], now: datetime, tail: str = "") -> str:
    """Build ``<submitter>_<idea>_<yyyyMMdd_HHmmss><tail>`` for the given fields.

    The name prefix is shortened when needed so that the timestamp and
    *tail* survive the length limit.
    """
    submitter = sanitize_filename(name_part(fields.get("name"), "unknown"))
    idea = sanitize_filename(name_part(fields.get("ideaName"), "idea"))
    suffix = "_" + now.strftime(FOLDER_TIMESTAMP_FORMAT) + tail
    prefix = f"{submitter}_{idea}"[: MAX_NAME_LENGTH - len(suffix)]
    return prefix + suffix


def _create_folder(
    base_dir: Path, fields: Dict[str, str], now: datetime, max_attempts: int
) -> Path:
    """Create a new submission folder under *base_dir*, adding ``-2``, ``-3``... on clashes."""
    base_dir.mkdir(parents=True, exist_ok=True)
    for attempt in range(1, max_attempts + 1):
        tail = "" if attempt == 1 else f"-{attempt}"
        candidate = folder_name(fields, now, tail)
        target = base_dir / candidate
        try:
            target.mkdir()
        except FileExistsError:
            logger.debug("Folder %s already exists, trying next name", target)
            continue
        return target
    raise SubmissionWriteError(
        f"Could not create a unique folder for {folder_name(fields, now)} "
        f"after {max_attempts} attempts"
    )


def build_record(
    submission: Submission, filenames: List[str], now: datetime
) -> Dict[str, Any]:
    """Assemble the structure stored in ``data.json``."""
    record: Dict[str, Any] = {"timestamp": now.isoformat()}
    record.update(submission.fields)
    if submission.files:
        record["files"] = [
            {
                "filename": filename,
                "field": attachment.field,
                "contentType": attachment.content_type,
            }
            for attachment, filename in zip(submission.files, filenames)
        ]
    return record


def render_text(
    submission: Submission, filenames: List[str], now: datetime
) -> str:
    """Render the human-readable ``data.txt`` companion of ``data.json``."""
    lines = [f"Submission Date: {now.isoformat()}", ""]
    lines.extend(f"{key}: {value}" for key, value in submission.fields.items())
    if submission.files:
        lines.extend(["", "Submitted Files:"])
        lines.extend(
            f"- {filename} ({attachment.content_type})"
            for attachment, filename in zip(submission.files, filenames)
        )
    return "\n".join(lines) + "\n"


def store_submission(
    submission: Submission,
    base_dir: str | Path,
    *,
    now: Optional[datetime] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Path:
    """Store *submission* in a folder of its own inside *base_dir*.

    The folder receives ``data.json``, ``data.txt`` and every attachment.
    Attachments whose sanitized names collide are renamed ``stem-2.ext`` and
    so on; ``data.json`` and ``data.txt`` are never overwritten by uploads.

    Parameters
    ----------
    submission:
        Decoded form.
    base_dir:
        Directory that holds all submission folders; created when missing.
    now:
        Submission time, local ``datetime.now()`` by default.
    max_attempts:
        How many folder names to try when the preferred one already exists.

    Returns
    -------
    Path
        The created submission folder.

    Raises
    ------
    SubmissionWriteError
        When the folder or any file cannot be written. Files written before
        the failure are left in place.
    """
    now = now or datetime.now()
    name = folder_name(submission.fields, now)
    filenames = unique_names(
        (attachment.filename for attachment in submission.files),
        reserved=(JSON_FILENAME, TEXT_FILENAME),
    )

    try:
        folder = _create_folder(Path(base_dir), submission.fields, now, max_attempts)
        (folder / JSON_FILENAME).write_text(
            encode_json(build_record(submission, filenames, now)), encoding="utf-8"
        )
        (folder / TEXT_FILENAME).write_text(
            render_text(submission, filenames, now), encoding="utf-8"
        )
        for attachment, filename in zip(submission.files, filenames):
            (folder / filename).write_bytes(attachment.content)
    except (OSError, ValueError) as exc:
        logger.exception("Failed to store submission %s in %s", name, base_dir)
        raise SubmissionWriteError(f"Failed to store submission {name}: {exc}") from exc

    logger.info(
        "Stored submission %s with %d field(s) and %d file(s)",
        folder.name,
        len(submission.fields),
        len(submission.files),
    )
    return folder


__all__ = ["store_submission", "folder_name", "build_record", "render_text"]
