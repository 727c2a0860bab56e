from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_CONTENT_TYPE = "application/octet-stream"


class FileAttachment(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str = ""
    filename: str
    content_type: str = DEFAULT_CONTENT_TYPE
    content: bytes = b""


class Submission(BaseModel):
    """Decoded form: text fields in arrival order plus file attachments."""

    model_config = ConfigDict(frozen=True)

    fields: Dict[str, str] = Field(default_factory=dict)
    files: List[FileAttachment] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.fields and not self.files
