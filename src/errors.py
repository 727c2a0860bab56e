from __future__ import annotations


class SubmissionError(Exception):
    """Base class for errors raised while decoding or storing a submission."""


class MalformedRequest(SubmissionError):
    """The request cannot be decoded: bad Content-Type, no boundary or no parts."""


class MalformedPart(MalformedRequest):
    """A single multipart section has no header/body separator."""


class PayloadTooLarge(SubmissionError):
    """The request body exceeds the configured limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Request body of {size} bytes exceeds limit of {limit} bytes")
        self.size = size
        self.limit = limit


class SubmissionWriteError(SubmissionError):
    """Creating the submission folder or one of its files failed."""


__all__ = [
    "SubmissionError",
    "MalformedRequest",
    "MalformedPart",
    "PayloadTooLarge",
    "SubmissionWriteError",
]
