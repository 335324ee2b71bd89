from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(slots=True)
class Result:
    success: bool
    data: Dict[str, Any] | None
    error: str | None
    bytes_read: int            # filled by whoever drained the stream


class InvalidArgumentError(ValueError):
    """Raised when a stream is constructed with a bad size or fill byte."""
    pass


class SourceUnavailableError(IOError):
    """Raised when a file or URL source cannot produce a stream."""
    pass
