from __future__ import annotations
import re
from typing import Any, BinaryIO, Dict, Iterable, Iterator
from .model import Result

_SIZE_RE = re.compile(r'^(\d+(?:\.\d+)?)\s*(b|kb|mb|gb|tb)?$')
_MULTIPLIERS = {'b': 1, 'kb': 1024, 'mb': 1024**2, 'gb': 1024**3, 'tb': 1024**4}


def parse_size(s: str) -> int | None:
    """Parse '54321', '10kb' or '1.5mb' into bytes; None if unparseable."""
    m = _SIZE_RE.match(s.strip().lower())
    if not m:
        return None
    num = float(m.group(1))
    unit = m.group(2) or 'b'
    return int(num * _MULTIPLIERS[unit])


def iter_chunks(stream: BinaryIO, chunk_size: int) -> Iterator[bytes]:
    """Yield successive reads from `stream` until it returns b''."""
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            return
        yield chunk


def read_all(stream: BinaryIO, chunk_size: int = 64 * 1024) -> bytes:
    return b"".join(iter_chunks(stream, chunk_size))


def result_asdict(res: Result, *, fields: Iterable[str] | None = None) -> Dict[str, Any]:
    """Return a JSON-serialisable dict (skip None) optionally filtered."""
    if not res.success or res.data is None:
        return {"success": False, "error": res.error, "bytes_read": res.bytes_read}
    payload = {k: v for k, v in res.data.items() if v is not None}
    if fields:
        wanted = set(fields)
        payload = {k: v for k, v in payload.items() if k in wanted}
    payload.update({"success": True, "bytes_read": res.bytes_read})
    return payload
