
"""CLI implementation for streamsource."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import typer

from . import summarize, summarize_sync
from .core.model import Result, InvalidArgumentError
from .core.source import for_fixed_size
from .core.util import iter_chunks, parse_size, result_asdict
from .io.base import DEFAULT_CHUNK_SIZE
from .io.http_async import close_global_client
from .logging import enable_stderr_logging

app = typer.Typer(add_completion=False, help="Generate fixed-size byte streams and drain stream sources.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log to stderr"),
):
    """Generate fixed-size byte streams and drain stream sources."""
    if verbose:
        enable_stderr_logging()


def iter_sources(sources: list[str]) -> list[str]:
    """Get list of sources from the arguments or stdin."""
    if sources and "-" in sources:
        # stdin mode
        return [ln.strip() for ln in sys.stdin if ln.strip()]
    return list(sources or [])


async def _batch_summarize(sources: list[str], bytes_peek: Optional[int]) -> list[Result]:
    """Asynchronously summarize a list of sources."""
    tasks = [summarize(src, bytes_peek=bytes_peek) for src in sources]
    try:
        results = await asyncio.gather(*tasks, return_exceptions=True)
    finally:
        # the shared client is bound to this event loop
        await close_global_client()
    processed_results = []
    for res in results:
        if isinstance(res, Exception):
            processed_results.append(Result(success=False, data=None, error=str(res), bytes_read=0))
        else:
            processed_results.append(res)
    return processed_results


@app.command()
def generate(
    fill: str = typer.Argument(..., help="Single character to repeat"),
    size: str = typer.Argument(..., help="Number of bytes, e.g. 54321, 10kb, 1.5mb"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
    chunk_size: int = typer.Option(DEFAULT_CHUNK_SIZE, "--chunk-size", min=1, help="Bytes per write"),
):
    """Write SIZE copies of FILL."""
    n = parse_size(size)
    if n is None:
        raise typer.BadParameter(f"Bad size: {size}", param_hint="SIZE")

    try:
        stream = for_fixed_size(fill, n).get_stream()
    except InvalidArgumentError as e:
        typer.echo(f"Invalid argument: {e}", err=True)
        raise typer.Exit(code=1)

    sink = open(output, "wb") if output else sys.stdout.buffer
    try:
        for chunk in iter_chunks(stream, chunk_size):
            sink.write(chunk)
        sink.flush()
    finally:
        if output:
            sink.close()


@app.command()
def fetch(
    sources: list[str] = typer.Argument(None, help="Files or URLs to drain, or '-' for stdin"),
    bytes: Optional[int] = typer.Option(None, "--bytes", min=0, help="Peek first N bytes (Base64)"),
    fields: Optional[str] = typer.Option(None, "--fields", help="Comma-separated subset of keys to emit"),
    jsonl: bool = typer.Option(False, "--jsonl", help="Force JSON-lines output"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
    sync: bool = typer.Option(False, "--sync", help="Force synchronous I/O"),
):
    """Read each source to the end and report its size and sha256."""
    sel_fields = set(fields.split(",")) if fields else None
    sources = iter_sources(sources)

    if not sources:
        typer.echo("No input sources given.", err=True)
        raise typer.Exit(code=1)

    results: list[Result] = []
    if sync:
        for src in sources:
            try:
                res = summarize_sync(src, bytes_peek=bytes)
            except Exception as e:
                res = Result(success=False, data=None, error=str(e), bytes_read=0)
            results.append(res)
    else:
        results = asyncio.run(_batch_summarize(sources, bytes))

    # open output sink
    sink = open(output, "w", encoding="utf-8") if output else sys.stdout
    try:
        if len(sources) == 1 and not jsonl:
            obj = result_asdict(results[0], fields=sel_fields)
            json.dump(obj, sink, indent=2)
            sink.write("\n")
        else:
            for res in results:
                obj = result_asdict(res, fields=sel_fields)
                sink.write(json.dumps(obj))
                sink.write("\n")
    finally:
        if output:
            sink.close()

    if any(not r.success for r in results):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
