"""Adapters between stream sources and the werkzeug handler interface."""

from .body import stream_response, source_handler
from .transform import ResponseTransformer, StaticResponseTransformer, SourceResponseTransformer
