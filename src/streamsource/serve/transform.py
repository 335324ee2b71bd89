"""Response transformers: handlers that replace whatever a stub would have returned."""

from abc import ABC, abstractmethod
from typing import Mapping, Optional, Union

from werkzeug import Request, Response

from .body import stream_response
from ..io.base import StreamSource


class ResponseTransformer(ABC):
    """Base class for request -> response transformers.

    Instances are callable, so they can be passed straight to
    ``RequestHandler.respond_with_handler``.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def transform(self, request: Request) -> Response:
        ...

    def __call__(self, request: Request) -> Response:
        return self.transform(request)


class StaticResponseTransformer(ResponseTransformer):
    """Ignore the request and answer with a fixed status, headers and body."""

    def __init__(self, body: Union[str, bytes], *, status: int = 200,
                 headers: Optional[Mapping[str, str]] = None):
        self.body = body
        self.status = status
        self.headers = dict(headers or {})

    def transform(self, request: Request) -> Response:
        return Response(self.body, status=self.status, headers=self.headers)


class SourceResponseTransformer(ResponseTransformer):
    """Answer every request with the body of a stream source."""

    def __init__(self, source: StreamSource, **response_kwargs):
        self.source = source
        self.response_kwargs = response_kwargs

    def transform(self, request: Request) -> Response:
        return stream_response(self.source, **self.response_kwargs)
