"""Pipeline stages that apply the LDP protocol around an application that
answers requests with `LDPResponse(status, headers, body)` triples whose
body may be a `Resource`.

Responses whose body is not a `Resource` are passed along unchanged, so an
application may mix LDP resources with other kinds of responses.

The recommended order, outermost first, is `ContentNegotiation`,
`Errors`, `Responses`, `Requests`:

```python
pipeline = Pipeline(app, stages=[
    ContentNegotiation(default='text/turtle'),
    Errors(),
    Responses(),
    Requests(),
])
status, headers, body = pipeline(request)
```
"""

import logging
from functools import partial
from http import HTTPStatus
from typing import Callable, Optional, Sequence

from rdflib import Graph
from werkzeug import Request

from lamprey.ldp.conneg import DEFAULT_CONTENT_TYPE, RDF_SERIALIZERS, negotiate, serialize
from lamprey.ldp.context import LDPResponse
from lamprey.ldp.dispatcher import dispatch
from lamprey.ldp.errors import RequestError
from lamprey.ldp.resources import Resource

logger = logging.getLogger(__name__)

Application = Callable[[Request], LDPResponse]
Stage = Callable[[Request, Application], LDPResponse]


class Errors:
    """Turns a `RequestError` raised further in into an error response
    whose body is the error message. Any other exception propagates."""

    def __call__(self, request: Request, app: Application) -> LDPResponse:
        try:
            return app(request)
        except RequestError as e:
            logger.warning(f'{request.method} {request.path}: {int(e.status)} {e}')
            return LDPResponse(int(e.status), e.headers, [e.message])


class Responses:
    """Replaces a `Resource` body with the resource's own response body."""

    def __call__(self, request: Request, app: Application) -> LDPResponse:
        status, headers, body = app(request)
        if isinstance(body, Resource):
            resource = body
            body = resource.to_response()
            if callable(getattr(resource, 'close', None)):
                resource.close()
        return LDPResponse(status, headers, body)


class Requests:
    """Sends the request to the `Resource` returned by the application,
    and responds with whatever that resource does for the request method. The
    `default_content_type` is passed on to the handlers."""

    def __init__(self, default_content_type: Optional[str] = None):
        self.default_content_type = default_content_type

    def __call__(self, request: Request, app: Application) -> LDPResponse:
        status, headers, body = app(request)
        if not isinstance(body, Resource):
            return LDPResponse(status, headers, body)
        return dispatch(body, request.method, status, headers, request, self.default_content_type)


class ContentNegotiation:
    """Serializes `rdflib.Graph` bodies in the RDF format that best matches
    the request's `Accept` header. When the client expresses no preference,
    the `default` media type is used, which unless configured otherwise is
    `text/turtle`. If no available format is acceptable, responds with
    `406 Not Acceptable` instead."""

    def __init__(self, default: Optional[str] = None):
        self.default = default or DEFAULT_CONTENT_TYPE
        if self.default not in RDF_SERIALIZERS:
            raise ValueError(f'No RDF serializer for default content type "{self.default}"')

    def __call__(self, request: Request, app: Application) -> LDPResponse:
        status, headers, body = app(request)
        if not isinstance(body, Graph):
            return LDPResponse(status, headers, body)

        content_type = negotiate(request.accept_mimetypes, default=self.default)
        if content_type is None:
            logger.warning(f'No acceptable serialization for "Accept: {request.headers.get("Accept")}"')
            available = ', '.join(RDF_SERIALIZERS)
            return LDPResponse(
                HTTPStatus.NOT_ACCEPTABLE,
                {'Content-Type': 'text/plain'},
                [f'Not Acceptable; available types are {available}'],
            )

        headers['Content-Type'] = content_type
        headers['Vary'] = 'Accept'
        return LDPResponse(status, headers, [serialize(body, content_type)])


def default_stages(default_content_type: Optional[str] = None) -> list[Stage]:
    return [
        ContentNegotiation(default=default_content_type),
        Errors(),
        Responses(),
        Requests(default_content_type=default_content_type),
    ]


class Pipeline:
    """An application wrapped in an ordered list of stages, outermost first.
    Each stage is called with the request and the rest of the pipeline."""

    def __init__(self, app: Application, stages: Optional[Sequence[Stage]] = None):
        self.app = app
        self.stages: tuple[Stage, ...] = tuple(stages if stages is not None else default_stages())
        handler = app
        for stage in reversed(self.stages):
            handler = partial(stage, app=handler)
        self._handler: Application = handler

    def __call__(self, request: Request) -> LDPResponse:
        return self._handler(request)
