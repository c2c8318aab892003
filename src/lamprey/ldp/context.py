from dataclasses import dataclass, field
from typing import Any, NamedTuple, Optional

from werkzeug import Request

from lamprey.ldp.conneg import DEFAULT_CONTENT_TYPE
from lamprey.ldp.errors import BadRequest
from lamprey.ldp.links import Link, parse_link_header


class LDPResponse(NamedTuple):
    """The `(status, headers, body)` triple passed between pipeline stages.
    The body is either an iterable of `str`/`bytes` chunks, an `rdflib.Graph`
    awaiting serialization, or a `lamprey.ldp.resources.Resource` awaiting
    dispatch."""
    status: int
    headers: dict[str, str]
    body: Any


@dataclass
class RequestContext:
    """State threaded through a single dispatch. Handlers may change
    `status` and mutate `headers` in place before producing the response.
    `default_content_type` is the RDF media type used when the client
    expresses no preference."""

    method: str
    status: int
    headers: dict[str, str]
    request: Optional[Request] = None
    links: list[Link] = field(default_factory=list)
    default_content_type: str = DEFAULT_CONTENT_TYPE

    @classmethod
    def from_request(
            cls,
            method: str,
            status: int,
            headers: dict[str, str],
            request: Optional[Request],
            default_content_type: Optional[str] = None,
    ) -> 'RequestContext':
        links = parse_link_header(request.headers.getlist('Link')) if request is not None else []
        return cls(
            method=method,
            status=status,
            headers=headers,
            request=request,
            links=links,
            default_content_type=default_content_type or DEFAULT_CONTENT_TYPE,
        )

    def response(self, body: Any = None) -> LDPResponse:
        return LDPResponse(self.status, self.headers, [] if body is None else body)

    def require_request(self) -> Request:
        """The request a handler reads its body or headers from. Raises
        `BadRequest` when the dispatch was made without one."""
        if self.request is None:
            raise BadRequest(f'A {self.method} needs a request to read from')
        return self.request
