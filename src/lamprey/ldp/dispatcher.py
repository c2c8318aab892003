import logging
from typing import Optional

from werkzeug import Request

from lamprey.ldp.context import LDPResponse, RequestContext
from lamprey.ldp.errors import MethodNotAllowed
from lamprey.ldp.handlers import HANDLERS, Handler, allowed_methods
from lamprey.ldp.resources import Resource

logger = logging.getLogger(__name__)


def find_handler(resource: Resource, method: str) -> Optional[Handler]:
    """Look up the handler for `method` (in any case) in the table for the
    resource's kind. Returns `None` if there is no such handler."""
    return HANDLERS[resource.kind].get(method.lower())


def dispatch(
        resource: Resource,
        method: str,
        status: int,
        headers: dict[str, str],
        request: Optional[Request] = None,
        default_content_type: Optional[str] = None,
) -> LDPResponse:
    """Build the response to an HTTP `method` request on `resource`, starting
    from the `status` and `headers` produced so far.

    For example, a `GET` returns `(status, headers, resource)`, leaving the
    resource to be turned into a response body further out in the pipeline,
    while a `HEAD` returns the same status and headers with an empty body.

    Raises `MethodNotAllowed` if, and only if, the resource's kind has no
    handler for `method`. Errors raised by the handler itself propagate
    unchanged. Handlers that read a request body raise `BadRequest` when
    `request` is `None`.

    `default_content_type` is the RDF media type a `HEAD` reports when the
    client expresses no preference; it should match the `ContentNegotiation`
    default so that `HEAD` and `GET` agree."""
    handler = find_handler(resource, method)
    if handler is None:
        logger.info(f'No {method} handler for {resource.kind} {resource}')
        raise MethodNotAllowed(method, allowed=allowed_methods(resource.kind))

    logger.debug(f'Dispatching {method} {resource} to {handler.__name__}')
    ctx = RequestContext.from_request(
        method=method,
        status=status,
        headers=headers,
        request=request,
        default_content_type=default_content_type,
    )
    return handler(resource, ctx)
