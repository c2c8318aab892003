"""Linked Data Platform protocol core: resource kinds, interaction model
resolution, method dispatch, and the middleware pipeline.

See the [LDP specification](https://www.w3.org/TR/ldp/)."""

from lamprey.ldp.context import LDPResponse, RequestContext
from lamprey.ldp.dispatcher import dispatch
from lamprey.ldp.errors import (
    BadRequest,
    Conflict,
    Gone,
    MethodNotAllowed,
    NotAcceptable,
    NotFound,
    PreconditionFailed,
    RequestError,
    UnsupportedMediaType,
)
from lamprey.ldp.kinds import ResourceKind, interaction_model, resolve
from lamprey.ldp.links import Link, parse_link_header
from lamprey.ldp.middleware import ContentNegotiation, Errors, Pipeline, Requests, Responses
from lamprey.ldp.resources import Resource

__all__ = [
    'BadRequest',
    'Conflict',
    'ContentNegotiation',
    'Errors',
    'Gone',
    'LDPResponse',
    'Link',
    'MethodNotAllowed',
    'NotAcceptable',
    'NotFound',
    'Pipeline',
    'PreconditionFailed',
    'RequestContext',
    'RequestError',
    'Requests',
    'Resource',
    'ResourceKind',
    'Responses',
    'UnsupportedMediaType',
    'dispatch',
    'interaction_model',
    'parse_link_header',
    'resolve',
]
