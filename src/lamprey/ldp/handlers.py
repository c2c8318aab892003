"""Behavior of each resource kind for each HTTP method.

Every kind gets the base `get`, `head`, and `options` behaviors. RDF
sources, containers, and non-RDF sources replace or extend these with
handlers that read and change the resource's stored state. `HANDLERS` maps
each kind to its table of lower-cased method names; a method that is not in
a kind's table is not allowed on resources of that kind."""

import logging
import re
from http import HTTPStatus
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from pyparsing import ParseException
from rdflib import Graph, URIRef
from rdflib.plugins.sparql import prepareUpdate
from werkzeug import Request
from werkzeug.http import http_date, quote_etag

from lamprey.ldp.context import LDPResponse, RequestContext
from lamprey.ldp.conneg import RDF_PARSERS, SPARQL_UPDATE, mimetype, negotiate, parse_graph
from lamprey.ldp.errors import BadRequest, Conflict, PreconditionFailed, UnsupportedMediaType
from lamprey.ldp.kinds import LDP_TYPE_URIS, ResourceKind, interaction_model
from lamprey.ldp.links import type_uris
from lamprey.ldp.resources import Resource, new_graph
from lamprey.namespaces import ldp

logger = logging.getLogger(__name__)

Handler = Callable[[Resource, RequestContext], LDPResponse]

METHOD_NAME = re.compile(r'^[a-z]+$')


def get(resource: Resource, ctx: RequestContext) -> LDPResponse:
    """Status and headers are returned as they are, with the resource itself
    as the body, to be turned into a representation further out."""
    return ctx.response(resource)


def head(resource: Resource, ctx: RequestContext) -> LDPResponse:
    return ctx.response([])


def options(resource: Resource, ctx: RequestContext) -> LDPResponse:
    ctx.headers['Allow'] = allow_header(resource.kind)
    return ctx.response([])


def add_resource_headers(resource: Resource, headers: dict[str, str]) -> dict[str, str]:
    """Add the headers describing an LDP resource: its LDP types as
    `rel="type"` links, the allowed methods, and its `ETag` and
    `Last-Modified` values. Containers also advertise `Accept-Post`,
    and RDF sources `Accept-Patch`."""
    links = [f'<{uri}>; rel="type"' for uri in resource.kind.type_uris]
    if headers.get('Link'):
        links.insert(0, headers['Link'])
    headers['Link'] = ', '.join(links)
    headers['Allow'] = allow_header(resource.kind)
    etag = resource.etag
    if etag is not None:
        headers['ETag'] = quote_etag(etag, weak=resource.is_rdf_source)
    if resource.modified is not None:
        headers['Last-Modified'] = http_date(resource.modified)
    if 'patch' in HANDLERS[resource.kind]:
        headers['Accept-Patch'] = SPARQL_UPDATE
    if 'post' in HANDLERS[resource.kind]:
        headers['Accept-Post'] = ', '.join([*RDF_PARSERS, '*/*'])
    return headers


def check_if_match(resource: Resource, request: Optional[Request]):
    if request is None:
        return
    if_match = request.if_match
    if if_match and not if_match.contains_weak(resource.etag):
        raise PreconditionFailed(f'ETag for {resource} does not match If-Match header')


def check_interaction_model(resource: Resource, ctx: RequestContext):
    """A resource keeps the kind it was created as. Raises `Conflict` if the
    request's `rel="type"` links name an LDP type that the resource does not
    have. Types it does have, such as `ldp:Resource` on any kind, are fine."""
    requested = {URIRef(uri) for uri in type_uris(ctx.links)} & LDP_TYPE_URIS
    if not requested:
        return
    interaction_model(ctx.links)
    unsupported = requested - set(resource.kind.type_uris)
    if unsupported:
        raise Conflict(
            f'Cannot change the interaction model of {resource} from {resource.kind} '
            f'to {", ".join(sorted(unsupported))}'
        )


def check_containment(resource: Resource, graph: Graph):
    """Containment triples are managed by the server. A new state for a
    container may leave them out, but if it has any they must be the
    existing ones."""
    if not resource.is_container:
        return
    proposed = set(graph.objects(resource.uri, ldp.contains))
    if proposed and proposed != resource.members:
        raise Conflict(f'Cannot change the containment triples of {resource}')


def load_body(resource: Resource, request: Request):
    """Set the initial state of a new resource from the request body."""
    if resource.is_rdf_source:
        graph = parse_graph(request.get_data(), request.content_type, base=resource.uri)
        check_containment(resource, graph)
        resource.graph = graph
    elif resource.is_non_rdf_source:
        resource.content = request.get_data()
        resource.content_type = request.content_type or 'application/octet-stream'
    else:
        raise BadRequest(f'Cannot create a resource of kind {resource.kind}')


def create(resource: Resource, ctx: RequestContext) -> LDPResponse:
    """Store a new resource, responding with `201 Created`, its `Location`,
    and the new resource as the body."""
    load_body(resource, ctx.require_request())
    resource.repo.add(resource)
    logger.info(f'Created {resource.kind} {resource}')
    ctx.status = HTTPStatus.CREATED
    ctx.headers['Location'] = str(resource.uri)
    add_resource_headers(resource, ctx.headers)
    return ctx.response(resource)


def get_rdf_source(resource: Resource, ctx: RequestContext) -> LDPResponse:
    add_resource_headers(resource, ctx.headers)
    return get(resource, ctx)


def head_rdf_source(resource: Resource, ctx: RequestContext) -> LDPResponse:
    add_resource_headers(resource, ctx.headers)
    if ctx.request is not None:
        content_type = negotiate(ctx.request.accept_mimetypes, default=ctx.default_content_type)
    else:
        content_type = ctx.default_content_type
    if content_type is not None:
        ctx.headers['Content-Type'] = content_type
    return head(resource, ctx)


def put_rdf_source(resource: Resource, ctx: RequestContext) -> LDPResponse:
    request = ctx.require_request()
    with resource.repo.lock:
        if not resource.exists:
            return create(resource, ctx)
        check_interaction_model(resource, ctx)
        check_if_match(resource, request)
        graph = parse_graph(request.get_data(), request.content_type, base=resource.uri)
        check_containment(resource, graph)
        resource.replace_graph(graph)
    logger.info(f'Replaced {resource}')
    ctx.status = HTTPStatus.OK
    add_resource_headers(resource, ctx.headers)
    return ctx.response(resource)


def patch_rdf_source(resource: Resource, ctx: RequestContext) -> LDPResponse:
    """Apply a SPARQL Update to the resource's graph."""
    request = ctx.require_request()
    if mimetype(request.content_type) != SPARQL_UPDATE:
        raise UnsupportedMediaType(
            f'PATCH requests must be {SPARQL_UPDATE}',
            headers={'Accept-Patch': SPARQL_UPDATE},
        )
    sparql_text = request.get_data(as_text=True)
    logger.debug(f'SPARQL Update Query: {sparql_text}')
    try:
        sparql_update = prepareUpdate(sparql_text, base=str(resource.uri))
    except ParseException as e:
        raise BadRequest(f'SPARQL Update Query parsing error: {e}') from e

    with resource.repo.lock:
        check_if_match(resource, request)
        # apply to a copy, so a rejected update leaves the resource as it was
        graph = new_graph(resource.graph)
        graph.update(sparql_update)
        check_containment(resource, graph)
        resource.replace_graph(graph)
    logger.info(f'Updated {resource}')
    ctx.status = HTTPStatus.NO_CONTENT
    add_resource_headers(resource, ctx.headers)
    return ctx.response([])


def delete(resource: Resource, ctx: RequestContext) -> LDPResponse:
    resource.repo.remove(resource)
    logger.info(f'Deleted {resource}')
    ctx.status = HTTPStatus.NO_CONTENT
    return ctx.response([])


def post_container(resource: Resource, ctx: RequestContext) -> LDPResponse:
    """Create a new member of this container. Its kind comes from the
    request's `rel="type"` links, and its path from the `Slug` header
    when that is usable."""
    request = ctx.require_request()
    kind = interaction_model(ctx.links)
    repo = resource.repo
    with repo.lock:
        path = repo.mint_path(resource.path, request.headers.get('Slug'))
        return create(Resource(repo, path, kind), ctx)


def get_non_rdf_source(resource: Resource, ctx: RequestContext) -> LDPResponse:
    add_resource_headers(resource, ctx.headers)
    ctx.headers['Content-Type'] = resource.content_type or 'application/octet-stream'
    return get(resource, ctx)


def head_non_rdf_source(resource: Resource, ctx: RequestContext) -> LDPResponse:
    add_resource_headers(resource, ctx.headers)
    ctx.headers['Content-Type'] = resource.content_type or 'application/octet-stream'
    return head(resource, ctx)


def put_non_rdf_source(resource: Resource, ctx: RequestContext) -> LDPResponse:
    request = ctx.require_request()
    with resource.repo.lock:
        if not resource.exists:
            return create(resource, ctx)
        check_interaction_model(resource, ctx)
        check_if_match(resource, request)
        resource.replace_content(request.get_data(), request.content_type or 'application/octet-stream')
    logger.info(f'Replaced {resource}')
    ctx.status = HTTPStatus.OK
    add_resource_headers(resource, ctx.headers)
    ctx.headers['Content-Type'] = resource.content_type
    return ctx.response(resource)


def handler_table(*tables: Mapping[str, Handler]) -> Mapping[str, Handler]:
    """Merge handler tables, later ones taking precedence, into a read-only
    mapping. Raises `ValueError` for keys that are not lower-case method
    names."""
    merged = {}
    for table in tables:
        merged.update(table)
    for method in merged:
        if not METHOD_NAME.match(method):
            raise ValueError(f'"{method}" is not a lower-case HTTP method name')
    return MappingProxyType(merged)


BASE_HANDLERS = handler_table({
    'get': get,
    'head': head,
    'options': options,
})

RDF_SOURCE_HANDLERS = handler_table(BASE_HANDLERS, {
    'get': get_rdf_source,
    'head': head_rdf_source,
    'put': put_rdf_source,
    'patch': patch_rdf_source,
    'delete': delete,
})

CONTAINER_HANDLERS = handler_table(RDF_SOURCE_HANDLERS, {
    'post': post_container,
})

NON_RDF_SOURCE_HANDLERS = handler_table(BASE_HANDLERS, {
    'get': get_non_rdf_source,
    'head': head_non_rdf_source,
    'put': put_non_rdf_source,
    'delete': delete,
})

HANDLERS: Mapping[ResourceKind, Mapping[str, Handler]] = MappingProxyType({
    ResourceKind.RESOURCE: BASE_HANDLERS,
    ResourceKind.RDF_SOURCE: RDF_SOURCE_HANDLERS,
    ResourceKind.CONTAINER: CONTAINER_HANDLERS,
    ResourceKind.DIRECT_CONTAINER: CONTAINER_HANDLERS,
    ResourceKind.INDIRECT_CONTAINER: CONTAINER_HANDLERS,
    ResourceKind.NON_RDF_SOURCE: NON_RDF_SOURCE_HANDLERS,
})

if set(HANDLERS) != set(ResourceKind):
    raise RuntimeError('Every resource kind needs a handler table')


def allowed_methods(kind: ResourceKind) -> list[str]:
    return [method.upper() for method in HANDLERS[kind]]


def allow_header(kind: ResourceKind) -> str:
    return ', '.join(allowed_methods(kind))
