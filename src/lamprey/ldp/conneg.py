"""Media types for RDF request and response bodies, and the choice between
them. The actual parsing and serialization is done by `rdflib`."""

import logging
from types import MappingProxyType
from typing import Optional

from rdflib import Graph
from werkzeug.datastructures import MIMEAccept

from lamprey.ldp.errors import BadRequest, UnsupportedMediaType
from lamprey.ldp.resources import new_graph

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = 'text/turtle'

# media type -> rdflib serializer name, in order of server preference
RDF_SERIALIZERS = MappingProxyType({
    'text/turtle': 'turtle',
    'application/ld+json': 'json-ld',
    'application/n-triples': 'nt',
    'application/rdf+xml': 'xml',
    'text/n3': 'n3',
})

# media type -> rdflib parser name; N-Triples is a subset of Turtle, so
# plain text bodies are read as Turtle
RDF_PARSERS = MappingProxyType({
    **RDF_SERIALIZERS,
    'text/plain': 'turtle',
})

SPARQL_UPDATE = 'application/sparql-update'


def mimetype(content_type: Optional[str]) -> Optional[str]:
    """Strip parameters from a `Content-Type` value and lowercase it:

    ```pycon
    >>> mimetype('text/turtle; charset=utf-8')
    'text/turtle'
    ```
    """
    if not content_type:
        return None
    return content_type.split(';', 1)[0].strip().lower()


def is_rdf(content_type: Optional[str]) -> bool:
    return mimetype(content_type) in RDF_PARSERS


def negotiate(accept: MIMEAccept, default: str = DEFAULT_CONTENT_TYPE) -> Optional[str]:
    """Pick the RDF media type to serialize a response as. With no `Accept`
    header (or only `*/*`) this is `default`. Returns `None` if none of the
    available serializations is acceptable."""
    if not accept:
        return default
    offers = [default] + [t for t in RDF_SERIALIZERS if t != default]
    return accept.best_match(offers)


def serialize(graph: Graph, content_type: str) -> bytes:
    return graph.serialize(format=RDF_SERIALIZERS[content_type], encoding='utf-8')


def parse_graph(data: bytes, content_type: Optional[str], base: str) -> Graph:
    """Parse a request body into a new graph. Relative URIs in the body
    (including `<>`) are resolved against `base`.

    Raises `UnsupportedMediaType` for non-RDF media types and `BadRequest`
    if `rdflib` cannot parse the body."""
    media_type = mimetype(content_type)
    if media_type not in RDF_PARSERS:
        raise UnsupportedMediaType(
            f'Cannot read RDF from a "{media_type}" request body',
            headers={'Accept-Post': ', '.join(RDF_PARSERS)},
        )
    graph = new_graph()
    if not data:
        return graph
    try:
        graph.parse(data=data, format=RDF_PARSERS[media_type], publicID=base)
    except Exception as e:
        logger.warning(f'Unable to parse {media_type} request body for {base}: {e}')
        raise BadRequest(f'Unable to parse {media_type} request body: {e}') from e
    return graph
