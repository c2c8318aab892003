"""LDP resource kinds, what each kind can do, and how a requested
interaction model is chosen when a resource is created."""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Iterable, NamedTuple

from rdflib import URIRef

from lamprey.ldp.errors import NotAcceptable
from lamprey.ldp.links import Link, type_uris
from lamprey.namespaces import ldp

logger = logging.getLogger(__name__)


class ResourceKind(Enum):
    RESOURCE = 'Resource'
    RDF_SOURCE = 'RDFSource'
    CONTAINER = 'Container'
    DIRECT_CONTAINER = 'DirectContainer'
    INDIRECT_CONTAINER = 'IndirectContainer'
    NON_RDF_SOURCE = 'NonRDFSource'

    def __str__(self):
        return self.value

    @property
    def capabilities(self) -> 'Capabilities':
        return CAPABILITIES[self]

    @property
    def is_ldp_resource(self) -> bool:
        return self.capabilities.ldp_resource

    @property
    def is_container(self) -> bool:
        return self.capabilities.container

    @property
    def is_rdf_source(self) -> bool:
        return self.capabilities.rdf_source

    @property
    def is_non_rdf_source(self) -> bool:
        return self.capabilities.non_rdf_source

    @property
    def type_uris(self) -> tuple[URIRef, ...]:
        """LDP types advertised in `Link: <...>; rel="type"` response headers."""
        return TYPE_URIS[self]


class Capabilities(NamedTuple):
    ldp_resource: bool
    container: bool
    rdf_source: bool
    non_rdf_source: bool


CAPABILITIES = MappingProxyType({
    ResourceKind.RESOURCE: Capabilities(True, False, False, False),
    ResourceKind.RDF_SOURCE: Capabilities(True, False, True, False),
    ResourceKind.CONTAINER: Capabilities(True, True, True, False),
    ResourceKind.DIRECT_CONTAINER: Capabilities(True, True, True, False),
    ResourceKind.INDIRECT_CONTAINER: Capabilities(True, True, True, False),
    ResourceKind.NON_RDF_SOURCE: Capabilities(True, False, False, True),
})

TYPE_URIS = MappingProxyType({
    ResourceKind.RESOURCE: (ldp.Resource,),
    ResourceKind.RDF_SOURCE: (ldp.Resource, ldp.RDFSource),
    ResourceKind.CONTAINER: (ldp.Resource, ldp.RDFSource, ldp.Container, ldp.BasicContainer),
    ResourceKind.DIRECT_CONTAINER: (ldp.Resource, ldp.RDFSource, ldp.Container, ldp.DirectContainer),
    ResourceKind.INDIRECT_CONTAINER: (ldp.Resource, ldp.RDFSource, ldp.Container, ldp.IndirectContainer),
    ResourceKind.NON_RDF_SOURCE: (ldp.Resource, ldp.NonRDFSource),
})

# Listed in ascending order of preference: when a client asks for several
# interaction models at once, the last one in this list that it asked for wins.
INTERACTION_MODELS: tuple[tuple[URIRef, ResourceKind], ...] = (
    (ldp.Resource, ResourceKind.RDF_SOURCE),
    (ldp.RDFSource, ResourceKind.RDF_SOURCE),
    (ldp.Container, ResourceKind.CONTAINER),
    (ldp.BasicContainer, ResourceKind.CONTAINER),
    (ldp.DirectContainer, ResourceKind.DIRECT_CONTAINER),
    (ldp.IndirectContainer, ResourceKind.INDIRECT_CONTAINER),
    (ldp.NonRDFSource, ResourceKind.NON_RDF_SOURCE),
)

# cannot be requested together with ldp:NonRDFSource
RDF_BEARING_MODELS = frozenset({
    ldp.RDFSource,
    ldp.Container,
    ldp.BasicContainer,
    ldp.DirectContainer,
    ldp.IndirectContainer,
})

DEFAULT_KIND = ResourceKind.RDF_SOURCE

LDP_TYPE_URIS = frozenset(uri for uri, _ in INTERACTION_MODELS)


def resolve(uris: Iterable[str]) -> ResourceKind:
    """Choose the kind of resource to create, given the interaction model
    URIs a client requested:

    * no requested URIs gives an `RDFSource`;
    * when more than one recognized URI is requested, the most specific
      one wins, so `ldp:Resource` plus `ldp:BasicContainer` gives a `Container`;
    * unrecognized URIs are ignored;
    * `ldp:NonRDFSource` together with any RDF-bearing type raises
      `NotAcceptable`.

    URIs are compared as exact, case-sensitive strings."""
    requested = {URIRef(str(uri)) for uri in uris}

    for uri, kind in reversed(INTERACTION_MODELS):
        if uri in requested:
            break
    else:
        return DEFAULT_KIND

    if kind is ResourceKind.NON_RDF_SOURCE:
        conflicts = requested & RDF_BEARING_MODELS
        if conflicts:
            raise NotAcceptable(
                f'Cannot create a resource that is both an {ldp.NonRDFSource} '
                f'and an {", ".join(sorted(conflicts))}'
            )

    return kind


def interaction_model(links: Iterable[Link]) -> ResourceKind:
    """Resolve the kind requested by the `rel="type"` entries of a parsed
    `Link` header."""
    kind = resolve(type_uris(links))
    logger.debug(f'Resolved interaction model {kind}')
    return kind
