import logging
from datetime import datetime, timezone
from hashlib import sha1
from typing import TYPE_CHECKING, Iterable, Optional

from rdflib import Graph, URIRef
from rdflib.compare import to_isomorphic

from lamprey.ldp.kinds import ResourceKind
from lamprey.namespaces import get_manager, ldp

if TYPE_CHECKING:
    from lamprey.repo import Repository

logger = logging.getLogger(__name__)


def new_graph(triples: Iterable = ()) -> Graph:
    """Create a graph with the `lamprey.namespaces` prefixes bound, optionally
    copying in the given triples (which may be another graph)."""
    graph = Graph()
    graph.namespace_manager = get_manager(graph)
    for triple in triples:
        graph.add(triple)
    return graph


class Resource:
    """An [LDP Resource](https://www.w3.org/TR/ldp/#ldpr) of a fixed kind.

    The kind is assigned when the object is created and cannot be changed
    afterwards; the capability queries (`is_container`, `is_rdf_source`,
    `is_non_rdf_source`) are answered from it. RDF-bearing kinds keep their
    state in `graph`, non-RDF sources keep theirs in `content`."""

    def __init__(
            self,
            repo: Optional['Repository'],
            path: str,
            kind: ResourceKind = ResourceKind.RDF_SOURCE,
            graph: Optional[Graph] = None,
            content: bytes = b'',
            content_type: Optional[str] = None,
    ):
        self.repo = repo
        self.path = path
        self._kind = kind
        self.graph: Graph = graph if graph is not None else new_graph()
        self.content: bytes = content
        self.content_type: Optional[str] = content_type
        self.created: Optional[datetime] = None
        self.modified: Optional[datetime] = None

    def __str__(self):
        return str(self.uri)

    def __repr__(self):
        return f'<{self.__class__.__name__} {self.kind} {self.path}>'

    @property
    def kind(self) -> ResourceKind:
        return self._kind

    @property
    def uri(self) -> URIRef:
        if self.repo is None:
            return URIRef(self.path)
        return self.repo.uri_for(self.path)

    @property
    def exists(self) -> bool:
        """Whether this object is the one stored in its repository."""
        return self.repo is not None and self.repo.contains_resource(self)

    @property
    def is_ldp_resource(self) -> bool:
        return self.kind.is_ldp_resource

    @property
    def is_container(self) -> bool:
        return self.kind.is_container

    @property
    def is_rdf_source(self) -> bool:
        return self.kind.is_rdf_source

    @property
    def is_non_rdf_source(self) -> bool:
        return self.kind.is_non_rdf_source

    @property
    def members(self) -> set[URIRef]:
        """URIs of the resources this container contains (`ldp:contains`)."""
        return set(self.graph.objects(self.uri, ldp.contains))

    @property
    def etag(self) -> Optional[str]:
        """Opaque entity tag, without quotes. For RDF sources this is derived
        from a canonical digest of the graph, so it does not depend on blank
        node labels or serialization; it should be sent as a weak tag. For
        non-RDF sources it is the SHA-1 hash of the content."""
        if self.is_rdf_source:
            return format(to_isomorphic(self.graph).graph_digest(), 'x')
        elif self.is_non_rdf_source:
            return sha1(self.content).hexdigest()
        else:
            return None

    def touch(self):
        now = datetime.now(timezone.utc)
        if self.created is None:
            self.created = now
        self.modified = now

    def replace_graph(self, graph: Graph):
        """Replace the state of an RDF source with `graph`. Containment
        triples are server-managed, so the current ones are kept."""
        graph.remove((self.uri, ldp.contains, None))
        for triple in self.graph.triples((self.uri, ldp.contains, None)):
            graph.add(triple)
        self.graph = graph
        self.touch()

    def replace_content(self, content: bytes, content_type: Optional[str]):
        self.content = content
        self.content_type = content_type
        self.touch()

    def to_response(self):
        """The body to send for this resource: a copy of the graph for RDF
        sources (serialized later by content negotiation), the stored bytes
        for non-RDF sources, and nothing for a plain LDP resource."""
        if self.is_rdf_source:
            return new_graph(self.graph)
        elif self.is_non_rdf_source:
            return [self.content]
        else:
            return []
