import logging
import re
import threading
from typing import Iterator, Optional
from uuid import uuid4

from rdflib import URIRef
from urlobject import URLObject

from lamprey.ldp.errors import Conflict, Gone, NotFound
from lamprey.ldp.kinds import ResourceKind
from lamprey.ldp.resources import Resource
from lamprey.namespaces import ldp

logger = logging.getLogger(__name__)

ROOT_PATH = '/'

# characters kept from a Slug header; anything else becomes a hyphen
SLUG_UNSAFE = re.compile(r'[^A-Za-z0-9._~-]+')


def mint_identifier() -> str:
    return str(uuid4())


def normalize_path(path: str) -> str:
    """Repository paths start with a slash and have no trailing slash,
    except for the root path "/".

    ```pycon
    >>> normalize_path('foo/bar/')
    '/foo/bar'
    ```
    """
    return '/' + path.strip('/')


class RepositoryError(Exception):
    pass


class Repository:
    """In-memory store of LDP resources, keyed by path. The base container
    lives at "/", and every other resource is contained in the container at
    its parent path.

    Deleted resources leave a tombstone: looking up their path raises
    `Gone`, and the path is not reused for new resources.

    All changes are made while holding `lock`, which handlers also hold
    while they check a resource's state and then change it."""

    @classmethod
    def from_config(cls, config: dict[str, str]) -> 'Repository':
        try:
            return cls(base_uri=config['BASE_URI'])
        except KeyError as e:
            raise RepositoryError(f"Missing configuration key {e} in section 'REPOSITORY'") from e

    def __init__(self, base_uri: str):
        self.base_uri = URLObject(base_uri)
        if not self.base_uri.scheme or not self.base_uri.hostname:
            raise RepositoryError(f'Base URI must be an absolute URI, not "{base_uri}"')
        self.lock = threading.RLock()
        self._resources: dict[str, Resource] = {}
        self._tombstones: set[str] = set()

        root = Resource(self, ROOT_PATH, ResourceKind.CONTAINER)
        root.touch()
        self._resources[ROOT_PATH] = root
        logger.info(f'Created base container {root}')

    def __contains__(self, path: str) -> bool:
        return self.exists(path)

    def __len__(self):
        return len(self._resources)

    @property
    def root(self) -> Resource:
        return self._resources[ROOT_PATH]

    def uri_for(self, path: str) -> URIRef:
        base_path = self.base_uri.path.rstrip('/')
        path = normalize_path(path)
        if path == ROOT_PATH:
            return URIRef(str(self.base_uri.with_path(base_path + '/')))
        return URIRef(str(self.base_uri.with_path(base_path + path)))

    def path_for(self, uri: str) -> Optional[str]:
        """The repository path of `uri`, or `None` if it is not under the base URI."""
        url = URLObject(uri)
        if url.scheme != self.base_uri.scheme or url.netloc != self.base_uri.netloc:
            return None
        base_path = self.base_uri.path.rstrip('/')
        if url.path != base_path and not url.path.startswith(base_path + '/'):
            return None
        return normalize_path(url.path[len(base_path):])

    def exists(self, path: str) -> bool:
        return normalize_path(path) in self._resources

    def is_gone(self, path: str) -> bool:
        return normalize_path(path) in self._tombstones

    def contains_resource(self, resource: Resource) -> bool:
        return self._resources.get(normalize_path(resource.path)) is resource

    def get(self, path: str) -> Resource:
        path = normalize_path(path)
        try:
            return self._resources[path]
        except KeyError:
            if path in self._tombstones:
                raise Gone(f'{self.uri_for(path)} has been deleted')
            raise NotFound(f'{self.uri_for(path)} not found')

    def find(self, uri: str) -> Optional[Resource]:
        path = self.path_for(uri)
        if path is None:
            return None
        return self._resources.get(path)

    @staticmethod
    def parent_path(path: str) -> Optional[str]:
        path = normalize_path(path)
        if path == ROOT_PATH:
            return None
        return normalize_path(path.rsplit('/', 1)[0])

    def mint_path(self, container_path: str, slug: Optional[str] = None) -> str:
        """Choose an unused path for a new member of a container. Uses the
        `slug` (with unsafe characters replaced) if one is given and the
        resulting path is free; otherwise uses a random UUID."""
        prefix = normalize_path(container_path).rstrip('/') + '/'
        if slug:
            segment = SLUG_UNSAFE.sub('-', slug.strip()).strip('-')
            if segment and segment not in ('.', '..'):
                path = prefix + segment
                if not self.exists(path) and not self.is_gone(path):
                    return path
                logger.debug(f'Path {path} from slug "{slug}" is in use')
        return prefix + mint_identifier()

    def add(self, resource: Resource):
        """Store a new resource, and add it to its parent container. Raises
        `Conflict` if the path is taken or there is no container to put it in."""
        with self.lock:
            path = normalize_path(resource.path)
            if path in self._resources or path in self._tombstones:
                raise Conflict(f'{self.uri_for(path)} already exists')
            parent_path = self.parent_path(path)
            parent = self._resources.get(parent_path)
            if parent is None or not parent.is_container:
                raise Conflict(f'No container at {self.uri_for(parent_path)} to create {self.uri_for(path)} in')

            resource.path = path
            resource.touch()
            self._resources[path] = resource
            parent.graph.add((parent.uri, ldp.contains, resource.uri))
            for owner, triple in self.membership_triples(parent, resource):
                owner.graph.add(triple)
                owner.touch()
            parent.touch()
            logger.debug(f'Added {resource} to {parent}')

    def remove(self, resource: Resource):
        """Delete a resource, and everything it contains, leaving tombstones
        behind. The base container cannot be deleted."""
        with self.lock:
            path = normalize_path(resource.path)
            if path == ROOT_PATH:
                raise Conflict('Cannot delete the base container')
            if not self.contains_resource(resource):
                raise NotFound(f'{resource} not found')

            for member_uri in resource.members:
                member = self.find(member_uri)
                if member is not None:
                    self.remove(member)

            parent = self._resources[self.parent_path(path)]
            for owner, triple in self.membership_triples(parent, resource):
                owner.graph.remove(triple)
                owner.touch()
            parent.graph.remove((parent.uri, ldp.contains, resource.uri))
            parent.touch()
            del self._resources[path]
            self._tombstones.add(path)
            logger.debug(f'Removed {resource} from {parent}')

    def membership_triples(self, container: Resource, member: Resource) -> Iterator[tuple[Resource, tuple]]:
        """Membership triples that `member` gives rise to in a direct or
        indirect `container`, each paired with the resource whose graph
        holds it.

        The membership resource defaults to the container itself. For
        indirect containers, the member-derived URIs are the objects of the
        container's `ldp:insertedContentRelation` in the member's graph."""
        if container.kind not in (ResourceKind.DIRECT_CONTAINER, ResourceKind.INDIRECT_CONTAINER):
            return
        graph = container.graph
        membership_uri = graph.value(container.uri, ldp.membershipResource) or container.uri

        inserted = graph.value(container.uri, ldp.insertedContentRelation)
        if container.kind is ResourceKind.DIRECT_CONTAINER or inserted in (None, ldp.MemberSubject):
            member_uris = [member.uri]
        else:
            member_uris = list(member.graph.objects(member.uri, inserted))

        has_member = graph.value(container.uri, ldp.hasMemberRelation)
        if has_member is not None:
            owner = self.find(membership_uri)
            if owner is not None and owner.is_rdf_source:
                for uri in member_uris:
                    yield owner, (membership_uri, has_member, uri)

        is_member_of = graph.value(container.uri, ldp.isMemberOfRelation)
        if is_member_of is not None and member.is_rdf_source:
            for uri in member_uris:
                yield member, (uri, is_member_of, membership_uri)
