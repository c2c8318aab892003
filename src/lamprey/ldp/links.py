"""Structured access to HTTP `Link` headers
([RFC 8288](https://www.rfc-editor.org/rfc/rfc8288), formerly RFC 5988).

The header syntax itself is parsed by `requests.utils.parse_header_links()`;
this module only reshapes its output into `Link` tuples and selects the
entries that matter for LDP interaction models."""

from typing import Iterable, NamedTuple, Optional, Union

from requests.utils import parse_header_links


class Link(NamedTuple):
    """One entry of a `Link` header, e.g.
    `<http://www.w3.org/ns/ldp#BasicContainer>; rel="type"`:

    ```pycon
    >>> parse_link_header('<http://www.w3.org/ns/ldp#BasicContainer>; rel="type"')
    [Link(target='http://www.w3.org/ns/ldp#BasicContainer', rel='type', attributes={})]
    ```
    """

    target: str
    """The link target URI, exactly as sent"""

    rel: Optional[str]
    """The relation type(s); `None` if the entry has no `rel` parameter"""

    attributes: dict[str, str]
    """Any other link parameters"""

    def has_rel(self, relation: str) -> bool:
        """Relation types are compared case-insensitively. A `rel` parameter
        may hold several space-separated relation types."""
        if self.rel is None:
            return False
        return relation.lower() in self.rel.lower().split()


def parse_link_header(values: Union[str, Iterable[str], None]) -> list[Link]:
    """Parse one or more `Link` header values. Repeated `Link` headers may be
    passed as a list, e.g. from `request.headers.getlist('Link')`."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    links = []
    for value in values:
        for entry in parse_header_links(value):
            target = entry.pop('url')
            rel = entry.pop('rel', None)
            links.append(Link(target=target, rel=rel, attributes=entry))
    return links


def type_uris(links: Iterable[Link]) -> set[str]:
    """Targets of all the `rel="type"` links."""
    return {link.target for link in links if link.has_rel('type')}
