"""Namespaces used by the LDP server, for use with `rdflib` code."""

import sys
from typing import Optional

from rdflib import Namespace, Graph
from rdflib.namespace import NamespaceManager

dcterms = Namespace('http://purl.org/dc/terms/')
"""[Dublin Core Terms](https://www.dublincore.org/specifications/dublin-core/dcmi-terms/#section-2)"""

ldp = Namespace('http://www.w3.org/ns/ldp#')
"""[Linked Data Platform](https://www.w3.org/TR/ldp/)"""

rdf = Namespace('http://www.w3.org/1999/02/22-rdf-syntax-ns#')
"""[RDF](https://www.w3.org/TR/rdf11-schema/)"""

rdfs = Namespace('http://www.w3.org/2000/01/rdf-schema#')
"""[RDF Schema](https://www.w3.org/TR/rdf11-schema/)"""

xsd = Namespace('http://www.w3.org/2001/XMLSchema#')
"""[XML Schema Datatypes](https://www.w3.org/TR/xmlschema-2/#built-in-datatypes)"""


def get_manager(graph: Optional[Graph] = None) -> NamespaceManager:
    """Bind every `Namespace` defined in this module to a prefix matching
    its attribute name. Used when serializing response graphs, so Turtle
    output uses `ldp:contains` rather than full URIs."""
    if graph is None:
        graph = Graph()
    nsm = NamespaceManager(graph)
    prefixes = {attr: value for attr, value in sys.modules[__name__].__dict__.items() if isinstance(value, Namespace)}
    for prefix, ns in prefixes.items():
        nsm.bind(prefix, ns)
    return nsm
