import pytest

from lamprey.ldp.errors import NotAcceptable
from lamprey.ldp.kinds import ResourceKind, interaction_model, resolve
from lamprey.ldp.links import parse_link_header
from lamprey.namespaces import ldp

LDP = 'http://www.w3.org/ns/ldp#'


@pytest.mark.parametrize(
    ('uri', 'expected_kind'),
    [
        (LDP + 'Resource', ResourceKind.RDF_SOURCE),
        (LDP + 'RDFSource', ResourceKind.RDF_SOURCE),
        (LDP + 'Container', ResourceKind.CONTAINER),
        (LDP + 'BasicContainer', ResourceKind.CONTAINER),
        (LDP + 'DirectContainer', ResourceKind.DIRECT_CONTAINER),
        (LDP + 'IndirectContainer', ResourceKind.INDIRECT_CONTAINER),
        (LDP + 'NonRDFSource', ResourceKind.NON_RDF_SOURCE),
    ]
)
def test_single_interaction_model(uri, expected_kind):
    assert resolve({uri}) is expected_kind


def test_no_interaction_model():
    assert resolve(set()) is ResourceKind.RDF_SOURCE


@pytest.mark.parametrize(
    ('uris', 'expected_kind'),
    [
        ({LDP + 'Resource', LDP + 'BasicContainer'}, ResourceKind.CONTAINER),
        ({LDP + 'RDFSource', LDP + 'Container'}, ResourceKind.CONTAINER),
        ({LDP + 'Resource', LDP + 'RDFSource', LDP + 'BasicContainer'}, ResourceKind.CONTAINER),
        ({LDP + 'Resource', LDP + 'DirectContainer'}, ResourceKind.DIRECT_CONTAINER),
        ({LDP + 'RDFSource', LDP + 'IndirectContainer'}, ResourceKind.INDIRECT_CONTAINER),
        ({LDP + 'BasicContainer', LDP + 'DirectContainer'}, ResourceKind.DIRECT_CONTAINER),
        ({LDP + 'DirectContainer', LDP + 'IndirectContainer'}, ResourceKind.INDIRECT_CONTAINER),
        ({LDP + 'Resource', LDP + 'NonRDFSource'}, ResourceKind.NON_RDF_SOURCE),
    ]
)
def test_most_specific_interaction_model_wins(uris, expected_kind):
    assert resolve(uris) is expected_kind


@pytest.mark.parametrize(
    'rdf_uri',
    [
        LDP + 'RDFSource',
        LDP + 'Container',
        LDP + 'BasicContainer',
        LDP + 'DirectContainer',
        LDP + 'IndirectContainer',
    ]
)
def test_non_rdf_source_conflicts(rdf_uri):
    with pytest.raises(NotAcceptable):
        resolve({LDP + 'NonRDFSource', rdf_uri})


def test_unknown_uris_are_ignored():
    assert resolve({'http://example.org/MyType', LDP + 'DirectContainer'}) is ResourceKind.DIRECT_CONTAINER


def test_only_unknown_uris():
    assert resolve({'http://example.org/MyType'}) is ResourceKind.RDF_SOURCE


def test_uris_are_case_sensitive():
    assert resolve({LDP + 'basiccontainer', LDP + 'NONRDFSOURCE'}) is ResourceKind.RDF_SOURCE


def test_resolve_accepts_any_iterable():
    assert resolve([ldp.BasicContainer, ldp.BasicContainer]) is ResourceKind.CONTAINER


def test_resolve_is_repeatable():
    uris = {LDP + 'Resource', LDP + 'BasicContainer'}
    assert resolve(uris) is resolve(uris) is ResourceKind.CONTAINER
    assert uris == {LDP + 'Resource', LDP + 'BasicContainer'}


def test_interaction_model_from_link_header():
    links = parse_link_header(
        '<http://www.w3.org/ns/ldp#Resource>; rel="type", '
        '<http://www.w3.org/ns/ldp#BasicContainer>; rel="type"'
    )
    assert interaction_model(links) is ResourceKind.CONTAINER


def test_interaction_model_rel_is_case_insensitive():
    links = parse_link_header('<http://www.w3.org/ns/ldp#DirectContainer>; rel="TYPE"')
    assert interaction_model(links) is ResourceKind.DIRECT_CONTAINER


def test_interaction_model_ignores_other_relations():
    links = parse_link_header(
        '<http://www.w3.org/ns/ldp#BasicContainer>; rel="describedby", '
        '<http://www.w3.org/ns/ldp#NonRDFSource>; rel="type"'
    )
    assert interaction_model(links) is ResourceKind.NON_RDF_SOURCE


def test_interaction_model_conflict():
    links = parse_link_header(
        '<http://www.w3.org/ns/ldp#NonRDFSource>; rel="type", '
        '<http://www.w3.org/ns/ldp#RDFSource>; rel="type"'
    )
    with pytest.raises(NotAcceptable) as exc_info:
        interaction_model(links)
    assert exc_info.value.status == 406


@pytest.mark.parametrize(
    ('kind', 'container', 'rdf_source', 'non_rdf_source'),
    [
        (ResourceKind.RESOURCE, False, False, False),
        (ResourceKind.RDF_SOURCE, False, True, False),
        (ResourceKind.CONTAINER, True, True, False),
        (ResourceKind.DIRECT_CONTAINER, True, True, False),
        (ResourceKind.INDIRECT_CONTAINER, True, True, False),
        (ResourceKind.NON_RDF_SOURCE, False, False, True),
    ]
)
def test_capabilities(kind, container, rdf_source, non_rdf_source):
    assert kind.is_ldp_resource
    assert kind.is_container is container
    assert kind.is_rdf_source is rdf_source
    assert kind.is_non_rdf_source is non_rdf_source


@pytest.mark.parametrize('kind', list(ResourceKind))
def test_type_uris_start_with_ldp_resource(kind):
    assert kind.type_uris[0] == ldp.Resource
