import pytest

from lamprey.ldp.links import Link, parse_link_header, type_uris


def test_parse_single_link():
    links = parse_link_header('<http://www.w3.org/ns/ldp#BasicContainer>; rel="type"')
    assert links == [Link(target='http://www.w3.org/ns/ldp#BasicContainer', rel='type', attributes={})]


def test_parse_multiple_links():
    links = parse_link_header(
        '<http://www.w3.org/ns/ldp#Resource>; rel="type", '
        '<http://example.org/acl>; rel="acl"; title="Access control"'
    )
    assert len(links) == 2
    assert links[1].target == 'http://example.org/acl'
    assert links[1].rel == 'acl'
    assert links[1].attributes == {'title': 'Access control'}


def test_parse_repeated_headers():
    links = parse_link_header([
        '<http://www.w3.org/ns/ldp#Resource>; rel="type"',
        '<http://www.w3.org/ns/ldp#BasicContainer>; rel="type"',
    ])
    assert [link.target for link in links] == [
        'http://www.w3.org/ns/ldp#Resource',
        'http://www.w3.org/ns/ldp#BasicContainer',
    ]


@pytest.mark.parametrize('value', [None, '', []])
def test_parse_empty(value):
    assert parse_link_header(value) == []


def test_link_without_rel():
    link = parse_link_header('<http://example.org/foo>')[0]
    assert link.rel is None
    assert not link.has_rel('type')


@pytest.mark.parametrize(
    ('rel', 'expected'),
    [
        ('type', True),
        ('Type', True),
        ('TYPE', True),
        ('describedby type', True),
        ('describedby', False),
        ('types', False),
    ]
)
def test_has_rel(rel, expected):
    assert Link('http://example.org/foo', rel, {}).has_rel('type') is expected


def test_type_uris():
    links = parse_link_header(
        '<http://www.w3.org/ns/ldp#Resource>; rel="type", '
        '<http://example.org/desc>; rel="describedby", '
        '<http://www.w3.org/ns/ldp#RDFSource>; rel="Type"'
    )
    assert type_uris(links) == {'http://www.w3.org/ns/ldp#Resource', 'http://www.w3.org/ns/ldp#RDFSource'}


def test_target_case_is_preserved():
    links = parse_link_header('<http://www.w3.org/ns/ldp#BasicContainer>; rel="type"')
    assert type_uris(links) == {'http://www.w3.org/ns/ldp#BasicContainer'}
