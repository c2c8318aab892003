import pytest

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


@pytest.mark.parametrize(
    ('error_class', 'status', 'phrase'),
    [
        (BadRequest, 400, 'Bad Request'),
        (NotFound, 404, 'Not Found'),
        (NotAcceptable, 406, 'Not Acceptable'),
        (Conflict, 409, 'Conflict'),
        (Gone, 410, 'Gone'),
        (PreconditionFailed, 412, 'Precondition Failed'),
        (UnsupportedMediaType, 415, 'Unsupported Media Type'),
    ]
)
def test_default_message(error_class, status, phrase):
    error = error_class()
    assert isinstance(error, RequestError)
    assert error.status == status
    assert error.message == phrase
    assert str(error) == phrase
    assert error.headers == {}


def test_message_and_headers():
    error = Conflict('Already exists', headers={'Location': 'http://example.org/foo'})
    assert str(error) == 'Already exists'
    assert error.headers == {'Location': 'http://example.org/foo'}


def test_headers_are_copied():
    headers = {'X-Foo': 'bar'}
    error = BadRequest('Bad', headers=headers)
    error.headers['X-Foo'] = 'baz'
    assert headers == {'X-Foo': 'bar'}


def test_method_not_allowed():
    error = MethodNotAllowed('PATCH', allowed=['GET', 'HEAD', 'OPTIONS'])
    assert error.status == 405
    assert error.method == 'PATCH'
    assert str(error) == 'PATCH'
    assert error.allowed == ('GET', 'HEAD', 'OPTIONS')
    assert error.headers == {'Allow': 'GET, HEAD, OPTIONS'}


def test_method_not_allowed_without_allowed_methods():
    error = MethodNotAllowed('FOO')
    assert error.method == 'FOO'
    assert error.headers == {}
