"""Common test fixtures for all Lamprey tests"""

import pytest
from werkzeug import Request

from lamprey.repo import Repository

BASE_URI = 'http://example.org/'


@pytest.fixture
def base_uri():
    return BASE_URI


@pytest.fixture
def repo(base_uri):
    return Repository(base_uri=base_uri)


@pytest.fixture
def make_request():
    """Build a werkzeug `Request`. Keyword arguments are passed to
    `werkzeug.test.EnvironBuilder`, e.g. `headers`, `data`, `content_type`."""
    def _make_request(method: str = 'GET', path: str = '/', **kwargs) -> Request:
        return Request.from_values(path=path, method=method, **kwargs)
    return _make_request
