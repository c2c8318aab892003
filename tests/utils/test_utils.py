import logging

from lamprey.utils import DEFAULT_LOGGING_OPTIONS, configure_logging, envsubst


def test_simple_strings():
    env = {'HOST': 'example.org', 'PORT': '8080'}
    assert envsubst('http://${HOST}/', env) == 'http://example.org/'
    assert envsubst('http://${HOST}:${PORT}/', env) == 'http://example.org:8080/'


def test_no_placeholders():
    assert envsubst('http://example.org/', {}) == 'http://example.org/'


def test_unknown_variable_name(caplog):
    with caplog.at_level(logging.WARNING, logger='lamprey.utils'):
        assert envsubst('http://${HOST}/', {}) == 'http://${HOST}/'
    assert '${HOST}' in caplog.text


def test_lists():
    env = {'FOO': 'a', 'BAR': 'z'}
    assert envsubst(['${FOO}', '${BAR}'], env) == ['a', 'z']
    assert envsubst(['${FOO}', '${BAR}', '${BAZ}'], env) == ['a', 'z', '${BAZ}']


def test_deep_structure():
    env = {'HOST': 'example.org'}
    config = {'REPOSITORY': {'BASE_URI': 'http://${HOST}/'}, 'SERVER': {'THREADS': 4, 'DEBUG': False}}
    assert envsubst(config, env) == {
        'REPOSITORY': {'BASE_URI': 'http://example.org/'},
        'SERVER': {'THREADS': 4, 'DEBUG': False},
    }


def test_environment_is_the_default(monkeypatch):
    monkeypatch.setenv('LAMPREY_TEST_HOST', 'localhost')
    assert envsubst('http://${LAMPREY_TEST_HOST}/') == 'http://localhost/'


def test_configure_logging_verbose():
    options = configure_logging(verbose=True)
    assert options['handlers']['console']['level'] == 'DEBUG'
    assert DEFAULT_LOGGING_OPTIONS['handlers']['console']['level'] == 'INFO'


def test_configure_logging():
    options = configure_logging()
    assert options['handlers']['console']['level'] == 'INFO'
    assert logging.getLogger('waitress.queue').level == logging.WARNING
