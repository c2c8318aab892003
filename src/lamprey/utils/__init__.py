import logging
import logging.config
import os
from copy import deepcopy
from typing import Mapping

DEFAULT_LOGGING_OPTIONS = {
    'version': 1,
    'formatters': {
        'full': {
            'format': '%(levelname)s|%(asctime)s|%(threadName)s|%(name)s|%(message)s'
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'INFO',
            'formatter': 'full',
            'stream': 'ext://sys.stderr'
        },
    },
    'loggers': {
        'lamprey': {
            'level': 'DEBUG',
            'handlers': ['console'],
            'propagate': False
        },
        # waitress logs every queued request at INFO
        'waitress.queue': {
            'level': 'WARNING',
        },
    },
    'root': {
        'level': 'INFO',
        'handlers': ['console'],
    }
}
logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> dict:
    """Apply `DEFAULT_LOGGING_OPTIONS`, with console output at DEBUG level
    when `verbose` is true. Returns the options that were applied."""
    logging_options = deepcopy(DEFAULT_LOGGING_OPTIONS)
    if verbose:
        logging_options['handlers']['console']['level'] = 'DEBUG'
    logging.config.dictConfig(logging_options)
    return logging_options


def envsubst(value: str | list | dict, env: Mapping[str, str] = None) -> str | list | dict:
    """
    Recursively replace `${VAR_NAME}` placeholders in value with the values of the
    corresponding keys of env. If env is not given, it defaults to the environment
    variables in os.environ.

    Placeholders without a corresponding key in env are left in place, and a
    warning is logged for each of them.

    ```pycon
    >>> envsubst({'REPOSITORY': {'BASE_URI': 'http://${HOST}/'}}, {'HOST': 'example.org'})
    {'REPOSITORY': {'BASE_URI': 'http://example.org/'}}
    ```

    Values that are not strings, lists, or dictionaries (numbers, booleans,
    `None`) are returned unchanged.
    """
    if env is None:
        env = os.environ
    if isinstance(value, str):
        if '${' not in value:
            return value
        try:
            return value.replace('${', '{').format(**env)
        except KeyError as e:
            missing_key = str(e.args[0])
            logger.warning(f'Environment variable ${{{missing_key}}} not found')
            return envsubst(value, {missing_key: f'${{{missing_key}}}', **env})
    elif isinstance(value, list):
        return [envsubst(v, env) for v in value]
    elif isinstance(value, dict):
        return {k: envsubst(v, env) for k, v in value.items()}
    else:
        return value
