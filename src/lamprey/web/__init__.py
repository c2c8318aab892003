import importlib.metadata
import logging
import logging.config

import yaml
from flask import Flask

from lamprey.context import LampreyContext
from lamprey.ldp.middleware import Pipeline, default_stages
from lamprey.utils import envsubst
from lamprey.web.blueprints import ldp_blueprint
from lamprey.web.blueprints.ldp import find_resource

__version__ = importlib.metadata.version('lamprey')

logger = logging.getLogger(__name__)


def load_config(config_file: str) -> dict:
    with open(config_file, 'r') as stream:
        return envsubst(yaml.safe_load(stream) or {})


def create_app(config_file: str) -> Flask:
    app = Flask(__name__)
    config = load_config(config_file)
    if config.get('LOGGING'):
        logging.config.dictConfig(config['LOGGING'])

    context = LampreyContext(config=config)
    app.config['CONTEXT'] = context
    app.config['PIPELINE'] = Pipeline(
        app=find_resource,
        stages=default_stages(default_content_type=context.default_content_type),
    )
    app.register_blueprint(ldp_blueprint)
    logger.info(f'LDP base container is {context.repo.root}')

    return app
