import logging

import click
from dotenv import load_dotenv
from waitress import serve

from lamprey.repo import RepositoryError
from lamprey.utils import configure_logging
from lamprey.web import create_app, __version__

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    '--listen',
    default='0.0.0.0:5000',
    help='Address and port to listen on. Default is "0.0.0.0:5000".',
    metavar='[ADDRESS]:PORT',
)
@click.option(
    '-c', '--config-file',
    type=click.Path(exists=True, dir_okay=False),
    envvar='LAMPREY_CONFIG',
    help='YAML configuration file. May also be set with LAMPREY_CONFIG.',
    required=True,
)
@click.option(
    '--threads',
    type=click.IntRange(min=1),
    default=4,
    show_default=True,
    help='Number of threads serving requests.',
)
@click.option(
    '-v', '--verbose',
    is_flag=True,
    help='Log debugging output to the console.',
)
def run(listen: str, config_file: str, threads: int, verbose: bool):
    """Serve the Linked Data Platform repository described by CONFIG_FILE."""
    load_dotenv()
    configure_logging(verbose=verbose)
    server_identity = f'lamprey-http/{__version__}'
    logger.info(f'Starting {server_identity}')
    try:
        app = create_app(config_file)
    except RepositoryError as e:
        logger.error(f'Configuration error: {e}')
        raise SystemExit(1) from e

    try:
        serve(app=app, listen=listen, ident=server_identity, threads=threads)
    except (OSError, RuntimeError) as e:
        logger.error(f'Exiting: {e}')
        raise SystemExit(1) from e


if __name__ == "__main__":
    run()
