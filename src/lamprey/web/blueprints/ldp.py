import logging

from flask import Blueprint, Response, current_app, request
from werkzeug import Request

from lamprey.ldp.context import LDPResponse
from lamprey.ldp.errors import NotFound
from lamprey.ldp.kinds import interaction_model
from lamprey.ldp.links import parse_link_header
from lamprey.ldp.resources import Resource

logger = logging.getLogger(__name__)
blueprint = Blueprint('ldp', __name__)

# listing OPTIONS here also stops Flask from answering it on its own
LDP_METHODS = ['GET', 'HEAD', 'OPTIONS', 'POST', 'PUT', 'PATCH', 'DELETE']


class LDPHTTPResponse(Response):
    # error responses carry only the message text
    default_mimetype = 'text/plain'


def find_resource(req: Request) -> LDPResponse:
    """Answer a request with the resource stored at the request path. A `PUT`
    to a path with nothing stored there gets a new, unsaved resource of the
    requested interaction model, which creates itself when it handles the
    request."""
    repo = current_app.config['CONTEXT'].repo
    try:
        resource = repo.get(req.path)
    except NotFound:
        if req.method != 'PUT':
            raise
        kind = interaction_model(parse_link_header(req.headers.getlist('Link')))
        logger.debug(f'New {kind} at {req.path}')
        resource = Resource(repo, req.path, kind)
    return LDPResponse(200, {}, resource)


@blueprint.route('/', defaults={'path': ''}, methods=LDP_METHODS)
@blueprint.route('/<path:path>', methods=LDP_METHODS)
def ldp_resource(path):
    logger.info(f'{request.method} {request.path}')
    status, headers, body = current_app.config['PIPELINE'](request)
    return LDPHTTPResponse(body, status=int(status), headers=headers)
