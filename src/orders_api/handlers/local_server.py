"""
Local HTTP listener for the orders API.

``LocalApiGatewayAdapter`` is a WSGI application that replays each HTTP request as
an API Gateway REST proxy event through the resolver and writes the resolver's
proxy result back as the HTTP response, so handlers never know which transport
is active.
"""

import base64
from typing import Any, Dict, Iterable
from uuid import uuid4

from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from werkzeug.datastructures import Headers
from werkzeug.serving import run_simple
from werkzeug.wrappers import Request, Response

from orders_api.handlers.utils.observability import logger

LOCAL_STAGE = 'local'


class LocalApiGatewayAdapter:
    """WSGI adapter between werkzeug requests and API Gateway proxy events."""

    def __init__(self, app: APIGatewayRestResolver, stage: str = LOCAL_STAGE) -> None:
        self.app = app
        self.stage = stage

    def __call__(self, environ: Dict[str, Any], start_response) -> Iterable[bytes]:
        request = Request(environ)
        # no Lambda context: the cascade delete runs without a deadline
        result = self.app.resolve(self.to_event(request), None)
        return self.to_response(result)(environ, start_response)

    def to_event(self, request: Request) -> Dict[str, Any]:
        """Translate a werkzeug request into an API Gateway REST proxy event."""
        headers = dict(request.headers.items())
        multi_value_headers = {name: request.headers.getlist(name) for name in headers}
        body = request.get_data(as_text=True)

        return {
            'resource': request.path,
            'path': request.path,
            'httpMethod': request.method,
            'headers': headers,
            'multiValueHeaders': multi_value_headers,
            'queryStringParameters': request.args.to_dict() or None,
            'multiValueQueryStringParameters': request.args.to_dict(flat=False) or None,
            'pathParameters': None,
            'stageVariables': None,
            'body': body or None,
            'isBase64Encoded': False,
            'requestContext': {
                'requestId': str(uuid4()),
                'stage': self.stage,
                'httpMethod': request.method,
                'path': request.path,
                'resourcePath': request.path,
                'identity': {
                    'sourceIp': request.remote_addr,
                    'userAgent': request.user_agent.string,
                },
            },
        }

    @staticmethod
    def to_response(result: Dict[str, Any]) -> Response:
        """Translate an API Gateway proxy result into a werkzeug response."""
        headers = Headers()
        for name, value in (result.get('headers') or {}).items():
            headers.set(name, value)
        for name, values in (result.get('multiValueHeaders') or {}).items():
            headers.remove(name)
            for value in values:
                headers.add(name, value)

        body = result.get('body') or ''
        if result.get('isBase64Encoded'):
            body = base64.b64decode(body)

        return Response(response=body, status=result['statusCode'], headers=headers)


def serve(app: APIGatewayRestResolver, port: int, host: str = '0.0.0.0') -> None:
    """
    Serve the resolver over HTTP until interrupted.

    The resolver keeps the current event on the class, so requests are handled one
    at a time.
    """
    logger.info("Listening", extra={"host": host, "port": port})
    run_simple(host, port, LocalApiGatewayAdapter(app), threaded=False, use_reloader=False)
