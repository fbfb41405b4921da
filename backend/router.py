import json
import logging
from typing import Any, Callable, Dict

import psutil

from request_parser import RequestParser


HEALTH_PATH = '/health'


class LambdaRouter:
    """Simple router for API Gateway events."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.cors_headers = {
            'Access-Control-Allow-Origin': '*',
            'Access-Control-Allow-Headers': 'Content-Type',
            'Access-Control-Allow-Methods': 'OPTIONS, GET'
        }

    def handle(self, event: Dict[str, Any], handlers: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]]) -> Dict[str, Any]:
        try:
            if self.logger.isEnabledFor(logging.DEBUG):
                memory_info = psutil.virtual_memory()
                self.logger.debug(f"Available memory: {memory_info.available / 1024 / 1024:.1f} MB")

            parser = RequestParser(event)
            path = parser.path
            method = parser.method

            if method == 'OPTIONS':
                return {'statusCode': 200, 'headers': dict(self.cors_headers), 'body': ''}

            self.logger.info(f"Processing request: {method} {path}")

            if path == HEALTH_PATH and method == 'GET':
                response = handlers['health'](event)
            else:
                # Every other path renders an avatar, falling back to the default text.
                response = handlers['avatar'](event)

            if 'headers' not in response:
                response['headers'] = {}
            response['headers'].update(self.cors_headers)
            return response

        except Exception as e:
            self.logger.error(f"Lambda handler error: {str(e)}")
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json', **self.cors_headers},
                'body': json.dumps({'error': 'Internal server error'})
            }
