import urllib.parse
from typing import Any, Dict


class RequestParser:
    """Utility for working with API Gateway REST (v1) and HTTP API (v2) events."""

    def __init__(self, event: Dict[str, Any]):
        self.event = event or {}
        self.path = self._get_path(self.event)
        self.method = self._get_method(self.event)
        self.query_params = self._get_query_params(self.event)

    @staticmethod
    def _get_path(event: Dict[str, Any]) -> str:
        return event.get("rawPath") or event.get("path") or "/"

    @staticmethod
    def _get_method(event: Dict[str, Any]) -> str:
        method = event.get("httpMethod")
        if not method:
            http = (event.get("requestContext") or {}).get("http") or {}
            method = http.get("method")
        return str(method or "GET").upper()

    @staticmethod
    def _get_query_params(event: Dict[str, Any]) -> Dict[str, str]:
        raw_query = event.get("rawQueryString")
        if raw_query:
            # First value wins for repeated keys.
            params: Dict[str, str] = {}
            for key, value in urllib.parse.parse_qsl(raw_query, keep_blank_values=True):
                params.setdefault(key, value)
            return params
        return {str(k): str(v) for k, v in (event.get("queryStringParameters") or {}).items() if v is not None}
