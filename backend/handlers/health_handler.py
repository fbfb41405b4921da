"""Handler for the health check endpoint."""

from __future__ import annotations

import json
from typing import Any, Dict


SERVICE_NAME = "svg-avatar-generator"


def create_health_handler(logger):
    def handle(event: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug("Health check")
        return {
            "statusCode": 200,
            "headers": {"Content-Type": "application/json", "Cache-Control": "no-cache"},
            "body": json.dumps({"status": "healthy", "service": SERVICE_NAME}),
        }

    return handle
