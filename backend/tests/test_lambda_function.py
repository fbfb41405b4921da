"""End-to-end tests for the Lambda entry point and avatar handler."""

from __future__ import annotations

import json
import logging
import random
import sys
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
BACKEND_PATH = PROJECT_ROOT / "backend"
if str(BACKEND_PATH) not in sys.path:
    sys.path.insert(0, str(BACKEND_PATH))

from avatar_settings import AvatarSettings  # noqa: E402  pylint: disable=wrong-import-position
from handlers import create_avatar_handler  # noqa: E402  pylint: disable=wrong-import-position
from lambda_function import lambda_handler  # noqa: E402  pylint: disable=wrong-import-position
from router import LambdaRouter  # noqa: E402  pylint: disable=wrong-import-position

LONG_TERM = "public, max-age=31536000, immutable"


def _event(path: str, query=None, method: str = "GET") -> dict:
    return {"httpMethod": method, "path": path, "queryStringParameters": query}


def test_initials_scenario() -> None:
    response = lambda_handler(_event("/avatar/JD"), None)

    assert response["statusCode"] == 200
    assert response["headers"]["Content-Type"] == "image/svg+xml; charset=utf-8"
    assert response["headers"]["Cache-Control"] == LONG_TERM
    assert response["headers"]["Access-Control-Allow-Origin"] == "*"
    body = response["body"]
    assert ">JD</text>" in body
    assert 'width="60"' in body
    assert "border-radius" not in body


def test_root_path_is_not_cached() -> None:
    response = lambda_handler(_event("/"), None)

    assert response["headers"]["Cache-Control"] == "no-cache"
    assert ">A</text>" in response["body"]


def test_punycode_scenario() -> None:
    response = lambda_handler(_event("/avatar/xn--nxasmq5b", {"s": "80"}), None)

    body = response["body"]
    assert ">\u03cc\u03b2</text>" in body
    assert 'font-size="36"' in body


def test_circle_scenario() -> None:
    response = lambda_handler(_event("/avatar/AB", {"shape": "circle", "s": "120"}), None)

    body = response["body"]
    assert 'style="border-radius: 50%;"' in body
    assert 'font-size="54"' in body


def test_size_is_clamped() -> None:
    assert 'width="1"' in lambda_handler(_event("/avatar/JD", {"s": "-5"}), None)["body"]
    assert 'width="1000"' in lambda_handler(_event("/avatar/JD", {"s": "9999"}), None)["body"]


def test_markup_in_text_is_escaped() -> None:
    body = lambda_handler(_event("/avatar/%3Cscript%3E"), None)["body"]

    text_node = body.split('font-size="27">', 1)[1].split("</text>", 1)[0]
    assert text_node == "&lt;s"
    assert "&lt;s</text>" in body


@pytest.mark.parametrize("path", ["/avatar/%01A", "/avatar/%EF%BF%BE", "/avatar/A%0B%1F"])
def test_body_stays_well_formed_with_control_characters(path: str) -> None:
    body = lambda_handler(_event(path), None)["body"]

    root = ET.fromstring(body.encode("utf-8"))
    text = root.find("{http://www.w3.org/2000/svg}g/{http://www.w3.org/2000/svg}text")
    assert text.text == "A"


def test_http_api_v2_event() -> None:
    event = {
        "rawPath": "/avatar/JD",
        "rawQueryString": "s=100&shape=rounded",
        "requestContext": {"http": {"method": "GET"}},
    }

    body = lambda_handler(event, None)["body"]

    assert 'width="100"' in body
    assert 'style="border-radius: 10px;"' in body


def test_options_preflight() -> None:
    response = lambda_handler(_event("/avatar/JD", method="OPTIONS"), None)

    assert response["statusCode"] == 200
    assert response["body"] == ""
    assert response["headers"]["Access-Control-Allow-Methods"] == "OPTIONS, GET"


def test_health_endpoint() -> None:
    response = lambda_handler(_event("/health"), None)

    assert response["statusCode"] == 200
    assert json.loads(response["body"]) == {"status": "healthy", "service": "svg-avatar-generator"}


def test_handler_uses_injected_random_source() -> None:
    handle = create_avatar_handler(
        logging.getLogger("test"), AvatarSettings(), rng=random.Random(7)
    )
    again = create_avatar_handler(
        logging.getLogger("test"), AvatarSettings(), rng=random.Random(7)
    )

    assert handle(_event("/avatar/JD"))["body"] == again(_event("/avatar/JD"))["body"]


def test_handler_falls_back_to_default_avatar(monkeypatch) -> None:
    from handlers import avatar_handler

    def explode(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(avatar_handler, "parse_avatar_options", explode)
    handle = create_avatar_handler(logging.getLogger("test"), AvatarSettings())

    response = handle(_event("/avatar/JD"))

    assert response["statusCode"] == 200
    assert ">A</text>" in response["body"]


def test_router_reports_handler_failure() -> None:
    def explode(event):
        raise RuntimeError("boom")

    response = LambdaRouter().handle(_event("/avatar/JD"), {"avatar": explode, "health": explode})

    assert response["statusCode"] == 500
    assert json.loads(response["body"]) == {"error": "Internal server error"}
