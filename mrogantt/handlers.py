"""API Gateway entry points for deployments without a WSGI server.

``authorize`` is configured as the route's request authorizer and ``render``
as the integration, matching the Flask surface in :mod:`mrogantt.gantt.routes`.
"""
from __future__ import annotations

import base64
import json
import logging
from datetime import date
from typing import Any, Dict, Mapping, Optional

from .auth.gate import build_policy, check_secret, header_value
from .config import BaseConfig
from .gantt.layout import LayoutError
from .gantt.pipeline import build_chart
from .gantt.rasterizer import Rasterizer, RenderError, RenderTimeout
from .gantt.tasks import PayloadError, TaskValidationError, tasks_from_body

logger = logging.getLogger(__name__)


def _json_response(status: int, payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(payload),
    }


def _event_body(event: Dict[str, Any]) -> str:
    body = event.get("body") or "{}"
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")
    return body


def default_config() -> Dict[str, Any]:
    return {key: getattr(BaseConfig, key) for key in dir(BaseConfig) if key.startswith("GANTT_")}


def default_rasterizer(config: Optional[Mapping[str, Any]] = None) -> Rasterizer:
    return Rasterizer.from_config(config or default_config())


def authorize(
    event: Dict[str, Any], context: Any = None, config: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    config = config or default_config()
    header = config.get("GANTT_AUTH_HEADER") or "x-api-key"
    decision = check_secret(header_value(event.get("headers"), header), config.get("GANTT_AUTH_TOKEN"))
    if not decision.allowed:
        logger.warning("Denied invocation of %s", event.get("routeArn") or event.get("methodArn") or "*")
    return build_policy(decision, event.get("routeArn") or event.get("methodArn"))


def render(
    event: Dict[str, Any],
    context: Any = None,
    rasterizer: Optional[Rasterizer] = None,
    config: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    config = config or default_config()
    logger.info("Render function triggered")
    try:
        body = json.loads(_event_body(event))
    except ValueError:
        return _json_response(400, {"error": "Malformed JSON"})

    try:
        chart = build_chart(tasks_from_body(body), date.today(), config.get("GANTT_MAX_GRID_DAYS"))
    except PayloadError as exc:
        return _json_response(400, {"error": str(exc)})
    except TaskValidationError as exc:
        return _json_response(400, {"error": str(exc), "details": exc.details})
    except LayoutError as exc:
        return _json_response(400, {"error": "Invalid task records", "details": [str(exc)]})

    try:
        image = (rasterizer or default_rasterizer(config)).capture(chart.html)
    except RenderTimeout:
        logger.exception("Gantt rendering timed out")
        return _json_response(504, {"error": "Rendering timed out"})
    except RenderError:
        logger.exception("Gantt rendering failed")
        return _json_response(502, {"error": "Rendering failed"})

    return {
        "statusCode": 200,
        "headers": {"Content-Type": "image/png"},
        "body": base64.b64encode(image).decode("ascii"),
        "isBase64Encoded": True,
    }
