from __future__ import annotations

import base64
import json
from datetime import date

from flask import Blueprint, Response, current_app, jsonify, request

from ..auth.routes import enforce_shared_secret
from .layout import LayoutError
from .pipeline import build_chart
from .rasterizer import Rasterizer, RenderError, RenderTimeout
from .tasks import PayloadError, TaskValidationError, tasks_from_body

bp = Blueprint("gantt", __name__, url_prefix="/render")
bp.before_request(enforce_shared_secret)


def _json_error(message: str, status: int, **extra) -> Response:
    response = jsonify({"error": message, **extra})
    response.status_code = status
    return response


def _load_tasks():
    try:
        body = json.loads(request.get_data(as_text=True) or "{}")
    except ValueError as exc:
        raise PayloadError("Malformed JSON") from exc
    return tasks_from_body(body)


def get_rasterizer() -> Rasterizer:
    factory = current_app.extensions.get("gantt_rasterizer")
    if factory is not None:
        return factory()
    return Rasterizer.from_config(current_app.config)


@bp.errorhandler(PayloadError)
def handle_payload_error(exc: PayloadError):
    return _json_error(str(exc), 400)


@bp.errorhandler(TaskValidationError)
def handle_validation_error(exc: TaskValidationError):
    return _json_error(str(exc), 400, details=exc.details)


@bp.errorhandler(LayoutError)
def handle_layout_error(exc: LayoutError):
    return _json_error("Invalid task records", 400, details=[str(exc)])


@bp.errorhandler(RenderError)
def handle_render_error(exc: RenderError):
    current_app.logger.exception("Gantt rendering failed")
    if isinstance(exc, RenderTimeout):
        return _json_error("Rendering timed out", 504)
    return _json_error("Rendering failed", 502)


@bp.route("", methods=["POST"])
def render():
    chart = build_chart(_load_tasks(), date.today(), current_app.config.get("GANTT_MAX_GRID_DAYS"))
    current_app.logger.info("Rendering gantt: %d tasks over %d columns", len(chart.tasks), len(chart.grid))
    image = get_rasterizer().capture(chart.html)

    if request.args.get("encoding") == "base64":
        response = Response(base64.b64encode(image).decode("ascii"), mimetype="image/png")
        response.headers["Content-Transfer-Encoding"] = "base64"
        return response
    return Response(image, mimetype="image/png")


@bp.route("/html", methods=["POST"])
def render_html():
    chart = build_chart(_load_tasks(), date.today(), current_app.config.get("GANTT_MAX_GRID_DAYS"))
    return Response(chart.html, mimetype="text/html")
