from flask import Blueprint, current_app, g, jsonify, request

from .gate import check_secret

bp = Blueprint("auth", __name__)


@bp.route("/health")
def health():
    return jsonify({"status": "ok"})


def enforce_shared_secret():
    """``before_request`` hook denying callers without the shared secret.

    Runs before the view, so a denied request never has its body read.
    """

    expected = current_app.config.get("GANTT_AUTH_TOKEN")
    header = current_app.config.get("GANTT_AUTH_HEADER", "x-api-key")
    if not expected:
        current_app.logger.warning("GANTT_AUTH_TOKEN is not configured; denying %s", request.path)

    decision = check_secret(request.headers.get(header), expected)
    if not decision.allowed:
        current_app.logger.warning("Denied %s %s from %s", request.method, request.path, request.remote_addr)
        response = jsonify({"error": "Forbidden"})
        response.status_code = 403
        return response

    g.principal = decision.principal
    return None
