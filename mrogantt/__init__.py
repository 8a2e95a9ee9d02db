from __future__ import annotations

from pathlib import Path
from typing import Optional

from flask import Flask

from .config import BaseConfig


def create_app(config_class: Optional[type] = None) -> Flask:
    app = Flask(
        __name__,
        instance_relative_config=True,
        template_folder=str(Path(__file__).parent / "templates"),
    )

    app.config.from_object(config_class or BaseConfig)

    if not app.config.get("GANTT_AUTH_TOKEN"):
        app.logger.warning("GANTT_AUTH_TOKEN is not set; every render request will be denied")

    register_blueprints(app)
    register_cli(app)

    return app


def register_blueprints(app: Flask) -> None:
    from .auth.routes import bp as auth_bp
    from .gantt.routes import bp as gantt_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(gantt_bp)


def register_cli(app: Flask) -> None:
    from .utils.cli import register_render_commands

    register_render_commands(app)
