from __future__ import annotations

from datetime import date
from pathlib import Path

import click
from flask import current_app

from ..gantt.pipeline import build_chart
from ..gantt.rasterizer import Rasterizer
from .demo_data import generate_demo_tasks


def register_render_commands(app):
    @app.cli.command("render-demo")
    @click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
    @click.option("--html", "as_html", is_flag=True, help="Write the HTML document instead of a PNG.")
    @click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
    def render_demo(output: Path, as_html: bool, today):
        """Render the demo fleet chart to OUTPUT."""

        today = today.date() if today else date.today()
        chart = build_chart(generate_demo_tasks(today), today, current_app.config.get("GANTT_MAX_GRID_DAYS"))
        current_app.logger.info("Demo chart: %d tasks over %d columns", len(chart.tasks), len(chart.grid))

        if as_html:
            output.write_text(chart.html, encoding="utf-8")
        else:
            output.write_bytes(Rasterizer.from_config(current_app.config).capture(chart.html))
        click.echo(f"Wrote {output}")
