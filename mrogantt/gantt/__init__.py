"""Timeline chart rendering for maintenance task lists."""

from .layout import LayoutError
from .pipeline import Chart, build_chart
from .rasterizer import Rasterizer, RenderError, RenderTimeout
from .tasks import PayloadError, TaskRecord, TaskValidationError, validate_tasks

__all__ = [
    "Chart",
    "LayoutError",
    "PayloadError",
    "Rasterizer",
    "RenderError",
    "RenderTimeout",
    "TaskRecord",
    "TaskValidationError",
    "build_chart",
    "validate_tasks",
]
