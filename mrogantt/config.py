import os


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


class BaseConfig:
    GANTT_AUTH_TOKEN = os.environ.get("GANTT_AUTH_TOKEN", os.environ.get("AUTH_TOKEN"))
    GANTT_AUTH_HEADER = os.environ.get("GANTT_AUTH_HEADER", "x-api-key")
    GANTT_RENDER_TIMEOUT = _env_float("GANTT_RENDER_TIMEOUT", 30.0)
    GANTT_CHROMIUM_PATH = os.environ.get("GANTT_CHROMIUM_PATH") or None
    GANTT_CHROMIUM_ARGS = tuple(os.environ.get("GANTT_CHROMIUM_ARGS", "").split())
    GANTT_VIEWPORT_WIDTH = _env_int("GANTT_VIEWPORT_WIDTH", 1280)
    GANTT_VIEWPORT_HEIGHT = _env_int("GANTT_VIEWPORT_HEIGHT", 720)
    GANTT_MAX_GRID_DAYS = _env_int("GANTT_MAX_GRID_DAYS", 3660)


class DevelopmentConfig(BaseConfig):
    DEBUG = True


class TestingConfig(BaseConfig):
    TESTING = True
    GANTT_AUTH_TOKEN = "test-token"
    GANTT_AUTH_HEADER = "x-api-key"
    GANTT_RENDER_TIMEOUT = 5.0
