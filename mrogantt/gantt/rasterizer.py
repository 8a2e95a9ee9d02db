"""Headless Chromium screenshots of assembled chart documents."""
from __future__ import annotations

import logging
import time
from contextlib import ExitStack, contextmanager
from typing import Iterator, Optional, Sequence, Tuple

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

logger = logging.getLogger(__name__)


class RenderError(RuntimeError):
    """Raised when the browser fails to produce an image."""


class RenderTimeout(RenderError):
    """Raised when rendering exceeds the invocation deadline."""


class Deadline:
    def __init__(self, seconds: float, clock=time.monotonic):
        self._clock = clock
        self._expires_at = clock() + seconds

    def remaining_ms(self) -> float:
        remaining = (self._expires_at - self._clock()) * 1000.0
        if remaining <= 0:
            raise RenderTimeout("Rendering deadline expired")
        return remaining


class Rasterizer:
    """Launch one Chromium per call and capture a full-page PNG.

    The browser is never pooled: every :meth:`capture` starts a fresh process
    and closes it before returning, whatever the outcome.
    """

    def __init__(
        self,
        executable_path: Optional[str] = None,
        launch_args: Sequence[str] = (),
        viewport: Tuple[int, int] = (1280, 720),
        timeout: float = 30.0,
    ):
        self.executable_path = executable_path
        self.launch_args = list(launch_args)
        self.viewport = {"width": viewport[0], "height": viewport[1]}
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "Rasterizer":
        return cls(
            executable_path=config.get("GANTT_CHROMIUM_PATH"),
            launch_args=config.get("GANTT_CHROMIUM_ARGS", ()),
            viewport=(config.get("GANTT_VIEWPORT_WIDTH", 1280), config.get("GANTT_VIEWPORT_HEIGHT", 720)),
            timeout=float(config.get("GANTT_RENDER_TIMEOUT", 30.0)),
        )

    @contextmanager
    def browser_session(self, deadline: Deadline) -> Iterator[object]:
        with ExitStack() as stack:
            try:
                playwright = stack.enter_context(sync_playwright())
            except PlaywrightError as exc:
                raise RenderError(f"Browser driver failed to start: {exc}") from exc
            try:
                browser = playwright.chromium.launch(
                    headless=True,
                    executable_path=self.executable_path,
                    args=self.launch_args,
                    timeout=deadline.remaining_ms(),
                )
            except PlaywrightTimeoutError as exc:
                raise RenderTimeout("Browser launch timed out") from exc
            except PlaywrightError as exc:
                raise RenderError(f"Browser launch failed: {exc}") from exc
            try:
                yield browser
            finally:
                self._close(browser)

    @staticmethod
    def _close(browser) -> None:
        # A failed close must not replace the error or image already produced.
        try:
            browser.close()
        except PlaywrightError:
            logger.warning("Closing the browser failed", exc_info=True)

    def capture(self, html: str) -> bytes:
        deadline = Deadline(self.timeout)
        with self.browser_session(deadline) as browser:
            try:
                page = browser.new_page(viewport=self.viewport)
                page.set_content(html, wait_until="domcontentloaded", timeout=deadline.remaining_ms())
                return page.screenshot(type="png", full_page=True, timeout=deadline.remaining_ms())
            except PlaywrightTimeoutError as exc:
                raise RenderTimeout("Page rendering timed out") from exc
            except PlaywrightError as exc:
                raise RenderError(f"Page rendering failed: {exc}") from exc
