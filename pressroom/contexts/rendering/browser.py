"""
Headless browser lifecycle.

Each render owns one engine process for its lifetime. ChromiumLauncher.session()
launches a fresh instance and guarantees shutdown on every exit path. A pooled
launcher only needs to offer the same session() async context manager.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import Browser, async_playwright

from pressroom.config import RenderSettings, load_render_settings
from pressroom.contexts.rendering.logger import _log_debug, _log_info, _log_warning


class ChromiumLauncher:
    """Launches a hardened headless Chromium per session."""

    def __init__(self, settings: RenderSettings = None):
        self.settings = settings or load_render_settings()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[Browser]:
        """
        Yield a freshly launched browser, closing it and the driver on exit.

        Raises:
            playwright.async_api.Error: If the engine cannot be launched
        """
        playwright = await async_playwright().start()
        browser = None
        try:
            _log_info("Launching headless browser")
            _log_debug(f"  Args: {' '.join(self.settings.browser_args)}")
            browser = await playwright.chromium.launch(
                headless=self.settings.headless,
                args=list(self.settings.browser_args),
                executable_path=self.settings.executable_path,
            )
            yield browser
        finally:
            if browser is not None:
                try:
                    await browser.close()
                    _log_debug("Browser closed")
                except Exception as e:
                    _log_warning(f"Browser close failed: {e}")
            await playwright.stop()
