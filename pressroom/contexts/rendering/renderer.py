"""
PDF Rendering Module

Converts HTML to PDF in a headless browser: resolve style, optimize HTML,
launch an engine, load content, wait for readiness, optionally capture a
debug screenshot, and emit the PDF. The engine is shut down before any
failure is reported.
"""

import time
from pathlib import Path
from typing import Optional

from pressroom.config import (
    DEBUG_SCREENSHOTS_PATH,
    RenderSettings,
    is_production,
    load_render_settings,
)
from pressroom.contexts.rendering.browser import ChromiumLauncher
from pressroom.contexts.rendering.data_structures import RenderOptions, RenderResult
from pressroom.contexts.rendering.exceptions import RenderFailure, cause_chain
from pressroom.contexts.rendering.logger import (
    _log_debug,
    _log_info,
    _log_warning,
    log_render_result,
    log_render_start,
)
from pressroom.contexts.rendering.readiness import RenderReadinessController
from pressroom.contexts.rendering.waits import Waiter
from pressroom.contexts.styling import HTMLOptimizer, StyleResolver
from pressroom.utils.pdf_processing import looks_like_pdf, page_count

DEFAULT_DEBUG_LABEL = "debug"
SCREENSHOT_QUALITY = 90


class PDFRenderer:
    """
    Renders HTML strings to PDF byte buffers.

    Collaborators are injectable so tests can substitute the engine (launcher),
    the clock (waiter) and the stylesheet location (style_resolver).
    """

    def __init__(
        self,
        settings: RenderSettings = None,
        style_resolver: StyleResolver = None,
        optimizer: HTMLOptimizer = None,
        launcher=None,
        waiter: Waiter = None,
        debug_dir: Path = None,
    ):
        """
        Args:
            settings: Engine configuration (defaults to load_render_settings())
            style_resolver: Stylesheet strategy (defaults to COMPILED_STYLESHEET_PATH)
            optimizer: HTML rewriter (defaults to one using settings.cdn_script_url)
            launcher: Object whose session() async context manager yields a browser
            waiter: Clock used for fixed settle windows
            debug_dir: Screenshot directory (defaults to DEBUG_SCREENSHOTS_PATH)
        """
        self.settings = settings or load_render_settings()
        self.style_resolver = style_resolver or StyleResolver()
        self.optimizer = optimizer or HTMLOptimizer(cdn_script_url=self.settings.cdn_script_url)
        self.launcher = launcher or ChromiumLauncher(self.settings)
        self.readiness = RenderReadinessController(self.settings, waiter)
        self.debug_dir = Path(debug_dir) if debug_dir is not None else DEBUG_SCREENSHOTS_PATH

    async def render(
        self,
        html: str,
        options: RenderOptions = None,
        *,
        subject_id: Optional[str] = None,
        raise_on_failure: bool = False,
    ) -> RenderResult:
        """
        Render HTML to a PDF byte buffer.

        Args:
            html: Page source
            options: Page geometry and debug options (defaults to RenderOptions())
            subject_id: Subject being rendered, used for log and error context
            raise_on_failure: Raise RenderFailure instead of returning a failed result

        Returns:
            RenderResult with buffer on success, error on failure

        Raises:
            RenderFailure: Only when raise_on_failure=True
        """
        options = options or RenderOptions()
        label = subject_id or options.debug_label or DEFAULT_DEBUG_LABEL
        start_time = time.perf_counter()
        stage = "style"
        style_method = None
        warnings = []

        try:
            style = self.style_resolver.resolve()
            style_method = style.method
            optimized = self.optimizer.optimize(html, style)
            log_render_start(label, style.method.value, len(optimized))

            stage = "launch"
            async with self.launcher.session() as browser:
                stage = "page"
                page = await browser.new_page(
                    viewport={
                        "width": self.settings.viewport.width,
                        "height": self.settings.viewport.height,
                    },
                    device_scale_factor=self.settings.viewport.device_scale_factor,
                )
                try:
                    # no-preference lets animations compute their running end state
                    await page.emulate_media(color_scheme="light", reduced_motion="no-preference")

                    stage = "load"
                    await self._load_content(page, optimized)

                    stage = "readiness"
                    report = await self.readiness.await_ready(page, style.method)
                    warnings.extend(report.warnings)

                    screenshot_path = None
                    if options.debug:
                        stage = "screenshot"
                        screenshot_path = await self._capture_screenshot(
                            page, options.debug_label or label, warnings
                        )

                    stage = "pdf"
                    _log_info("Generating PDF")
                    buffer = await page.pdf(**options.pdf_kwargs())
                finally:
                    await _close_page(page)
        except Exception as e:
            failure = RenderFailure(
                f"PDF generation failed: {e}",
                stage=stage,
                subject_id=subject_id,
                original_error=e,
            )
            failure.__cause__ = e
            result = RenderResult(
                success=False,
                error=str(failure),
                error_chain=[] if is_production() else cause_chain(failure),
                duration_seconds=round(time.perf_counter() - start_time, 2),
                style_method=style_method.value if style_method else None,
                warnings=warnings,
            )
            log_render_result(label, result)
            if raise_on_failure:
                raise failure from e
            return result

        if not looks_like_pdf(buffer):
            _log_warning("Engine output does not start with a PDF signature")

        result = RenderResult(
            success=True,
            buffer=buffer,
            size_bytes=len(buffer),
            duration_seconds=round(time.perf_counter() - start_time, 2),
            style_method=style.method.value,
            warnings=warnings,
            page_count=page_count(buffer),
            screenshot_path=screenshot_path,
        )
        log_render_result(label, result)
        return result

    async def _load_content(self, page, html: str) -> None:
        """Load HTML, waiting for DOM ready and then network idle within the load budget."""
        timeout_ms = self.settings.timeouts.page_load * 1000
        _log_debug("Loading optimized HTML content")
        await page.set_content(html, wait_until="domcontentloaded", timeout=timeout_ms)
        await page.wait_for_load_state("networkidle", timeout=timeout_ms)

    async def _capture_screenshot(self, page, label: str, warnings: list) -> Optional[Path]:
        """Save a full-page JPEG to the debug directory. Failures are non-fatal."""
        screenshot_path = self.debug_dir / f"{label}-{int(time.time() * 1000)}.jpg"
        try:
            self.debug_dir.mkdir(parents=True, exist_ok=True)
            await page.screenshot(
                path=str(screenshot_path),
                full_page=True,
                type="jpeg",
                quality=SCREENSHOT_QUALITY,
            )
        except Exception as e:
            warning = f"Debug screenshot failed: {e}"
            warnings.append(warning)
            _log_warning(warning)
            return None

        _log_info(f"Debug screenshot saved: {screenshot_path}")
        return screenshot_path


async def _close_page(page) -> None:
    """Close a page without masking the render outcome."""
    try:
        await page.close()
    except Exception as e:
        _log_warning(f"Page close failed: {e}")
