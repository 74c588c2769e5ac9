"""
Render readiness checks.

Drives the sequence of waits that must pass before a page snapshot is
considered stable:

1. Images settled (load or error)
2. Fonts settled
3. Styles applied (short settle for precompiled CSS; engine detection,
   computed-style probe, and a longer settle for the CDN fallback)
4. Forced style recalculation, followed by a final settle window
5. Programmatic scroll to trigger lazy content, then back to top

Every step is guarded: a timeout or in-page error becomes a warning in the
ReadinessReport and the sequence continues. await_ready never raises.
"""

from dataclasses import dataclass, field
from typing import Awaitable, Callable, List

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from pressroom.config import RenderSettings, load_render_settings
from pressroom.contexts.rendering import page_scripts
from pressroom.contexts.rendering.exceptions import RenderTimeoutError
from pressroom.contexts.rendering.logger import _log_debug, _log_info, _log_warning
from pressroom.contexts.rendering.waits import Waiter
from pressroom.contexts.styling import StyleMethod


@dataclass
class ReadinessReport:
    """
    Outcome of a readiness sequence.

    Attributes:
        completed: Steps that finished within their budget
        warnings: One message per degraded step
    """

    completed: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return bool(self.warnings)


class RenderReadinessController:
    """Runs readiness checks against a loaded page."""

    def __init__(self, settings: RenderSettings = None, waiter: Waiter = None):
        self.settings = settings or load_render_settings()
        self.waiter = waiter or Waiter()

    @property
    def timeouts(self):
        return self.settings.timeouts

    async def await_ready(self, page, method: StyleMethod) -> ReadinessReport:
        """
        Wait until the page is stable enough to snapshot.

        Args:
            page: Engine page with content already loaded
            method: Style strategy used by the optimizer

        Returns:
            ReadinessReport listing completed and degraded steps
        """
        report = ReadinessReport()
        t = self.timeouts

        await self._wait_for(page, "images", page_scripts.IMAGES_SETTLED, t.images, report)
        await self._wait_for(page, "fonts", page_scripts.FONTS_SETTLED, t.fonts, report)

        if method is StyleMethod.PRECOMPILED:
            await self._wait_for(
                page,
                "precompiled styles",
                page_scripts.PRECOMPILED_STYLES_APPLIED,
                t.style_probe,
                report,
            )
            await self.waiter.sleep(t.precompiled_settle)
        else:
            await self._wait_for(
                page,
                "utility-CSS engine",
                page_scripts.UTILITY_CSS_ENGINE_DEFINED,
                t.cdn_detection,
                report,
            )
            await self._wait_for(
                page,
                "utility classes",
                page_scripts.UTILITY_CLASSES_APPLIED,
                t.style_probe,
                report,
            )
            await self.waiter.sleep(t.cdn_settle)

        await self._run(
            "style recalculation",
            lambda: page.evaluate(page_scripts.FORCE_STYLE_RECALCULATION),
            report,
        )
        await self.waiter.sleep(t.final_settle)

        await self._run(
            "lazy-content scroll",
            lambda: page.evaluate(
                page_scripts.SCROLL_THROUGH_PAGE,
                {
                    "step": self.settings.scroll_step_px,
                    "delayMs": int(t.scroll_delay * 1000),
                },
            ),
            report,
        )

        if report.degraded:
            _log_warning(f"Page ready with {len(report.warnings)} degraded steps")
        else:
            _log_info("Page ready for snapshot")
        return report

    async def _wait_for(
        self, page, step: str, predicate: str, timeout_s: float, report: ReadinessReport
    ) -> bool:
        """Poll an in-page predicate until truthy or the step budget expires."""
        return await self._run(
            step,
            lambda: page.wait_for_function(predicate, timeout=timeout_s * 1000),
            report,
            timeout_s=timeout_s,
        )

    async def _run(
        self,
        step: str,
        action: Callable[[], Awaitable],
        report: ReadinessReport,
        timeout_s: float = None,
    ) -> bool:
        try:
            await action()
        except PlaywrightTimeoutError:
            warning = str(RenderTimeoutError(step, timeout_s or 0))
        except Exception as e:
            warning = f"Readiness step '{step}' failed: {e}"
        else:
            report.completed.append(step)
            _log_debug(f"{step}: ready")
            return True

        report.warnings.append(warning)
        _log_warning(f"{warning}; continuing")
        return False
