"""
Unit tests for PDFRenderer.

The browser engine is replaced by FakeLauncher/FakeBrowser/FakePage from
conftest, so these tests check orchestration, resource cleanup and result
shaping rather than real rendering.
"""

import asyncio

import pytest

from pressroom.contexts.rendering import (
    Orientation,
    PageMargins,
    PDFRenderer,
    RenderFailure,
    RenderOptions,
    RenderResult,
)
from pressroom.contexts.rendering import renderer as renderer_module
from pressroom.contexts.styling import StyleResolver
from tests.fakes import FAKE_PDF, FakeLauncher, FakePage

HTML = "<html><head><title>Acme</title></head><body><h1 class='text-xl'>Acme</h1></body></html>"


@pytest.fixture
def make_renderer(fast_settings, waiter, tmp_path):
    def make(launcher, stylesheet=None):
        return PDFRenderer(
            settings=fast_settings,
            style_resolver=StyleResolver(stylesheet or tmp_path / "missing.css"),
            launcher=launcher,
            waiter=waiter,
            debug_dir=tmp_path / "debug",
        )

    return make


def failing_launcher(method, error):
    return FakeLauncher(page_factory=lambda: FakePage(failures={method: error}))


@pytest.mark.unit
class TestRenderSuccess:
    """Tests for successful renders."""

    def test_result_fields(self, make_renderer, launcher):
        """Test that a successful render returns the buffer and its metadata."""
        result = asyncio.run(make_renderer(launcher).render(HTML))

        assert result.success
        assert result.buffer == FAKE_PDF
        assert result.size_bytes == len(FAKE_PDF)
        assert result.error is None
        assert result.style_method == "cdn-fallback"
        assert result.duration_seconds >= 0
        assert result.timestamp

    def test_engine_configuration(self, make_renderer, launcher):
        """Test viewport, media emulation and content loading parameters."""
        asyncio.run(make_renderer(launcher).render(HTML))

        browser = launcher.browsers[0]
        assert browser.page_kwargs == [
            {"viewport": {"width": 1920, "height": 1080}, "device_scale_factor": 2.0}
        ]

        page = launcher.pages[0]
        assert page.kwargs_of("emulate_media") == [
            {"color_scheme": "light", "reduced_motion": "no-preference"}
        ]
        assert page.kwargs_of("set_content") == [
            {"wait_until": "domcontentloaded", "timeout": 1000}
        ]
        assert ("wait_for_load_state", ("networkidle",), {"timeout": 1000}) in page.calls

    def test_pdf_options(self, make_renderer, launcher):
        """Test that caller options reach the PDF call with backgrounds enabled."""
        options = RenderOptions(
            page_format="Letter",
            orientation=Orientation.LANDSCAPE,
            margins=PageMargins.uniform("12mm"),
        )

        asyncio.run(make_renderer(launcher).render(HTML, options))

        (pdf_kwargs,) = launcher.pages[0].kwargs_of("pdf")
        assert pdf_kwargs["format"] == "Letter"
        assert pdf_kwargs["landscape"] is True
        assert pdf_kwargs["margin"] == {
            "top": "12mm",
            "right": "12mm",
            "bottom": "12mm",
            "left": "12mm",
        }
        assert pdf_kwargs["print_background"] is True

    def test_optimized_html_loaded(self, make_renderer, launcher):
        """Test that the page receives optimized, not raw, HTML."""
        asyncio.run(make_renderer(launcher).render(HTML))

        content = launcher.pages[0].content
        assert 'id="print-optimizations"' in content
        assert "cdn.tailwindcss.com" in content

    def test_precompiled_stylesheet_used(self, make_renderer, launcher, waiter, tmp_path):
        """Test that a present stylesheet is inlined and reported."""
        stylesheet = tmp_path / "output.css"
        stylesheet.write_text(".text-xl{font-size:1.25rem}", encoding="utf-8")

        result = asyncio.run(make_renderer(launcher, stylesheet).render(HTML))

        assert result.style_method == "precompiled"
        assert ".text-xl{font-size:1.25rem}" in launcher.pages[0].content
        assert waiter.sleeps == [0.2, 0.1]

    def test_engine_shut_down_once(self, make_renderer, launcher):
        """Test that a successful render launches and shuts down exactly one engine."""
        asyncio.run(make_renderer(launcher).render(HTML))

        assert launcher.launches == 1
        assert launcher.shutdowns == 1
        assert launcher.pages[0].closed

    def test_each_render_owns_its_engine(self, make_renderer, launcher):
        """Test that repeated renders never reuse an engine instance."""
        renderer = make_renderer(launcher)

        asyncio.run(renderer.render(HTML))
        asyncio.run(renderer.render(HTML))

        assert launcher.launches == 2
        assert launcher.shutdowns == 2
        assert len(launcher.browsers) == 2

    def test_readiness_warnings_reported(self, make_renderer):
        """Test that degraded readiness steps are surfaced on a successful result."""
        launcher = failing_launcher("wait_for_function", RuntimeError("predicate threw"))

        result = asyncio.run(make_renderer(launcher).render(HTML))

        assert result.success
        assert len(result.warnings) == 4
        assert all("predicate threw" in w for w in result.warnings)


@pytest.mark.unit
class TestRenderFailure:
    """Tests for failed renders and cleanup."""

    @pytest.mark.parametrize("method", ["set_content", "wait_for_load_state", "pdf"])
    def test_failure_shuts_down_engine_once(self, make_renderer, method):
        """Test that the engine is shut down exactly once when a step throws."""
        launcher = failing_launcher(method, RuntimeError("net::ERR_FAILED"))

        result = asyncio.run(make_renderer(launcher).render(HTML))

        assert not result.success
        assert result.buffer is None
        assert result.size_bytes is None
        assert launcher.shutdowns == 1
        assert launcher.pages[0].closed

    def test_failure_result_error_message(self, make_renderer):
        """Test that the failure message carries the stage and the cause."""
        launcher = failing_launcher("set_content", RuntimeError("net::ERR_FAILED"))

        result = asyncio.run(make_renderer(launcher).render(HTML, subject_id="acme"))

        assert "PDF generation failed: net::ERR_FAILED" in result.error
        assert "(stage: load)" in result.error
        assert "[subject: acme]" in result.error
        assert result.error_chain[0].startswith("RenderFailure:")
        assert result.error_chain[-1] == "RuntimeError: net::ERR_FAILED"

    def test_error_chain_withheld_in_production(self, make_renderer, monkeypatch):
        """Test that cause chains are empty in production."""
        monkeypatch.setattr(renderer_module, "is_production", lambda: True)
        launcher = failing_launcher("pdf", RuntimeError("Printing failed"))

        result = asyncio.run(make_renderer(launcher).render(HTML))

        assert not result.success
        assert result.error_chain == []

    def test_raise_on_failure(self, make_renderer):
        """Test that the raising form wraps the engine error as RenderFailure."""
        original = RuntimeError("Target closed")
        launcher = failing_launcher("pdf", original)

        with pytest.raises(RenderFailure) as excinfo:
            asyncio.run(
                make_renderer(launcher).render(HTML, subject_id="acme", raise_on_failure=True)
            )

        assert excinfo.value.stage == "pdf"
        assert excinfo.value.subject_id == "acme"
        assert excinfo.value.original_error is original
        assert excinfo.value.__cause__ is original
        assert launcher.shutdowns == 1

    def test_launch_failure(self, make_renderer):
        """Test that an engine that cannot start yields a launch-stage failure."""
        launcher = FakeLauncher(launch_error=RuntimeError("Executable doesn't exist"))

        result = asyncio.run(make_renderer(launcher).render(HTML))

        assert not result.success
        assert "(stage: launch)" in result.error
        assert result.style_method == "cdn-fallback"

    def test_page_close_failure_does_not_mask_result(self, make_renderer):
        """Test that a failing page close still returns the PDF."""
        launcher = failing_launcher("close", RuntimeError("already closed"))

        result = asyncio.run(make_renderer(launcher).render(HTML))

        assert result.success
        assert launcher.shutdowns == 1


@pytest.mark.unit
class TestDebugScreenshot:
    """Tests for optional debug screenshots."""

    def test_screenshot_captured(self, make_renderer, launcher, tmp_path):
        """Test that debug renders save a labelled full-page JPEG."""
        options = RenderOptions(debug=True, debug_label="acme")

        result = asyncio.run(make_renderer(launcher).render(HTML, options))

        (kwargs,) = launcher.pages[0].kwargs_of("screenshot")
        assert kwargs["type"] == "jpeg"
        assert kwargs["quality"] == 90
        assert kwargs["full_page"] is True
        assert result.screenshot_path.parent == tmp_path / "debug"
        assert result.screenshot_path.name.startswith("acme-")
        assert result.screenshot_path.suffix == ".jpg"
        assert kwargs["path"] == str(result.screenshot_path)

    def test_screenshot_before_pdf(self, make_renderer, launcher):
        """Test that the screenshot is taken before the PDF is emitted."""
        asyncio.run(make_renderer(launcher).render(HTML, RenderOptions(debug=True)))

        names = launcher.pages[0].call_names()
        assert names.index("screenshot") < names.index("pdf")

    def test_no_screenshot_by_default(self, make_renderer, launcher):
        """Test that screenshots are off unless requested."""
        result = asyncio.run(make_renderer(launcher).render(HTML))

        assert "screenshot" not in launcher.pages[0].call_names()
        assert result.screenshot_path is None

    def test_screenshot_failure_non_fatal(self, make_renderer):
        """Test that a failed screenshot is a warning, not a render failure."""
        launcher = failing_launcher("screenshot", OSError("No space left on device"))

        result = asyncio.run(make_renderer(launcher).render(HTML, RenderOptions(debug=True)))

        assert result.success
        assert result.screenshot_path is None
        assert result.warnings == ["Debug screenshot failed: No space left on device"]


@pytest.mark.unit
class TestRenderDataStructures:
    """Tests for RenderOptions and RenderResult invariants."""

    def test_default_options(self):
        """Test A4 portrait, 0.5in margins, debug off."""
        kwargs = RenderOptions().pdf_kwargs()

        assert kwargs["format"] == "A4"
        assert kwargs["landscape"] is False
        assert kwargs["margin"] == PageMargins.uniform("0.5in").as_dict()
        assert RenderOptions().debug is False

    def test_result_requires_exactly_one_of_buffer_and_error(self):
        """Test that results cannot carry both or neither of buffer and error."""
        with pytest.raises(ValueError):
            RenderResult(success=True)
        with pytest.raises(ValueError):
            RenderResult(success=True, buffer=b"%PDF-", error="boom")
        with pytest.raises(ValueError):
            RenderResult(success=False)
        with pytest.raises(ValueError):
            RenderResult(success=False, buffer=b"%PDF-", error="boom")
