"""
Integration tests for the rendering context - renders through a real headless Chromium.
"""

import asyncio
import io
from pathlib import Path

import pytest
from playwright.sync_api import sync_playwright
from PyPDF2 import PdfReader

from pressroom.config import CHROMIUM_EXECUTABLE, load_render_settings
from pressroom.contexts.publishing import ArtifactStore, publish_subject
from pressroom.contexts.rendering import Orientation, PDFRenderer, RenderOptions
from pressroom.contexts.styling import StyleResolver


def chromium_installed() -> bool:
    if CHROMIUM_EXECUTABLE:
        return Path(CHROMIUM_EXECUTABLE).exists()
    try:
        with sync_playwright() as p:
            return Path(p.chromium.executable_path).exists()
    except Exception:
        return False


skip_if_no_chromium = pytest.mark.skipif(
    not chromium_installed(),
    reason="Chromium not installed - run 'playwright install chromium'",
)

# Short budgets: the CDN is usually unreachable in CI and each wait should degrade quickly
FAST_OVERRIDES = [
    "timeouts.page_load=15",
    "timeouts.images=2",
    "timeouts.fonts=2",
    "timeouts.style_probe=1",
    "timeouts.cdn_detection=1",
    "timeouts.precompiled_settle=0.1",
    "timeouts.cdn_settle=0.1",
    "timeouts.final_settle=0.1",
    "timeouts.scroll_delay=0.01",
]

PAGE = """<!DOCTYPE html>
<html>
<head><title>Acme</title></head>
<body class="bg-slate-900">
  <section><h1 class="text-white">Acme Portfolio</h1></section>
  <section style="height: 2400px"><p>Tall content spanning pages.</p></section>
  <script>// Smooth scroll
  document.documentElement.style.scrollBehavior = 'smooth';</script>
</body>
</html>
"""

COMPILED_CSS = ".bg-slate-900{background-color:#0f172a}.text-white{color:#fff}"


@pytest.fixture
def renderer(tmp_path):
    stylesheet = tmp_path / "dist" / "output.css"
    stylesheet.parent.mkdir()
    stylesheet.write_text(COMPILED_CSS, encoding="utf-8")
    return PDFRenderer(
        settings=load_render_settings(overrides=FAST_OVERRIDES),
        style_resolver=StyleResolver(stylesheet),
        debug_dir=tmp_path / "debug",
    )


@pytest.mark.integration
@skip_if_no_chromium
def test_render_precompiled_page(renderer):
    """Test that a real render emits a multi-page PDF with the precompiled strategy."""
    result = asyncio.run(renderer.render(PAGE))

    assert result.success, f"Render failed: {result.error}"
    assert result.buffer.startswith(b"%PDF-")
    assert result.style_method == "precompiled"
    assert result.page_count is not None and result.page_count >= 2
    assert result.warnings == []


@pytest.mark.integration
@skip_if_no_chromium
def test_render_landscape(renderer):
    """Test that landscape orientation produces wider-than-tall pages."""
    result = asyncio.run(
        renderer.render(PAGE, RenderOptions(orientation=Orientation.LANDSCAPE))
    )

    assert result.success, f"Render failed: {result.error}"
    box = PdfReader(io.BytesIO(result.buffer)).pages[0].mediabox
    assert float(box.width) > float(box.height)


@pytest.mark.integration
@skip_if_no_chromium
def test_debug_screenshot_written(renderer, tmp_path):
    """Test that debug renders leave a JPEG in the debug directory."""
    result = asyncio.run(renderer.render(PAGE, RenderOptions(debug=True, debug_label="acme")))

    assert result.success, f"Render failed: {result.error}"
    assert result.screenshot_path.exists()
    assert result.screenshot_path.read_bytes()[:2] == b"\xff\xd8"


@pytest.mark.integration
@skip_if_no_chromium
def test_engine_error_becomes_failed_result(renderer):
    """Test that an engine-side error is returned as a structured failure."""
    result = asyncio.run(renderer.render(PAGE, RenderOptions(page_format="NotAPaperSize")))

    assert not result.success
    assert result.buffer is None
    assert "(stage: pdf)" in result.error


@pytest.mark.integration
@skip_if_no_chromium
def test_publish_subject_end_to_end(renderer, tmp_path):
    """Test validate -> render -> save against the filesystem conventions."""
    generated = tmp_path / "generated-files"
    (generated / "acme").mkdir(parents=True)
    (generated / "acme" / "index.html").write_text(PAGE, encoding="utf-8")
    store = ArtifactStore(generated / "pdfs")

    result = asyncio.run(
        publish_subject("acme", renderer=renderer, store=store, generated_files_dir=generated)
    )

    assert result.success, result.error
    status = store.status("acme")
    assert status.exists
    assert status.total_versions == 1
    assert status.path.read_bytes().startswith(b"%PDF-")
