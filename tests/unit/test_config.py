"""
Unit tests for render settings loading.

Tests load_render_settings in pressroom.config.
"""

from pathlib import Path

import pytest

from pressroom import config
from pressroom.config import RenderSettings, load_render_settings

PACKAGED_DEFAULTS = Path(config.__file__).parent / "render_defaults.yaml"


@pytest.mark.unit
class TestLoadRenderSettings:
    """Tests for YAML + dotlist settings loading."""

    def test_packaged_defaults(self):
        """Test the packaged timing budget and viewport."""
        settings = load_render_settings(PACKAGED_DEFAULTS)

        assert isinstance(settings, RenderSettings)
        assert settings.timeouts.page_load == 30
        assert settings.timeouts.images == 8
        assert settings.timeouts.fonts == 8
        assert settings.timeouts.cdn_detection == 12
        assert settings.timeouts.final_settle == 5
        assert settings.viewport.width == 1920
        assert settings.viewport.height == 1080
        assert settings.viewport.device_scale_factor == 2
        assert settings.headless is True

    def test_hardened_browser_args(self):
        """Test that the default engine arguments disable sandbox, GPU and extensions."""
        settings = load_render_settings(PACKAGED_DEFAULTS)

        for arg in (
            "--no-sandbox",
            "--disable-setuid-sandbox",
            "--disable-gpu",
            "--disable-extensions",
        ):
            assert arg in settings.browser_args

    def test_dotlist_overrides(self):
        """Test that overrides are applied last."""
        settings = load_render_settings(
            PACKAGED_DEFAULTS,
            overrides=["timeouts.final_settle=1", "viewport.device_scale_factor=1"],
        )

        assert settings.timeouts.final_settle == 1.0
        assert settings.viewport.device_scale_factor == 1.0
        assert settings.timeouts.cdn_settle == 8

    def test_partial_yaml_keeps_defaults(self, tmp_path):
        """Test that a deployment file only needs the keys it changes."""
        yaml_path = tmp_path / "render.yaml"
        yaml_path.write_text("timeouts:\n  cdn_settle: 3\nscroll_step_px: 250\n", encoding="utf-8")

        settings = load_render_settings(yaml_path)

        assert settings.timeouts.cdn_settle == 3.0
        assert settings.timeouts.page_load == 30.0
        assert settings.scroll_step_px == 250
        assert settings.browser_args == []

    @pytest.mark.parametrize(
        "override", ["timeouts.unknown_step=1", "timeouts.images=soon", "nonsense=1"]
    )
    def test_invalid_settings_raise_value_error(self, override):
        """Test that unknown keys and bad types raise ValueError."""
        with pytest.raises(ValueError):
            load_render_settings(PACKAGED_DEFAULTS, overrides=[override])

    def test_chromium_executable_from_environment(self, monkeypatch):
        """Test that CHROMIUM_EXECUTABLE fills an unset executable path."""
        monkeypatch.setattr(config, "CHROMIUM_EXECUTABLE", "/usr/bin/chromium")

        settings = load_render_settings(PACKAGED_DEFAULTS)

        assert settings.executable_path == "/usr/bin/chromium"
