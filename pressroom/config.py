"""
Shared configuration for PRESSROOM.

Filesystem conventions come from the environment (loaded from .env), render
tuning comes from YAML loaded through OmegaConf. Every heuristic wait used by
the rendering context is a field of RenderTimeouts so deployments can tune it
without code changes.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

load_dotenv()

PROJECT_ROOT = Path(os.getenv("PRESSROOM_ROOT", Path.cwd()))
GENERATED_FILES_PATH = Path(os.getenv("GENERATED_FILES_PATH", PROJECT_ROOT / "generated-files"))
ARTIFACTS_PATH = Path(os.getenv("ARTIFACTS_PATH", GENERATED_FILES_PATH / "pdfs"))
COMPILED_STYLESHEET_PATH = Path(
    os.getenv("COMPILED_STYLESHEET_PATH", PROJECT_ROOT / "dist" / "output.css")
)
DEBUG_SCREENSHOTS_PATH = Path(os.getenv("DEBUG_SCREENSHOTS_PATH", PROJECT_ROOT / "debug"))
LOGS_PATH = Path(os.getenv("LOGS_PATH", PROJECT_ROOT / "outs" / "logs"))
RENDER_CONFIG_PATH = Path(
    os.getenv("RENDER_CONFIG_PATH", Path(__file__).parent / "render_defaults.yaml")
)
CHROMIUM_EXECUTABLE = os.getenv("CHROMIUM_EXECUTABLE")
ENVIRONMENT = os.getenv("PRESSROOM_ENV", "development").lower()

# Entry file written by the site generator for each subject
ENTRY_FILENAME = "index.html"


def is_production() -> bool:
    """Whether cause chains should be withheld from results."""
    return ENVIRONMENT == "production"


@dataclass
class RenderTimeouts:
    """
    Timing budget for a single render, in seconds.

    Attributes:
        page_load: Bound on content load (DOM ready + network idle)
        images: Bound on waiting for every <img> to settle
        fonts: Bound on waiting for document.fonts to settle
        style_probe: Bound on waiting for utility classes to show in computed styles
        cdn_detection: Bound on waiting for the CDN utility-CSS engine global
        precompiled_settle: Fixed settle window after inlined styles
        cdn_settle: Fixed settle window after CDN class generation
        final_settle: Fixed settle window after forced style recalculation
        scroll_delay: Pause between scroll steps
    """

    page_load: float = 30.0
    images: float = 8.0
    fonts: float = 8.0
    style_probe: float = 8.0
    cdn_detection: float = 12.0
    precompiled_settle: float = 2.0
    cdn_settle: float = 8.0
    final_settle: float = 5.0
    scroll_delay: float = 0.05


@dataclass
class ViewportSettings:
    width: int = 1920
    height: int = 1080
    device_scale_factor: float = 2.0


@dataclass
class RenderSettings:
    """Engine configuration shared by every render."""

    timeouts: RenderTimeouts = field(default_factory=RenderTimeouts)
    viewport: ViewportSettings = field(default_factory=ViewportSettings)
    browser_args: List[str] = field(default_factory=list)
    headless: bool = True
    executable_path: Optional[str] = None
    scroll_step_px: int = 500
    cdn_script_url: str = "https://cdn.tailwindcss.com"


def load_render_settings(
    config_path: Path = None, overrides: Optional[List[str]] = None
) -> RenderSettings:
    """
    Load render settings from YAML with optional dotlist overrides.

    Args:
        config_path: YAML file (defaults to RENDER_CONFIG_PATH env variable)
        overrides: Dotlist overrides applied last (e.g., ["timeouts.final_settle=1"])

    Returns:
        RenderSettings instance

    Raises:
        ValueError: If the YAML or an override names an unknown key or has a bad type

    Examples:
        >>> settings = load_render_settings(overrides=["timeouts.cdn_settle=3"])
        >>> settings.timeouts.cdn_settle
        3.0
    """
    if config_path is None:
        config_path = RENDER_CONFIG_PATH

    try:
        schema = OmegaConf.structured(RenderSettings)
        merged = OmegaConf.merge(
            schema,
            OmegaConf.load(config_path),
            OmegaConf.from_dotlist(list(overrides or [])),
        )
        settings = OmegaConf.to_object(merged)
    except OmegaConfBaseException as e:
        raise ValueError(f"Invalid render settings in {config_path}: {e}") from e

    if settings.executable_path is None and CHROMIUM_EXECUTABLE:
        settings.executable_path = CHROMIUM_EXECUTABLE

    return settings
