"""
Layout Preset Resolution

Builds a PageGeometry and StyleTable from named presets. Presets are
composable and can override each other, allowing flexible combination of
page size, margins, spacing, font sizes and colors.

Each preset may carry a "geometry" mapping (PageGeometry fields) and a
"styles" mapping (role -> RoleStyle fields):

    spacing:
      tight:
        geometry: {line_gap: 1.0}
        styles:
          section_header: {spacing_before: 6.0}

Examples:
    # Apply multiple presets (later overrides earlier)
    >>> geometry, styles = resolve_layout(["page_a4", "margins_narrow"])

    # Mix base preset with override
    >>> geometry, styles = resolve_layout(["fonts_compact", "colors_monochrome"])
"""

import os
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

from folio.contexts.intake.line_data_structure import LineRole
from folio.contexts.layout.defaults import DEFAULT_GEOMETRY, DEFAULT_STYLES
from folio.contexts.layout.exceptions import LayoutConfigurationError
from folio.contexts.layout.geometry import PageGeometry, RoleStyle, StyleTable
from folio.contexts.layout.logger import _log_debug

load_dotenv()
LAYOUT_PRESETS_PATH = Path(os.getenv("FOLIO_PRESETS_PATH", "configs/layout_presets.yaml"))

_GEOMETRY_FIELDS = {f.name for f in fields(PageGeometry)}
_STYLE_FIELDS = {f.name for f in fields(RoleStyle)}


def load_layout_presets(config_path: Path = None) -> Dict[str, Any]:
    """
    Load layout_presets.yaml config file and flatten to single-level dict.

    Collapses nested structure: margins.narrow -> margins_narrow

    Args:
        config_path: Optional path to config file (defaults to FOLIO_PRESETS_PATH env variable)

    Returns:
        Flattened dict mapping preset names to configs
        Example: {"margins_narrow": {...}, "colors_monochrome": {...}}
    """
    if config_path is None:
        config_path = LAYOUT_PRESETS_PATH

    if not Path(config_path).exists():
        raise LayoutConfigurationError(f"Layout presets file not found: {config_path}")

    nested = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    # Flatten: category.name -> category_name
    flattened = {}
    for category, presets in nested.items():
        for name, config in presets.items():
            flattened[f"{category}_{name}"] = config or {}

    return flattened


def _apply_geometry(geometry: PageGeometry, overrides: Dict[str, Any], preset_name: str) -> PageGeometry:
    unknown = set(overrides) - _GEOMETRY_FIELDS
    if unknown:
        raise LayoutConfigurationError(
            f"Unknown geometry fields {sorted(unknown)}. Valid fields: {sorted(_GEOMETRY_FIELDS)}",
            preset_name=preset_name,
        )
    return replace(geometry, **{key: float(value) for key, value in overrides.items()})


def _apply_styles(styles: StyleTable, overrides: Dict[str, Any], preset_name: str) -> StyleTable:
    for label, changes in overrides.items():
        role = LineRole.from_label(label)
        if role is None:
            raise LayoutConfigurationError(f"Unknown line role '{label}'", preset_name=preset_name)

        unknown = set(changes) - _STYLE_FIELDS
        if unknown:
            raise LayoutConfigurationError(
                f"Unknown style fields {sorted(unknown)} for '{label}'. "
                f"Valid fields: {sorted(_STYLE_FIELDS)}",
                preset_name=preset_name,
            )

        typed = {
            key: value if key in ("font_weight", "color") else float(value)
            for key, value in changes.items()
        }
        styles = styles.with_overrides(role, **typed)

    return styles


def resolve_layout(
    preset_names: List[str],
    config_path: Path = None,
    base_geometry: Optional[PageGeometry] = None,
    base_styles: Optional[StyleTable] = None,
) -> Tuple[PageGeometry, StyleTable]:
    """
    Build page geometry and styles from named presets.

    Presets are applied in order, with later presets overriding earlier ones.

    Args:
        preset_names: Preset names to apply (e.g., ["page_a4", "spacing_tight"])
        config_path: Optional path to layout_presets.yaml (defaults to FOLIO_PRESETS_PATH)
        base_geometry: Starting geometry (default: DEFAULT_GEOMETRY)
        base_styles: Starting styles (default: DEFAULT_STYLES)

    Returns:
        (PageGeometry, StyleTable) tuple

    Raises:
        LayoutConfigurationError: If a preset is not found or names unknown fields
    """
    geometry = base_geometry or DEFAULT_GEOMETRY
    styles = base_styles if base_styles is not None else DEFAULT_STYLES

    if not preset_names:
        return geometry, styles

    presets_dict = load_layout_presets(config_path)

    for preset_name in preset_names:
        if preset_name not in presets_dict:
            available = sorted(presets_dict.keys())
            raise LayoutConfigurationError(
                f"Preset '{preset_name}' not found. Available presets: {available}"
            )

        preset_config = presets_dict[preset_name]
        unknown_sections = set(preset_config) - {"geometry", "styles"}
        if unknown_sections:
            raise LayoutConfigurationError(
                f"Unknown preset sections {sorted(unknown_sections)} (expected 'geometry', 'styles')",
                preset_name=preset_name,
            )

        geometry = _apply_geometry(geometry, preset_config.get("geometry") or {}, preset_name)
        styles = _apply_styles(styles, preset_config.get("styles") or {}, preset_name)
        _log_debug(f"Applied preset {preset_name}")

    return geometry, styles
