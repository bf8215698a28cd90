"""Custom exceptions for layout context with geometry references."""

from typing import Optional


class LayoutConfigurationError(ValueError):
    """
    Exception raised when page geometry, styles or presets are unusable.

    Attributes:
        message: Error description
        preset_name: Name of the preset involved, if any
    """

    def __init__(self, message: str, preset_name: Optional[str] = None):
        self.message = message
        self.preset_name = preset_name

        parts = [message]
        if preset_name:
            parts.append(f"Preset: {preset_name}")

        super().__init__("\n".join(parts))


class GeometryTooSmallError(LayoutConfigurationError):
    """
    Exception raised when the page content area cannot hold a single line.

    Attributes:
        message: Error description
        geometry: The offending PageGeometry
        required_height: Height of the tallest line the style table can produce
        required_width: Width of one character at the widest indent
    """

    def __init__(
        self,
        message: str,
        geometry=None,  # PageGeometry
        required_height: Optional[float] = None,
        required_width: Optional[float] = None,
    ):
        self.geometry = geometry
        self.required_height = required_height
        self.required_width = required_width

        parts = [message]
        if geometry is not None:
            parts.append(
                f"Content area: {geometry.content_width:.1f} x {geometry.content_height:.1f} pt "
                f"(page {geometry.width:.1f} x {geometry.height:.1f} pt)"
            )
        if required_height is not None:
            parts.append(f"Tallest line needs: {required_height:.1f} pt")
        if required_width is not None:
            parts.append(f"Narrowest line needs: {required_width:.1f} pt")

        super().__init__("\n".join(parts))
