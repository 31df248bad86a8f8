"""Rendering module for presentation concerns.

This module handles all presentation/rendering logic:
- Certificate preview HTML
- Certificate SVG layout and PNG conversion

This separates presentation concerns from business logic in services.
"""

from rendering.certificates import (
    generate_certificate_svg,
    image_to_data_uri,
    render_preview_html,
    svg_to_png,
)

__all__ = [
    "generate_certificate_svg",
    "image_to_data_uri",
    "render_preview_html",
    "svg_to_png",
]
