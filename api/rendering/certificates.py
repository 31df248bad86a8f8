"""Certificate rendering - preview HTML and PNG image generation.

This module handles the visual/presentation aspects of certificates:
- HTML preview fragment for the preview endpoint
- SVG layout of text layers over a template background image
- PNG conversion

This is separated from certificate business logic (validation, assembly,
storage) which remains in services/certificates_service.py.
"""

import base64
import html
import mimetypes
from pathlib import Path

from schemas import Certificate, CertificateContent

# Vertical positions (px) on the 1200x850 canvas
NAME_Y = 250
BADGE_Y = 310
ISSUED_Y = 370
EXPIRY_Y = 410
ATTRIBUTES_START_Y = 470
LINE_STEP = 40
SIGNATORIES_GAP = 60

_FONT_FAMILY = "Helvetica, Arial, sans-serif"


def render_preview_html(content: CertificateContent) -> str:
    """Build the HTML preview fragment for a would-be certificate.

    Values are interpolated as submitted; the fragment is not escaped.

    Args:
        content: Assembled certificate fields (template name, recipient,
            badge, dates, custom attributes, signatories)

    Returns:
        HTML fragment as a string
    """
    badge_block = ""
    if content.badge_name:
        badge_block = f"<p>with a {content.badge_name} badge of achievement</p>"

    expiry_block = ""
    if content.expiry_date:
        expiry_block = f"<p>Expiry Date: {content.expiry_date}</p>"

    attributes_block = "".join(
        f"<p><strong>{key}:</strong> {value}</p>"
        for key, value in content.custom_attributes.items()
    )

    signatories_block = ""
    if content.signatories:
        signatories_block = (
            '<div style="margin-top: 50px;">'
            + "".join(
                f"""<div style="display: inline-block; margin: 0 20px;">
              <p style="border-top: 1px solid black; padding-top: 5px;">{sig.name}</p>
              <p>{sig.title}</p>
            </div>"""
                for sig in content.signatories
            )
            + "</div>"
        )

    return f"""
    <div style="border: 2px solid gold; padding: 20px; text-align: center; max-width: 800px; margin: 0 auto;">
      <h1>{content.template_name}</h1>
      <h2>This certificate is presented to</h2>
      <h1>{content.name}</h1>
      {badge_block}
      {expiry_block}
      {attributes_block}
      {signatories_block}
    </div>
  """


def image_to_data_uri(image_path: Path) -> str:
    """Read an image file and return it as a base64 data URI.

    Raises:
        OSError: If the file can't be read
    """
    data = image_path.read_bytes()
    mime_type, _ = mimetypes.guess_type(image_path.name)
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or 'image/png'};base64,{encoded}"


def _text(x: float, y: int, text: str, *, size: int, bold: bool = False) -> str:
    weight = ' font-weight="bold"' if bold else ""
    return (
        f'  <text x="{x:g}" y="{y}" font-family="{_FONT_FAMILY}" '
        f'font-size="{size}" fill="#000" text-anchor="middle"{weight}>'
        f"{html.escape(text, quote=True)}</text>"
    )


def certificate_text_lines(certificate: Certificate) -> list[tuple[int, str, int, bool]]:
    """Compute the text layers drawn on the certificate image.

    Returns:
        (y, text, font_size, bold) tuples in draw order: recipient name,
        optional badge line, issuance date, optional expiry date, one line
        per custom attribute, one line per signatory.
    """
    lines: list[tuple[int, str, int, bool]] = [
        (NAME_Y, f"{certificate.name}", 40, True)
    ]

    if certificate.badge_name:
        lines.append((BADGE_Y, f"Awarded: {certificate.badge_name}", 30, False))

    lines.append((ISSUED_Y, f"Issued on: {certificate.issuance_date}", 28, False))

    if certificate.expiry_date:
        lines.append((EXPIRY_Y, f"Valid till: {certificate.expiry_date}", 28, False))

    y = ATTRIBUTES_START_Y
    for key, value in certificate.custom_attributes.items():
        lines.append((y, f"{key}: {value}", 26, False))
        y += LINE_STEP

    if certificate.signatories:
        y += SIGNATORIES_GAP
        for sig in certificate.signatories:
            lines.append((y, f"{sig.name}, {sig.title}", 26, False))
            y += LINE_STEP

    return lines


def generate_certificate_svg(
    certificate: Certificate,
    background_data_uri: str,
    *,
    width: int = 1200,
    height: int = 850,
) -> str:
    """Generate an SVG certificate with text over the template background.

    Args:
        certificate: The issued certificate
        background_data_uri: Template background image as a data URI
        width: Canvas width in px
        height: Canvas height in px

    Returns:
        SVG content as a string
    """
    center_x = width / 2
    text_layers = "\n".join(
        _text(center_x, y, text, size=size, bold=bold)
        for y, text, size, bold in certificate_text_lines(certificate)
    )

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" viewBox="0 0 {width} {height}" width="{width}" height="{height}">
  <image x="0" y="0" width="{width}" height="{height}" preserveAspectRatio="none" xlink:href="{background_data_uri}"/>
{text_layers}
</svg>"""


def svg_to_png(svg_content: str) -> bytes:
    """Convert SVG string to PNG bytes using CairoSVG.

    Args:
        svg_content: SVG string to convert

    Returns:
        PNG content as bytes

    Raises:
        RuntimeError: If cairo library is not installed on the system
    """
    try:
        import cairosvg
    except OSError as e:
        if "cairo" in str(e).lower():
            raise RuntimeError(
                "PNG generation requires the Cairo library. "
                "On macOS: brew install cairo. "
                "On Ubuntu/Debian: apt-get install libcairo2-dev. "
                "On Alpine: apk add cairo-dev."
            ) from e
        raise

    return cairosvg.svg2png(bytestring=svg_content.encode("utf-8"))
