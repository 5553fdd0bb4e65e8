"""QR rendering for the presenter screen."""
import io
import sys
from urllib.parse import urlencode

import qrcode
from qrcode.image.svg import SvgImage

CLEAR_SCREEN = "\033[2J\033[H"


def checkin_url(base_url: str, token: str) -> str:
    """URL an attendee's camera opens when scanning the code."""
    return f"{base_url.rstrip('/')}/checkin?{urlencode({'token': token})}"


def _build_qr(data: str, border: int = 4) -> qrcode.QRCode:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)
    return qr


def generate_qr_svg(data: str) -> bytes:
    """Encode ``data`` as an SVG QR code for browser-based presenter screens."""
    img = _build_qr(data).make_image(image_factory=SvgImage)
    buffer = io.BytesIO()
    img.save(buffer)
    return buffer.getvalue()


def render_token(token: str, base_url: str, out=None, clear: bool = True) -> str:
    """Print the check-in URL for ``token`` as an ASCII QR code. Returns the URL."""
    out = out or sys.stdout
    url = checkin_url(base_url, token)
    qr = _build_qr(url, border=2)

    if clear:
        out.write(CLEAR_SCREEN)
    qr.print_ascii(out=out, invert=True)
    out.write(f"\n{url}\n")
    out.flush()
    return url


def render_countdown(seconds_left: int, out=None) -> None:
    out = out or sys.stdout
    out.write(f"\rNext code in {seconds_left:3d}s ")
    out.flush()
