import base64
from io import BytesIO

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from app.core.config import SITE_URL


def booking_link(booking_id: str) -> str:
    return f"{SITE_URL.rstrip('/')}/booking/{booking_id}"


def generate_qr_data_url(payload: str, box_size: int = 6, border: int = 2) -> str:
    """Encode ``payload`` as a PNG QR code and return it as a data URL."""
    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, box_size=box_size, border=border)
    qr.add_data(payload)
    qr.make(fit=True)
    img = qr.make_image()

    buf = BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return "data:image/png;base64," + base64.b64encode(buf.read()).decode("utf-8")
