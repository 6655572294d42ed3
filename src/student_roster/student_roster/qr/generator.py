from __future__ import annotations

import io

import qrcode


def make_qr_png(value: str, *, box_size: int = 10, border: int = 4) -> io.BytesIO:
    """Render ``value`` as a PNG QR code; the buffer is rewound for sending."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=box_size,
        border=border,
    )
    qr.add_data(value or "no-data")
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, "PNG")
    buf.seek(0)
    return buf
