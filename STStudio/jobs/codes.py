"""QR code rendering for tracking links.

Uses the ``qrcode`` library with its SVG path image factory, so no
Pillow dependency is required and the result scales without blur when
printed on job labels.
"""

from __future__ import annotations

import base64

import qrcode  # type: ignore
from qrcode.exceptions import DataOverflowError  # type: ignore
from qrcode.image.svg import SvgPathImage  # type: ignore

from STStudio.errors import CODE_ENCODER, UpstreamFailure


def qr_svg(data: str) -> bytes:
    """Return SVG markup (bytes) encoding ``data``."""
    try:
        qr = qrcode.QRCode(
            version=None,  # automatically determine the minimal version
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=8,
            border=2,
        )
        qr.add_data(data)
        qr.make(fit=True)
        img = qr.make_image(image_factory=SvgPathImage)
        return img.to_string()
    except (ValueError, DataOverflowError) as exc:
        raise UpstreamFailure(CODE_ENCODER, f"cannot encode {data!r}") from exc


def qr_data_url(data: str) -> str:
    """Return ``data`` as a QR image in a ``data:`` URL, ready for an ``<img src>``."""
    encoded = base64.b64encode(qr_svg(data)).decode('ascii')
    return f"data:image/svg+xml;base64,{encoded}"
