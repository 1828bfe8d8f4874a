"""
Label Images
============

Prepares images for the ``img`` field of Open_printLabelMsg. Label printers
print 1-bit; converting client side keeps uploads small and predictable.
"""

import base64
from io import BytesIO
from typing import Optional

from PIL import Image

# 8 dots/mm on a 50mm label
DEFAULT_MAX_WIDTH = 400


def encode_label_image(image_data: bytes, max_width: Optional[int] = DEFAULT_MAX_WIDTH,
                       threshold: int = 128) -> str:
    """
    Convert an image to a monochrome PNG, base64 encoded.

    Args:
        image_data: Raw image bytes (PNG/JPEG/BMP)
        max_width: Downscale to this width in dots; None keeps the size
        threshold: Gray level (0-255) below which a pixel prints black

    Returns:
        Base64 string for PrintLabelMsgRequest.img
    """
    img = Image.open(BytesIO(image_data))

    # Flatten transparency onto white
    if img.mode in ('RGBA', 'LA', 'P'):
        img = img.convert('RGBA')
        background = Image.new('RGBA', img.size, (255, 255, 255, 255))
        img = Image.alpha_composite(background, img)

    if max_width and img.width > max_width:
        ratio = max_width / img.width
        img = img.resize((max_width, max(1, int(img.height * ratio))), Image.Resampling.LANCZOS)

    img = img.convert('L').point(lambda p: 255 if p >= threshold else 0).convert('1')

    buffer = BytesIO()
    img.save(buffer, format='PNG')
    return base64.b64encode(buffer.getvalue()).decode('ascii')
