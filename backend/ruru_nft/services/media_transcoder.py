"""
Media Transcoder Service

Responsibilities:
- Decode a base64 data URL (optionally percent-encoded) into image bytes
- Scale the image to 80% of its size on both axes
- Re-encode as PNG for pinning
"""

import base64
import binascii
import io
from typing import Tuple
from urllib.parse import unquote

from PIL import Image

from ruru_nft.core.exceptions import FormatError, TranscodeError
from ruru_nft.core.logger import logger

BASE64_MARKER = ";base64"

# Modes the PNG encoder writes without conversion
PNG_MODES = {"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"}


def decode_data_url(data_url: str) -> bytes:
    """
    Extract the binary payload of a ``data:<mime>;base64,<payload>`` string.

    Raises:
        FormatError: If the string carries no base64 marker
        TranscodeError: If the payload is not valid base64
    """
    decoded = unquote(data_url)
    if BASE64_MARKER not in decoded:
        raise FormatError("Invalid base64 data")

    payload = decoded.split(BASE64_MARKER + ",")[-1]
    try:
        return base64.b64decode(payload)
    except (binascii.Error, ValueError) as e:
        raise TranscodeError("Error decoding image", str(e)) from e


def scaled_dimensions(width: int, height: int) -> Tuple[int, int]:
    """
    floor(0.8 * size) per axis.

    A 1-pixel side would floor to 0, which cannot be encoded, so it stays at 1.
    """
    return max(1, width * 4 // 5), max(1, height * 4 // 5)


class MediaTranscoder:
    """Stateless image downscaler used before pinning."""

    OUTPUT_FORMAT = "PNG"

    def resize(self, image_data: bytes) -> bytes:
        """
        Downscale encoded image bytes to 80% and re-encode them.

        Args:
            image_data: Raw encoded image (PNG, JPEG, ...)

        Returns:
            PNG bytes of the resized image
        """
        try:
            image = Image.open(io.BytesIO(image_data))
            image.load()
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise TranscodeError("Error decoding image", str(e)) from e

        original_size = image.size
        new_size = scaled_dimensions(*original_size)

        if image.mode not in PNG_MODES:
            image = image.convert("RGBA")

        resized = image.resize(new_size, Image.LANCZOS)

        buffer = io.BytesIO()
        resized.save(buffer, format=self.OUTPUT_FORMAT)
        logger.info(f"Resized image {original_size} -> {new_size}")
        return buffer.getvalue()

    def transcode(self, data_url: str) -> bytes:
        """Decode a data URL image and return the resized PNG bytes."""
        return self.resize(decode_data_url(data_url))
