"""
Image Processor Module.

This module inspects uploaded image bytes:
    - Media type detection from content (Pillow) and filename
    - Dimension metadata where the format is decodable
    - Data-URL preview generation

Supports: PNG, JPEG, WEBP, HEIC, HEIF

Author: TableSnap Team
"""

import base64
import io
from typing import Any, Dict, Optional

from PIL import Image, UnidentifiedImageError

from tablesnap.utils.logger import get_logger
from tablesnap.utils.helpers import get_file_extension

# Initialize module logger
logger = get_logger(__name__)


class ImageProcessor:
    """
    Inspects raw image bytes without modifying them.

    The model receives the original bytes; this class only works out
    what they are and how to preview them.

    Example:
        >>> processor = ImageProcessor()
        >>> processor.detect_media_type(png_bytes)
        "image/png"
        >>> processor.to_data_url(png_bytes, "image/png")[:22]
        "data:image/png;base64,"
    """

    # Pillow format names to media types
    FORMAT_MEDIA_TYPES = {
        'PNG': 'image/png',
        'JPEG': 'image/jpeg',
        'MPO': 'image/jpeg',
        'WEBP': 'image/webp',
        'HEIF': 'image/heif',
    }

    EXTENSION_MEDIA_TYPES = {
        '.png': 'image/png',
        '.jpg': 'image/jpeg',
        '.jpeg': 'image/jpeg',
        '.webp': 'image/webp',
        '.heic': 'image/heic',
        '.heif': 'image/heif',
    }

    # ISO-BMFF brands identifying HEIC/HEIF containers
    HEIC_BRANDS = {b'heic', b'heix', b'hevc', b'hevx', b'heim', b'heis'}
    HEIF_BRANDS = {b'mif1', b'msf1'}

    def detect_media_type(
        self,
        data: bytes,
        filename: Optional[str] = None
    ) -> Optional[str]:
        """
        Work out an image's media type from its content, then its name.

        Args:
            data: Raw image bytes.
            filename: Original filename, used as a fallback.

        Returns:
            Media type string, or None if it cannot be determined.
        """
        media_type = self._sniff_heif(data) or self._sniff_with_pillow(data)

        if media_type is None and filename:
            media_type = self.EXTENSION_MEDIA_TYPES.get(get_file_extension(filename))
            if media_type:
                logger.debug(f"Media type of {filename} taken from extension: {media_type}")

        return media_type

    def _sniff_heif(self, data: bytes) -> Optional[str]:
        # HEIF files start with an 'ftyp' box: size(4) 'ftyp'(4) brand(4)
        if len(data) < 12 or data[4:8] != b'ftyp':
            return None
        brand = data[8:12]
        if brand in self.HEIC_BRANDS:
            return 'image/heic'
        if brand in self.HEIF_BRANDS:
            return 'image/heif'
        return None

    def _sniff_with_pillow(self, data: bytes) -> Optional[str]:
        try:
            with Image.open(io.BytesIO(data)) as image:
                return self.FORMAT_MEDIA_TYPES.get(image.format)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            logger.debug(f"Pillow could not identify image: {e}")
            return None

    def extract_metadata(self, data: bytes) -> Dict[str, Any]:
        """
        Collect basic metadata for logging and previews.

        Returns:
            Dictionary with ``size_bytes`` and, when Pillow can decode
            the header, ``width``, ``height`` and ``format``.
        """
        metadata: Dict[str, Any] = {'size_bytes': len(data)}

        try:
            with Image.open(io.BytesIO(data)) as image:
                metadata['width'] = image.width
                metadata['height'] = image.height
                metadata['format'] = image.format
        except Image.DecompressionBombError as e:
            # No size limit on uploads; only the dimensions are lost
            logger.debug(f"Skipping metadata for oversized image: {e}")
        except (UnidentifiedImageError, OSError):
            pass

        return metadata

    @staticmethod
    def to_data_url(data: bytes, media_type: str) -> str:
        encoded = base64.b64encode(data).decode('ascii')
        return f"data:{media_type};base64,{encoded}"
