"""
Input Handler Module for TableSnap.

This module validates uploaded images before extraction:
    - Media type validation (PNG, JPEG, WEBP, HEIC, HEIF)
    - Content-based type detection
    - Data-URL previews

Author: TableSnap Team
"""

from .handler import UploadIntake, ImageUpload
from .image_processor import ImageProcessor

__all__ = ['UploadIntake', 'ImageUpload', 'ImageProcessor']
