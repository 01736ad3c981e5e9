"""
Upload Intake Module.

This module provides the UploadIntake class that validates a user's
image before anything is sent to the extraction model. Invalid uploads
are rejected here, without a network call.

Usage:
    from tablesnap.input_handler import UploadIntake

    intake = UploadIntake()
    upload = intake.load("receipt.jpg")
    preview = upload.data_url

Classes:
    ImageUpload: A validated image ready for extraction
    UploadIntake: Validation entry point for bytes and files
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from config import get_config
from tablesnap.utils.logger import get_logger
from tablesnap.utils.helpers import format_file_size
from tablesnap.utils.exceptions import (
    InputError,
    MissingUploadError,
    UnsupportedMediaTypeError,
    EmptyUploadError,
)

from .image_processor import ImageProcessor

# Initialize module logger
logger = get_logger(__name__)


@dataclass
class ImageUpload:
    """
    A validated image upload.

    Attributes:
        data: Original image bytes.
        media_type: Accepted media type (e.g. ``image/png``).
        filename: Original filename, if known.
        metadata: Size and, when decodable, dimensions.
    """
    data: bytes
    media_type: str
    filename: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def data_url(self) -> str:
        """Inline ``data:`` URL for previewing the image."""
        return ImageProcessor.to_data_url(self.data, self.media_type)

    def __repr__(self) -> str:
        return (
            f"ImageUpload(filename='{self.filename}', "
            f"type='{self.media_type}', "
            f"size={format_file_size(self.size)})"
        )


class UploadIntake:
    """
    Validates images against the media types the model accepts.

    The declared media type is trusted when it is supported. Otherwise
    (missing, generic or wrong) the type is detected from the content and
    the filename before the upload is rejected.

    Attributes:
        supported_media_types: Accepted media types.
        image_processor: ImageProcessor used for detection and previews.

    Example:
        >>> intake = UploadIntake()
        >>> upload = intake.accept(data, "scan.png", "image/png")
        >>> upload.media_type
        "image/png"
    """

    SUPPORTED_MEDIA_TYPES = (
        'image/png',
        'image/jpeg',
        'image/webp',
        'image/heic',
        'image/heif',
    )

    def __init__(self) -> None:
        self.supported_media_types = {
            media_type.lower()
            for media_type in get_config(
                "input.supported_media_types", list(self.SUPPORTED_MEDIA_TYPES)
            )
        }
        self.image_processor = ImageProcessor()

        logger.debug(f"UploadIntake initialized with types: {sorted(self.supported_media_types)}")

    def is_supported(self, media_type: Optional[str]) -> bool:
        return bool(media_type) and media_type.lower() in self.supported_media_types

    def accept(
        self,
        data: Optional[bytes],
        filename: Optional[str] = None,
        declared_type: Optional[str] = None
    ) -> ImageUpload:
        """
        Validate uploaded bytes.

        Args:
            data: Raw file content.
            filename: Original filename.
            declared_type: Media type reported by the client.

        Returns:
            ImageUpload for a supported image.

        Raises:
            MissingUploadError: If no data was provided.
            EmptyUploadError: If the file is empty.
            UnsupportedMediaTypeError: If the image type is not accepted.
        """
        if data is None:
            raise MissingUploadError()

        if len(data) == 0:
            raise EmptyUploadError(filename)

        declared = (declared_type or '').split(';')[0].strip().lower()

        if self.is_supported(declared):
            media_type = declared
        else:
            media_type = self.image_processor.detect_media_type(data, filename)
            if not self.is_supported(media_type):
                logger.warning(
                    f"Rejected upload {filename or '<unnamed>'} "
                    f"(declared: {declared or 'none'}, detected: {media_type or 'none'})"
                )
                raise UnsupportedMediaTypeError(
                    media_type or declared,
                    sorted(self.supported_media_types)
                )

        upload = ImageUpload(
            data=data,
            media_type=media_type,
            filename=filename,
            metadata=self.image_processor.extract_metadata(data),
        )
        logger.info(f"Accepted upload: {upload!r}")
        return upload

    def load(self, filepath: Union[str, Path]) -> ImageUpload:
        """
        Read and validate an image from disk.

        Raises:
            InputError: If the path does not point to a file.
            UnsupportedMediaTypeError: If the image type is not accepted.
        """
        path = Path(filepath)

        if not path.is_file():
            raise InputError(f"File not found: {filepath}", {"filepath": str(filepath)})

        return self.accept(path.read_bytes(), filename=path.name)
