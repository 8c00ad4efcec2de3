"""Media ingestion: embeddable references from uploads, URLs and embed markup"""

import base64
import logging
import mimetypes
import re
from io import BytesIO
from typing import Optional

from PIL import Image, UnidentifiedImageError

from buildtrack.config import Settings, settings as default_settings
from buildtrack.exceptions import (
    InvalidMediaTypeError,
    MediaIngestionError,
    MediaTooLargeError,
)
from buildtrack.schemas.project import MediaItem, MediaType
from buildtrack.utils import generate_id

logger = logging.getLogger(__name__)


class MediaService:
    """Service for turning uploads and pasted links into media references"""

    # Constants
    ALLOWED_MIME_PREFIXES = ("image/", "video/")
    EMBED_SRC_PATTERN = re.compile(r'src="([^"]+)"')

    def __init__(self, config: Optional[Settings] = None):
        self.settings = config or default_settings
        self.max_file_size = self.settings.media_max_bytes

    def detect_mime_type(self, data: bytes, filename: Optional[str] = None) -> str:
        """
        Detect the MIME type of uploaded bytes.

        Images are identified from their content with Pillow; anything else
        falls back to the filename extension.

        Args:
            data: File contents
            filename: Original filename, if known

        Returns:
            MIME type string

        Raises:
            InvalidMediaTypeError: If the type cannot be determined
        """
        try:
            with Image.open(BytesIO(data)) as image:
                image_format = image.format
            mime_type = Image.MIME.get(image_format) if image_format else None
            if mime_type:
                return mime_type
        except (UnidentifiedImageError, OSError):
            logger.debug("Upload is not a recognised image, checking filename")

        if filename:
            guessed, _ = mimetypes.guess_type(filename)
            if guessed:
                return guessed

        raise InvalidMediaTypeError("Could not determine media type of upload")

    def validate_file(self, file_size: int, mime_type: str) -> None:
        """
        Validate file size and MIME type.

        Raises:
            MediaTooLargeError: If the file is empty or exceeds the maximum size
            InvalidMediaTypeError: If the MIME type is not an image or video
        """
        if file_size <= 0:
            raise MediaTooLargeError("File is empty")
        if file_size > self.max_file_size:
            raise MediaTooLargeError(
                f"File size {file_size} bytes exceeds maximum of {self.max_file_size} bytes"
            )
        if not mime_type.startswith(self.ALLOWED_MIME_PREFIXES):
            raise InvalidMediaTypeError(f"MIME type {mime_type} not allowed")

    def file_to_embeddable_reference(self, data: bytes, filename: Optional[str] = None) -> str:
        """
        Convert uploaded bytes to a data URL that can be stored on a record.

        Args:
            data: File contents
            filename: Original filename, if known

        Returns:
            "data:<mime>;base64,<payload>" string
        """
        mime_type = self.detect_mime_type(data, filename)
        self.validate_file(len(data), mime_type)
        encoded = base64.b64encode(data).decode("ascii")
        logger.info(f"Encoded {len(data)} byte upload as {mime_type} data URL")
        return f"data:{mime_type};base64,{encoded}"

    @classmethod
    def extract_embed_src(cls, text: str) -> str:
        """
        Pull the src attribute out of pasted iframe markup.

        Input that is not iframe markup, or markup without a src, is returned unchanged.
        """
        if "<iframe" not in text:
            return text
        match = cls.EMBED_SRC_PATTERN.search(text)
        return match.group(1) if match else text

    def build_media_item(
        self,
        title: str,
        media_type: MediaType,
        url: Optional[str] = None,
        data: Optional[bytes] = None,
        filename: Optional[str] = None,
    ) -> MediaItem:
        """
        Create a media item from a link, embed markup or an uploaded file.

        Args:
            title: Display title (required)
            media_type: Kind of media
            url: URL or iframe markup, used when no file is given
            data: Uploaded file contents
            filename: Uploaded filename

        Returns:
            New MediaItem with a generated id

        Raises:
            MediaIngestionError: If the title or source is missing
        """
        if not title or not title.strip():
            raise MediaIngestionError("Please provide a title for the media.")

        if data is not None:
            reference = self.file_to_embeddable_reference(data, filename)
        elif url and url.strip():
            reference = self.extract_embed_src(url.strip())
        else:
            raise MediaIngestionError("Please provide a URL or select a file.")

        return MediaItem(id=generate_id(), type=media_type, url=reference, title=title.strip())
