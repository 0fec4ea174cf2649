from typing import Iterable, Optional

from uploader.errors import ValidationError
from uploader.models import UploadConfig, UploadedFile

MEGABYTE = 1024 * 1024


class Validator:
    """Checks candidate files against the accepted types and size limit."""

    def __init__(self, config: UploadConfig):
        self.config = config

    def validate(self, file: Optional[UploadedFile]) -> Optional[str]:
        """
        Returns the reason the file is rejected, or None if it is acceptable.
        Rules are checked in order and the first failure wins.
        """
        if file is None:
            return "No file selected"

        if file.mime_type not in self.config.accepted_types:
            return "File type not supported"

        if file.size_bytes > self.config.max_size:
            return f"File size exceeds the maximum limit of {self.config.max_size / MEGABYTE:g}MB"

        return None

    def validate_all(self, files: Iterable[Optional[UploadedFile]]) -> Optional[str]:
        """First failing reason across a batch, or None if every file passes."""
        for file in files:
            error = self.validate(file)
            if error:
                return error
        return None

    def ensure_valid(self, files: Iterable[Optional[UploadedFile]]) -> None:
        """
        :raises ValidationError: with the first failing reason in the batch.
        """
        error = self.validate_all(files)
        if error:
            raise ValidationError(error)
