"""Local file storage for uploaded resumes."""

import secrets
import shutil
from pathlib import Path, PurePosixPath
from typing import BinaryIO
import logging

from core.exceptions import NotFoundError, ValidationError
from core.utils.datetime import now, to_unix_millis
from core.utils.validators import is_safe_filename, is_valid_resume_file

logger = logging.getLogger(__name__)


class LocalStorage:
    """Stores files flat under a single base directory."""

    def __init__(self, base_path: str = "uploads/resumes"):
        """
        Initialize local storage.

        Args:
            base_path: Directory uploaded files are written to
        """
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def unique_filename(original_name: str) -> str:
        """
        Build a collision-resistant stored name that keeps the extension.

        Returns:
            "<unix millis>-<random int><ext>", e.g. "1700000000000-123456789.pdf"
        """
        ext = PurePosixPath(original_name).suffix.lower()
        return f"{to_unix_millis(now())}-{secrets.randbelow(10**9)}{ext}"

    def save(self, file_data: bytes | BinaryIO, filename: str) -> Path:
        """
        Save file to local storage.

        Args:
            file_data: File data (bytes or file-like object)
            filename: Name to store the file under

        Returns:
            Path to saved file
        """
        file_path = self.base_path / filename

        if isinstance(file_data, bytes):
            file_path.write_bytes(file_data)
        else:
            with open(file_path, 'wb') as f:
                shutil.copyfileobj(file_data, f)

        logger.info(f"Saved file to {file_path}")
        return file_path

    def save_resume(self, file_data: bytes, original_name: str, max_size: int) -> str:
        """
        Validate and store an uploaded resume.

        Args:
            file_data: Uploaded file contents
            original_name: Client-supplied filename, used for its extension
            max_size: Largest accepted upload in bytes

        Returns:
            The stored filename to keep on the candidate record

        Raises:
            ValidationError: Unsupported extension or file too large
        """
        if not is_valid_resume_file(original_name):
            raise ValidationError("Only PDF, DOC, DOCX, and TXT files are allowed")
        if len(file_data) > max_size:
            raise ValidationError(
                f"Resume exceeds the maximum size of {max_size // (1024 * 1024)}MB"
            )

        filename = self.unique_filename(original_name)
        self.save(file_data, filename)
        return filename

    def path_for(self, filename: str) -> Path:
        """
        Resolve a stored filename for download.

        Raises:
            ValidationError: Filename tries to leave the storage directory
            NotFoundError: No such stored file
        """
        if not is_safe_filename(filename):
            raise ValidationError("Invalid filename")

        file_path = self.base_path / filename
        if not file_path.is_file():
            raise NotFoundError("File not found")
        return file_path

    def read(self, filename: str) -> bytes:
        """Read a stored file's contents."""
        return self.path_for(filename).read_bytes()

    def delete(self, filename: str) -> bool:
        """
        Delete a stored file.

        Returns:
            True if a file was removed
        """
        if not self.exists(filename):
            return False

        (self.base_path / filename).unlink()
        logger.info(f"Deleted file: {filename}")
        return True

    def exists(self, filename: str) -> bool:
        return is_safe_filename(filename) and (self.base_path / filename).is_file()
