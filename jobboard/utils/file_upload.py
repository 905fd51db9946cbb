"""
File Upload Utility - Validate and read resume attachments.

Supported formats:
- PDF (application/pdf) only

Max file size: 5MB (Settings.max_resume_size_mb)
"""

from typing import Optional, Tuple

from fastapi import UploadFile

from jobboard.core.errors import ValidationError

RESUME_CONTENT_TYPE = "application/pdf"
MAX_FILENAME_LENGTH = 255


async def read_resume(file: Optional[UploadFile], max_bytes: int) -> Optional[Tuple[bytes, str]]:
    """
    Validate and read an uploaded resume.

    Args:
        file: FastAPI UploadFile, or None when no resume was attached
        max_bytes: Upper bound on the file size

    Returns:
        Tuple of (content, original_filename), or None if no file

    Raises:
        ValidationError on wrong type, oversize, or empty upload
    """
    if file is None or not file.filename:
        return None

    if file.content_type != RESUME_CONTENT_TYPE:
        raise ValidationError("Only PDF files are allowed")

    # Read one byte past the limit so oversize files are detected
    # without pulling an arbitrarily large body into memory.
    content = await file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise ValidationError(
            f"File too large. Maximum size: {max_bytes // (1024 * 1024)}MB"
        )
    if not content:
        raise ValidationError("Uploaded file is empty")

    return content, file.filename[:MAX_FILENAME_LENGTH]
