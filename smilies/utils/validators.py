from pathlib import PurePath

from smilies.config import settings


class UploadValidationError(Exception):
    """Upload validation error exception"""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__('; '.join(errors))


def _describe_extensions(extensions: list[str]) -> str:
    """Render ['.txt', '.jpg', '.png'] as '.txt, .jpg, and .png'."""
    if len(extensions) == 1:
        return extensions[0]
    if len(extensions) == 2:
        return f"{extensions[0]} and {extensions[1]}"
    return f"{', '.join(extensions[:-1])}, and {extensions[-1]}"


def get_file_extension(filename: str | None) -> str:
    """Lower-cased extension of a filename, or '' when it has none."""
    if not filename:
        return ""
    # Browsers on Windows may send the full client path
    return PurePath(filename.replace("\\", "/")).suffix.lower()


def validate_upload(
    filename: str | None,
    size: int,
    max_size_mb: int | None = None,
    allowed_extensions: list[str] | None = None,
) -> None:
    """
    Validate an uploaded file before it is stored.

    Rules:
    - File must not be empty
    - File must not exceed the maximum size (10 MB by default)
    - Extension must be one of the allowed extensions (case-insensitive)

    Raises:
        UploadValidationError: When the upload does not meet requirements
    """
    if max_size_mb is None:
        max_size_mb = settings.MAX_UPLOAD_SIZE_MB
    if allowed_extensions is None:
        allowed_extensions = settings.ALLOWED_UPLOAD_EXTENSIONS

    errors = []

    # Check empty
    if size <= 0:
        errors.append("Please select a file to upload.")

    # Check size
    if size > max_size_mb * 1024 * 1024:
        errors.append(f"File size must not exceed {max_size_mb} MB.")

    # Check extension
    extension = get_file_extension(filename)
    permitted = [ext.lower() for ext in allowed_extensions]
    if not extension or extension not in permitted:
        errors.append(f"Only {_describe_extensions(allowed_extensions)} files are allowed.")

    if errors:
        raise UploadValidationError(errors)
