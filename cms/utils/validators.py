"""
Validation utilities for document names, credentials and image uploads.
"""
from pathlib import Path, PurePosixPath
from typing import Set, Tuple


def _format_extensions(extensions: Set[str]) -> str:
    return ', '.join(f'.{ext}' for ext in sorted(extensions))


class ValidationError(Exception):
    """Validation error exception."""
    pass


class BlankName(ValidationError):
    """Raised when a document name is empty or whitespace."""

    def __init__(self):
        super().__init__("A name is required.")


class BadExtension(ValidationError):
    """Raised when a name does not end in an allowed extension."""

    def __init__(self, allowed_extensions: Set[str]):
        super().__init__(
            f"The name must end with one of: {_format_extensions(allowed_extensions)}."
        )


class BlankField(ValidationError):
    """Raised when a username or password is empty."""

    def __init__(self):
        super().__init__("Username and password are required.")


def validate_document_name(name: str, allowed_extensions: Set[str]) -> str:
    """
    Validate a new document name.

    Args:
        name: Submitted name (may carry surrounding whitespace)
        allowed_extensions: Set of allowed extensions (without dot)

    Returns:
        The trimmed name

    Raises:
        BlankName, BadExtension or ValidationError if invalid
    """
    name = (name or '').strip()
    if not name:
        raise BlankName()

    if Path(name).name != name or '\\' in name:
        raise ValidationError(f"{name} is not a valid document name.")

    ext = Path(name).suffix.lstrip('.')
    if ext not in allowed_extensions:
        raise BadExtension(allowed_extensions)
    return name


def validate_credentials(username: str, password: str) -> Tuple[str, str]:
    """
    Validate a username/password pair.

    The username is returned trimmed; the password is returned as submitted.

    Raises:
        BlankField if either value is empty after trimming
    """
    username = (username or '').strip()
    password = password or ''
    if not username or not password.strip():
        raise BlankField()
    return username, password


def validate_file_type(filename: str, allowed_extensions: Set[str]) -> bool:
    """
    Validate an uploaded file's extension.

    Args:
        filename: Filename to validate
        allowed_extensions: Set of allowed extensions (without dot)

    Returns:
        True if valid

    Raises:
        ValidationError if invalid
    """
    if not filename:
        raise ValidationError("Please select an image to upload.")

    ext = Path(filename).suffix.lstrip('.').lower()
    if ext not in allowed_extensions:
        raise ValidationError(
            f"{filename} is not an accepted image type. "
            f"Accepted types: {_format_extensions(allowed_extensions)}"
        )
    return True


def validate_file_size(size_bytes: int, max_size_mb: int) -> bool:
    """
    Validate file size.

    Args:
        size_bytes: File size in bytes
        max_size_mb: Maximum allowed size in MB

    Returns:
        True if valid

    Raises:
        ValidationError if too large
    """
    max_bytes = max_size_mb * 1024 * 1024
    if size_bytes > max_bytes:
        raise ValidationError(
            f"File size ({size_bytes / 1024 / 1024:.1f} MB) exceeds maximum "
            f"allowed size ({max_size_mb} MB)"
        )
    return True


def base_filename(filename: str) -> str:
    """
    Reduce an uploaded filename to its base name.

    Directory parts are dropped (both '/' and '\\' separators); the name
    itself is kept as submitted.

    Args:
        filename: Original filename

    Returns:
        Base filename

    Raises:
        ValidationError if nothing usable remains
    """
    name = PurePosixPath((filename or '').replace('\\', '/')).name

    if not name or name in ('.', '..'):
        raise ValidationError(f"{filename} is not a valid filename.")

    return name
