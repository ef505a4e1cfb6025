"""
Reading prompt files for import.

Validates extension and size before decoding, then decodes bytes as UTF-8
with a charset_normalizer fallback for legacy encodings.
"""

from pathlib import Path
from typing import List, Optional, Union

import charset_normalizer
import structlog

from ..config import settings
from ..models.session import ImportSource, ImportSourceType


logger = structlog.get_logger(__name__)

SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


class UnsupportedFileTypeError(ValueError):
    """File extension is not an accepted prompt format."""


class FileTooLargeError(ValueError):
    """File exceeds the import size limit."""


def get_supported_extensions() -> List[str]:
    """Accepted extensions from settings, lowercased with leading dot."""
    extensions = []
    for ext in settings.supported_extensions.split(","):
        ext = ext.strip().lower()
        if ext:
            extensions.append(ext if ext.startswith(".") else f".{ext}")
    return extensions


def get_max_file_size() -> int:
    """Maximum import size in bytes."""
    return settings.max_file_size_mb * 1024 * 1024


def get_file_extension(filename: str) -> str:
    """
    Lowercased extension including the dot, or "" when there is none.

    Examples:
        >>> get_file_extension("Prompt.MD")
        '.md'
        >>> get_file_extension("README")
        ''
    """
    last_dot = filename.rfind(".")
    if last_dot == -1:
        return ""
    return filename[last_dot:].lower()


def validate_file_type(filename: str) -> bool:
    return get_file_extension(filename) in get_supported_extensions()


def validate_file_size(size: int) -> bool:
    return size <= get_max_file_size()


def format_file_size(size: int) -> str:
    """
    Human-readable size, two decimals at most.

    Examples:
        >>> format_file_size(0)
        '0 Bytes'
        >>> format_file_size(1536)
        '1.5 KB'
    """
    if size == 0:
        return "0 Bytes"
    exponent = 0
    scaled = float(size)
    while scaled >= 1024 and exponent < len(SIZE_UNITS) - 1:
        scaled /= 1024
        exponent += 1
    value = round(scaled, 2)
    if value == int(value):
        value = int(value)
    return f"{value} {SIZE_UNITS[exponent]}"


def decode_prompt_bytes(data: bytes) -> str:
    """
    Decode file bytes to text.

    Args:
        data: Raw file contents

    Returns:
        Decoded text (UTF-8 BOM stripped)
    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        detected = charset_normalizer.from_bytes(data).best()
        if detected is None:
            logger.warning("charset_detection_failed", size=len(data))
            return data.decode("utf-8", errors="replace")
        logger.debug("charset_detected", encoding=detected.encoding)
        return str(detected)


def read_prompt_file(path: Union[str, Path], filename: Optional[str] = None) -> ImportSource:
    """
    Validate and read a prompt file into an ImportSource.

    Args:
        path: File path
        filename: Name to record (default: the path's name)

    Returns:
        ImportSource of type FILE

    Raises:
        FileNotFoundError: If the path does not exist
        UnsupportedFileTypeError: If the extension is not accepted
        FileTooLargeError: If the file exceeds the size limit
        ValueError: If the file is empty
    """
    path = Path(path)
    filename = filename or path.name

    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    if not validate_file_type(filename):
        raise UnsupportedFileTypeError(
            f"Unsupported file type. Supported formats: {', '.join(get_supported_extensions())}"
        )

    size = path.stat().st_size
    if not validate_file_size(size):
        raise FileTooLargeError(f"File size exceeds {settings.max_file_size_mb}MB limit")

    text = decode_prompt_bytes(path.read_bytes())
    if not text.strip():
        raise ValueError(f"File is empty: {filename}")

    logger.info(
        "prompt_file_read",
        filename=filename,
        size=format_file_size(size),
    )
    return ImportSource(
        type=ImportSourceType.FILE,
        content=text,
        filename=filename,
        file_size=size,
    )
