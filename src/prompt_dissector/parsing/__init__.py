# Prompt file reading and validation

from .file_reader import (
    FileTooLargeError,
    UnsupportedFileTypeError,
    decode_prompt_bytes,
    format_file_size,
    get_file_extension,
    read_prompt_file,
    validate_file_size,
    validate_file_type,
)

__all__ = [
    "FileTooLargeError",
    "UnsupportedFileTypeError",
    "decode_prompt_bytes",
    "format_file_size",
    "get_file_extension",
    "read_prompt_file",
    "validate_file_size",
    "validate_file_type",
]
