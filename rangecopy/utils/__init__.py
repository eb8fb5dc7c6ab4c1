"""
Utilities package for rangecopy.

Small helpers for file metadata and human-readable progress values.
"""

from .file_operations import (
    get_file_size,
    is_readable_file,
    is_same_file,
    open_destination_file,
    open_source_file,
    validate_source_file,
)

from .progress_utils import (
    calculate_copy_progress,
    format_bytes_human_readable,
    calculate_transfer_rate,
    format_transfer_rate_human_readable,
)

__all__ = [
    # File operations
    "get_file_size",
    "is_readable_file",
    "is_same_file",
    "open_destination_file",
    "open_source_file",
    "validate_source_file",
    # Progress utilities
    "calculate_copy_progress",
    "format_bytes_human_readable",
    "calculate_transfer_rate",
    "format_transfer_rate_human_readable",
]
