# rangecopy/core/exceptions.py
from pathlib import Path
from typing import Optional


class InvalidTransitionError(Exception):
    """Raised when a copy status transition is not allowed."""
    def __init__(self, description: str, from_status: str, to_status: str):
        self.description = description
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Invalid state transition for {description}: "
            f"Cannot move from '{from_status}' to '{to_status}'."
        )


class RangeCopyError(Exception):
    """Base exception for range copy failures."""
    pass


class CopyValidationError(RangeCopyError):
    """Raised before any byte is written when a request does not fit the files."""
    pass


class SourceNotFound(CopyValidationError):
    def __init__(self, path: Path, reason: str = "does not exist"):
        self.path = path
        self.reason = reason
        super().__init__(f"Source file {path} {reason}")


class SourceOffsetOutOfRange(CopyValidationError):
    def __init__(self, source_offset: int, source_size: int):
        self.source_offset = source_offset
        self.source_size = source_size
        super().__init__(
            f"source offset {source_offset} > source file size {source_size}"
        )


class ReadPastEnd(CopyValidationError):
    def __init__(self, source_offset: int, count: int, source_size: int):
        self.source_offset = source_offset
        self.count = count
        self.source_size = source_size
        super().__init__(
            f"count {count} + source offset {source_offset} "
            f"> source file size {source_size}"
        )


class DestinationNotAFile(CopyValidationError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Destination must be a file: {path}")


class DestOffsetOutOfRange(CopyValidationError):
    def __init__(self, dest_offset: int, dest_size: int):
        self.dest_offset = dest_offset
        self.dest_size = dest_size
        super().__init__(
            f"destination offset {dest_offset} > destination file size {dest_size}"
        )


class DestMustPreexistForNonzeroOffset(CopyValidationError):
    def __init__(self, path: Path, dest_offset: int):
        self.path = path
        self.dest_offset = dest_offset
        super().__init__(
            f"destination file {path} does not exist, so it cannot be written "
            f"at offset {dest_offset}; only offset 0 may create a new file"
        )


class CopyIOError(RangeCopyError):
    """Raised for read/write/seek/open errors. Wraps the original OSError."""
    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        message = f"I/O error during {operation}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
