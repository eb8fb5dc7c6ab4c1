import os
from pathlib import Path
from typing import BinaryIO


def get_file_size(path: Path) -> int:
    return path.stat().st_size


def validate_source_file(source_path: Path) -> None:
    if not source_path.exists():
        raise FileNotFoundError(f"Source file does not exist: {source_path}")

    if not source_path.is_file():
        raise ValueError(f"Source path is not a regular file: {source_path}")


def is_readable_file(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)


def open_source_file(source_path: Path) -> BinaryIO:
    # Unbuffered so reads always see writes made through another handle
    return open(source_path, "rb", buffering=0)


def open_destination_file(dest_path: Path) -> BinaryIO:
    # O_CREAT without O_TRUNC: existing bytes outside the range stay untouched
    fd = os.open(dest_path, os.O_RDWR | os.O_CREAT, 0o666)
    try:
        return os.fdopen(fd, "r+b", buffering=0)
    except BaseException:
        os.close(fd)
        raise


def is_same_file(first: BinaryIO, second: BinaryIO) -> bool:
    first_stat = os.fstat(first.fileno())
    second_stat = os.fstat(second.fileno())
    return os.path.samestat(first_stat, second_stat)
