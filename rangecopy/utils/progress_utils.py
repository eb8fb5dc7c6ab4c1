"""Progress calculation utilities for rangecopy."""


def calculate_copy_progress(bytes_copied: int, total_bytes: int) -> float:
    if total_bytes == 0:
        return 100.0  # Empty range is "complete"

    if bytes_copied >= total_bytes:
        return 100.0

    if bytes_copied <= 0:
        return 0.0

    return (bytes_copied / total_bytes) * 100.0


def format_bytes_human_readable(bytes_value: int) -> str:
    if bytes_value < 1024:
        return f"{bytes_value} B"
    elif bytes_value < 1024 * 1024:
        kb = bytes_value / 1024
        return f"{kb:.1f} KB"
    elif bytes_value < 1024 * 1024 * 1024:
        mb = bytes_value / (1024 * 1024)
        return f"{mb:.1f} MB"
    else:
        gb = bytes_value / (1024 * 1024 * 1024)
        return f"{gb:.1f} GB"


def calculate_transfer_rate(bytes_copied: int, elapsed_seconds: float) -> float:
    if elapsed_seconds <= 0:
        return 0.0

    return bytes_copied / elapsed_seconds


def format_transfer_rate_human_readable(rate_bytes_per_sec: float) -> str:
    return f"{format_bytes_human_readable(int(rate_bytes_per_sec))}/s"
