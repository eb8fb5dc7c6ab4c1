"""
Tests for progress_utils utilities.
"""

from rangecopy.utils.progress_utils import (
    calculate_copy_progress,
    calculate_transfer_rate,
    format_bytes_human_readable,
    format_transfer_rate_human_readable,
)


class TestCalculateCopyProgress:
    """Test calculate_copy_progress function."""

    def test_zero_percent(self):
        assert calculate_copy_progress(0, 1000) == 0.0

    def test_fifty_percent(self):
        assert calculate_copy_progress(500, 1000) == 50.0

    def test_empty_range(self):
        """Test empty range edge case."""
        assert calculate_copy_progress(0, 0) == 100.0

    def test_over_complete(self):
        assert calculate_copy_progress(1200, 1000) == 100.0


class TestFormatting:
    """Test human readable formatting."""

    def test_bytes(self):
        assert format_bytes_human_readable(512) == "512 B"

    def test_kilobytes(self):
        assert format_bytes_human_readable(1536) == "1.5 KB"

    def test_megabytes(self):
        assert format_bytes_human_readable(5 * 1024 * 1024) == "5.0 MB"

    def test_gigabytes(self):
        assert format_bytes_human_readable(3 * 1024 ** 3) == "3.0 GB"

    def test_transfer_rate(self):
        assert calculate_transfer_rate(1000, 2.0) == 500.0
        assert calculate_transfer_rate(1000, 0) == 0.0

    def test_transfer_rate_human_readable(self):
        assert format_transfer_rate_human_readable(2048.0) == "2.0 KB/s"
