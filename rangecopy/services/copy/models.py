from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

from rangecopy.core.copy_state_machine import CopyStateMachine
from rangecopy.core.exceptions import RangeCopyError
from rangecopy.models import CopyDirection, CopyStatus
from rangecopy.utils.progress_utils import (
    calculate_transfer_rate,
    format_bytes_human_readable,
    format_transfer_rate_human_readable,
)


@dataclass
class ResolvedPlan:
    """
    A validated copy: every value concrete, both files open.

    Only RangeValidator creates these. The plan owns the two handles
    until it is executed or closed.
    """

    source_path: Path
    dest_path: Path
    source_offset: int
    dest_offset: int
    count: int
    source_size: int
    dest_size_before: int
    dest_created: bool
    same_file: bool
    source_handle: BinaryIO = field(repr=False)
    dest_handle: BinaryIO = field(repr=False)
    state: CopyStateMachine = field(repr=False)

    @property
    def dest_end(self) -> int:
        return self.dest_offset + self.count

    @property
    def extends_destination(self) -> bool:
        return self.dest_end > self.dest_size_before

    @property
    def closed(self) -> bool:
        return self.source_handle.closed and self.dest_handle.closed

    def close(self) -> None:
        """Close both handles. A plan closed before execution is discarded."""
        if self.state.status == CopyStatus.VALIDATED:
            self.state.fail(RangeCopyError("plan closed before execution"))
        try:
            self.source_handle.close()
        finally:
            self.dest_handle.close()

    def __enter__(self) -> "ResolvedPlan":
        return self

    def __exit__(self, *args) -> None:
        self.close()


@dataclass
class CopyResult:
    source_path: Path
    destination_path: Path
    source_offset: int
    dest_offset: int
    bytes_copied: int
    direction: CopyDirection
    elapsed_seconds: float
    start_time: datetime
    end_time: datetime
    dest_created: bool = False

    @property
    def transfer_rate_bytes_per_sec(self) -> float:
        """Calculate transfer rate in bytes per second."""
        return calculate_transfer_rate(self.bytes_copied, self.elapsed_seconds)

    @property
    def transfer_rate_mb_per_sec(self) -> float:
        """Calculate transfer rate in MB per second."""
        return self.transfer_rate_bytes_per_sec / (1024 * 1024)

    def get_summary(self) -> str:
        """Get a human-readable summary of the copy operation."""
        return (
            f"Copied {format_bytes_human_readable(self.bytes_copied)} "
            f"{self.source_path.name}@{self.source_offset} -> "
            f"{self.destination_path.name}@{self.dest_offset} "
            f"in {self.elapsed_seconds:.2f}s "
            f"({format_transfer_rate_human_readable(self.transfer_rate_bytes_per_sec)})"
        )
