import logging
from datetime import datetime
from typing import Optional

from rangecopy.config import Settings
from rangecopy.core.exceptions import CopyIOError, InvalidTransitionError
from rangecopy.models import CopyRequest, CopyStatus
from rangecopy.services.copy.chunk_planner import choose_direction
from rangecopy.services.copy.copy_io_loop import CopyIoLoop
from rangecopy.services.copy.models import CopyResult, ResolvedPlan
from rangecopy.services.copy.range_validator import RangeValidator
from rangecopy.services.progress import ProgressSink


class RangeCopier:
    """Validates and executes range copies between two files."""

    def __init__(self, settings: Settings, chunk_size: Optional[int] = None):
        self.settings = settings
        self.chunk_size = chunk_size or settings.chunk_size
        self._validator = RangeValidator()
        self._io_loop = CopyIoLoop(self.chunk_size)

        logging.debug(f"RangeCopier initialized with chunk size: {self.chunk_size} bytes")

    def validate(self, request: CopyRequest) -> ResolvedPlan:
        """Resolve the request against the files on disk and open them."""
        return self._validator.validate(request)

    def execute(
        self, plan: ResolvedPlan, progress_sink: Optional[ProgressSink] = None
    ) -> int:
        """
        Copy plan.count bytes and close the plan's handles.

        Returns the number of bytes copied, which equals plan.count.
        Raises CopyIOError on the first I/O failure; bytes already
        written stay in the destination.
        """
        state = plan.state
        if not state.can_transition(CopyStatus.COPYING):
            raise InvalidTransitionError(
                state.description, state.status.value, CopyStatus.COPYING.value
            )

        direction = choose_direction(plan.source_offset, plan.dest_offset, plan.same_file)
        state.transition(CopyStatus.COPYING)
        logging.info(
            f"Copying {plan.count} bytes {plan.source_path}@{plan.source_offset} -> "
            f"{plan.dest_path}@{plan.dest_offset} ({direction.value})"
        )
        if plan.extends_destination:
            logging.debug(
                f"Destination grows from {plan.dest_size_before} to {plan.dest_end} bytes"
            )
        try:
            try:
                bytes_copied = self._io_loop.copy_range(
                    plan.source_handle,
                    plan.dest_handle,
                    plan.source_offset,
                    plan.dest_offset,
                    plan.count,
                    direction,
                    progress_sink,
                )
            finally:
                self._close_plan(plan)
        except Exception as e:
            state.fail(e)
            logging.error(f"Copy failed for {state.description}: {e}")
            raise

        state.transition(CopyStatus.COMPLETED)
        return bytes_copied

    def copy(
        self, request: CopyRequest, progress_sink: Optional[ProgressSink] = None
    ) -> CopyResult:
        """validate() followed by execute(), with timing."""
        start_time = datetime.now()
        plan = self.validate(request)
        direction = choose_direction(plan.source_offset, plan.dest_offset, plan.same_file)
        bytes_copied = self.execute(plan, progress_sink)
        end_time = datetime.now()

        result = CopyResult(
            source_path=plan.source_path,
            destination_path=plan.dest_path,
            source_offset=plan.source_offset,
            dest_offset=plan.dest_offset,
            bytes_copied=bytes_copied,
            direction=direction,
            elapsed_seconds=(end_time - start_time).total_seconds(),
            start_time=start_time,
            end_time=end_time,
            dest_created=plan.dest_created,
        )
        logging.info(result.get_summary())
        return result

    @staticmethod
    def _close_plan(plan: ResolvedPlan) -> None:
        try:
            plan.close()
        except OSError as e:
            raise CopyIOError("closing files", e) from e
