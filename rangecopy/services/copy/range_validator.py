import logging
from typing import BinaryIO, Optional

from rangecopy.core.copy_state_machine import CopyStateMachine
from rangecopy.core.exceptions import (
    CopyIOError,
    DestinationNotAFile,
    DestMustPreexistForNonzeroOffset,
    DestOffsetOutOfRange,
    RangeCopyError,
    ReadPastEnd,
    SourceNotFound,
    SourceOffsetOutOfRange,
)
from rangecopy.models import CopyRequest, CopyStatus
from rangecopy.services.copy.models import ResolvedPlan
from rangecopy.utils.file_operations import (
    get_file_size,
    is_readable_file,
    is_same_file,
    open_destination_file,
    open_source_file,
    validate_source_file,
)


class RangeValidator:
    """Checks a CopyRequest against the live file system and opens both files."""

    def validate(self, request: CopyRequest) -> ResolvedPlan:
        state = CopyStateMachine(f"{request.source_path} -> {request.dest_path}")
        try:
            plan = self._resolve(request, state)
        except RangeCopyError as e:
            state.fail(e)
            logging.warning(f"Validation failed for {state.description}: {e}")
            raise

        state.transition(CopyStatus.VALIDATED)
        logging.debug(
            f"Resolved plan: src_offset={plan.source_offset} dst_offset={plan.dest_offset} "
            f"count={plan.count} source_size={plan.source_size} "
            f"dest_size={plan.dest_size_before} created={plan.dest_created} "
            f"same_file={plan.same_file}"
        )
        return plan

    def _resolve(self, request: CopyRequest, state: CopyStateMachine) -> ResolvedPlan:
        source_path = request.source_path
        dest_path = request.dest_path

        # 1. Kilde
        source_size = self._check_source(request)
        if request.source_offset > source_size:
            raise SourceOffsetOutOfRange(request.source_offset, source_size)

        # Two-stage count: None means "rest of the source"
        if request.count is None:
            count = source_size - request.source_offset
        else:
            count = request.count
            if request.source_offset + count > source_size:
                raise ReadPastEnd(request.source_offset, count, source_size)

        # 2. Destination
        dest_size, dest_exists = self._check_destination(request)

        # 3. Åbn filer (destination oprettes her hvis den mangler)
        src = self._open_source(request)
        dst: Optional[BinaryIO] = None
        try:
            try:
                dst = open_destination_file(dest_path)
            except OSError as e:
                raise CopyIOError(f"open destination {dest_path}", e) from e

            try:
                same_file = is_same_file(src, dst)
            except OSError as e:
                raise CopyIOError("stat open files", e) from e

            try:
                src.seek(request.source_offset)
                dst.seek(request.dest_offset)
            except OSError as e:
                raise CopyIOError("initial seek", e) from e
        except BaseException:
            src.close()
            if dst is not None:
                dst.close()
            raise

        if not dest_exists:
            logging.info(f"Created destination file {dest_path}")

        return ResolvedPlan(
            source_path=source_path,
            dest_path=dest_path,
            source_offset=request.source_offset,
            dest_offset=request.dest_offset,
            count=count,
            source_size=source_size,
            dest_size_before=dest_size,
            dest_created=not dest_exists,
            same_file=same_file,
            source_handle=src,
            dest_handle=dst,
            state=state,
        )

    @staticmethod
    def _check_source(request: CopyRequest) -> int:
        source_path = request.source_path
        try:
            validate_source_file(source_path)
            readable = is_readable_file(source_path)
        except FileNotFoundError:
            raise SourceNotFound(source_path)
        except ValueError:
            raise SourceNotFound(source_path, "is not a regular file")
        except OSError as e:
            # e.g. ENAMETOOLONG or EACCES on a parent directory
            raise CopyIOError(f"stat source {source_path}", e) from e

        if not readable:
            raise SourceNotFound(source_path, "is not readable")

        try:
            return get_file_size(source_path)
        except FileNotFoundError:
            raise SourceNotFound(source_path)
        except OSError as e:
            raise CopyIOError(f"stat source {source_path}", e) from e

    @staticmethod
    def _check_destination(request: CopyRequest) -> tuple[int, bool]:
        dest_path = request.dest_path
        try:
            dest_exists = dest_path.exists()
            dest_is_file = dest_exists and dest_path.is_file()
            dest_size = get_file_size(dest_path) if dest_is_file else 0
        except OSError as e:
            raise CopyIOError(f"stat destination {dest_path}", e) from e

        if dest_exists:
            if not dest_is_file:
                raise DestinationNotAFile(dest_path)
            if request.dest_offset > dest_size:
                raise DestOffsetOutOfRange(request.dest_offset, dest_size)
            return dest_size, True

        if request.dest_offset > 0:
            raise DestMustPreexistForNonzeroOffset(dest_path, request.dest_offset)
        return 0, False

    @staticmethod
    def _open_source(request: CopyRequest) -> BinaryIO:
        try:
            return open_source_file(request.source_path)
        except PermissionError:
            raise SourceNotFound(request.source_path, "is not readable")
        except FileNotFoundError:
            raise SourceNotFound(request.source_path)
        except OSError as e:
            raise CopyIOError(f"open source {request.source_path}", e) from e
