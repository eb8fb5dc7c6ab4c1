import logging
from typing import BinaryIO, Optional

from rangecopy.core.exceptions import CopyIOError
from rangecopy.models import CopyDirection
from rangecopy.services.copy.chunk_planner import iter_chunks
from rangecopy.services.progress import NullProgressSink, ProgressSink
from rangecopy.utils.progress_utils import calculate_copy_progress


class CopyIoLoop:
    """
    Håndterer den rå, chunk-for-chunk I/O-loop for kopiering.
    Ét genbrugt buffer på chunk_size bytes, uanset hvor mange bytes der kopieres.
    """

    def __init__(self, chunk_size: int):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size

    def copy_range(
        self,
        src: BinaryIO,
        dst: BinaryIO,
        source_offset: int,
        dest_offset: int,
        count: int,
        direction: CopyDirection,
        progress_sink: Optional[ProgressSink] = None,
    ) -> int:
        """
        Kopiér `count` bytes fra src til dst i chunks i den givne retning.

        Args:
            src: Åben fil-handler til kilde (unbuffered)
            dst: Åben fil-handler til destination (unbuffered)
            source_offset: Start byte position i kilden
            dest_offset: Start byte position i destinationen
            count: Antal bytes der skal kopieres
            direction: Chunk rækkefølge, se choose_direction()
            progress_sink: Modtager antal bytes efter hver chunk

        Returns:
            Antal kopierede bytes (altid lig med count)

        Raises:
            CopyIOError: Ved seek/read/write fejl eller hvis kilden er blevet kortere
        """
        sink = progress_sink or NullProgressSink()
        bytes_copied = 0

        self._notify(sink.start, count)
        try:
            if direction == CopyDirection.NONE:
                # Same file, same offset: bytes are already where they belong
                logging.debug(f"Source and destination range are identical, skipping {count} bytes")
                self._notify(sink.advance, count)
                bytes_copied = count
                return bytes_copied

            buffer = bytearray(min(self.chunk_size, count))
            view = memoryview(buffer)

            for chunk in iter_chunks(
                source_offset, dest_offset, count, self.chunk_size, direction
            ):
                piece = view[: chunk.length]
                self._seek(src, chunk.source_position, "source seek")
                self._read_exact(src, piece)
                self._seek(dst, chunk.dest_position, "destination seek")
                self._write_all(dst, piece)

                bytes_copied += chunk.length
                self._notify(sink.advance, chunk.length)
                logging.debug(
                    f"Chunk {direction.value} @src {chunk.source_position} "
                    f"-> @dst {chunk.dest_position} ({chunk.length} bytes, "
                    f"{calculate_copy_progress(bytes_copied, count):.1f}%)"
                )

            return bytes_copied
        finally:
            self._notify(sink.finish, bytes_copied)

    @staticmethod
    def _seek(handle: BinaryIO, position: int, operation: str) -> None:
        try:
            handle.seek(position)
        except OSError as e:
            raise CopyIOError(operation, e) from e

    @staticmethod
    def _read_exact(src: BinaryIO, target: memoryview) -> None:
        filled = 0
        while filled < len(target):
            try:
                n = src.readinto(target[filled:])
            except OSError as e:
                raise CopyIOError("chunk read", e) from e
            if not n:
                # Source shrank after validation
                raise CopyIOError(
                    f"chunk read (unexpected end of source after {filled} of {len(target)} bytes)"
                )
            filled += n

    @staticmethod
    def _write_all(dst: BinaryIO, data: memoryview) -> None:
        written = 0
        while written < len(data):
            try:
                n = dst.write(data[written:])
            except OSError as e:
                raise CopyIOError("chunk write", e) from e
            if not n:
                raise CopyIOError("chunk write (no progress)")
            written += n

    @staticmethod
    def _notify(callback, value: int) -> None:
        try:
            callback(value)
        except Exception as e:
            logging.warning(f"Progress callback error: {e}")
