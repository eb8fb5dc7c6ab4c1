from typing import Iterator, NamedTuple

from rangecopy.models import CopyDirection


class Chunk(NamedTuple):
    source_position: int
    dest_position: int
    length: int


def choose_direction(source_offset: int, dest_offset: int, same_file: bool) -> CopyDirection:
    """
    Pick the chunk order so no chunk is overwritten before it has been read.

    Only matters when both ranges live in the same file. Writing towards
    higher offsets must start from the top (like memmove), writing towards
    lower offsets must start from the bottom.
    """
    if not same_file:
        return CopyDirection.FORWARD
    if dest_offset > source_offset:
        return CopyDirection.BACKWARD
    if dest_offset < source_offset:
        return CopyDirection.FORWARD
    return CopyDirection.NONE


def iter_chunks(
    source_offset: int,
    dest_offset: int,
    count: int,
    chunk_size: int,
    direction: CopyDirection,
) -> Iterator[Chunk]:
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    if direction == CopyDirection.NONE:
        return

    if direction == CopyDirection.FORWARD:
        done = 0
        while done < count:
            length = min(chunk_size, count - done)
            yield Chunk(source_offset + done, dest_offset + done, length)
            done += length
    else:
        end = count
        while end > 0:
            length = min(chunk_size, end)
            start = end - length
            yield Chunk(source_offset + start, dest_offset + start, length)
            end = start
