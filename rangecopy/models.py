from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CopyStatus(str, Enum):
    """
    Status for en enkelt range copy gennem hele forløbet.

    Normal Workflow: Unvalidated -> Validated -> Copying -> Completed
    Alternative: -> Failed (ved valideringsfejl eller I/O fejl)
    """

    UNVALIDATED = "Unvalidated"  # Request modtaget, ikke tjekket mod filsystemet
    VALIDATED = "Validated"  # Offsets/count resolved, filer åbnet
    COPYING = "Copying"  # Chunk loop kører
    COMPLETED = "Completed"  # Alle bytes kopieret
    FAILED = "Failed"  # Valideringsfejl eller I/O fejl (terminal)


class CopyDirection(str, Enum):
    """Iteration order for the chunk loop."""

    FORWARD = "forward"  # Lowest offset first
    BACKWARD = "backward"  # Highest offset first
    NONE = "none"  # Same file, same offset: nothing to move


class CopyRequest(BaseModel):
    """
    One range copy as requested by the caller.

    `count` is None when the caller wants the rest of the source file;
    it is resolved against the real file size during validation.
    """

    model_config = ConfigDict(frozen=True)

    source_path: Path = Field(..., description="File to read from")
    dest_path: Path = Field(..., description="File to write to, created if missing")
    source_offset: int = Field(default=0, ge=0, description="Byte offset in source")
    dest_offset: int = Field(default=0, ge=0, description="Byte offset in destination")
    count: Optional[int] = Field(
        default=None, ge=0, description="Bytes to copy, None means rest of source"
    )
