from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Kopiering
    chunk_size_kb: int = Field(default=1024, gt=0)  # 1MB read/write buffer

    # Logging konfiguration
    log_level: str = "WARNING"
    log_file_path: str = ""  # Empty disables the log file
    log_retention_days: int = 30

    model_config = SettingsConfigDict(
        env_prefix="RANGECOPY_",
        env_file="settings.env",
        extra="ignore",
    )

    @property
    def chunk_size(self) -> int:
        """Chunk size in bytes."""
        return self.chunk_size_kb * 1024

    @property
    def log_directory(self) -> Optional[Path]:
        """Returnerer log directory som Path objekt"""
        if not self.log_file_path:
            return None
        return Path(self.log_file_path).parent
