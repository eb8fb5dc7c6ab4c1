import logging
import logging.handlers
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import Settings


def setup_logging(
    settings: Settings,
    console: Optional[Console] = None,
    level: Optional[str] = None,
) -> None:
    log_level = (level or settings.log_level).upper()

    # Rich console handler on stderr, stdout is left alone
    if console is None:
        console = Console(stderr=True, width=120)
    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
    )
    rich_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear any existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.addHandler(rich_handler)

    if settings.log_file_path:
        settings.log_directory.mkdir(parents=True, exist_ok=True)

        # File handler with detailed format for debugging
        file_format = (
            "%(asctime)s - %(levelname)s - "
            "%(filename)s:%(lineno)d in %(funcName)s() - "
            "%(message)s"
        )
        file_handler = logging.handlers.TimedRotatingFileHandler(
            filename=settings.log_file_path,
            when="midnight",
            interval=1,
            backupCount=settings.log_retention_days,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(file_format))
        root_logger.addHandler(file_handler)

    logging.debug(
        f"[bold green]Logging initialized[/] - "
        f"File: [cyan]{settings.log_file_path or 'disabled'}[/], "
        f"Level: [yellow]{log_level}[/], "
        f"Retention: [blue]{settings.log_retention_days}[/] days"
    )
