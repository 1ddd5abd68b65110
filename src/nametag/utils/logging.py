"""Logging utilities for Nametag."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_HANDLER_MARK = "_nametag_handler"


@dataclass
class BuildStats:
    """Statistics from a build run."""

    parts_built: int = 0
    booleans: int = 0
    faces: int = 0
    part_durations: dict[str, float] = field(default_factory=dict)
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate build duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def _replace_handler(root_logger: logging.Logger, handler: logging.Handler, kind: str) -> None:
    for existing in list(root_logger.handlers):
        if getattr(existing, _HANDLER_MARK, None) == kind:
            root_logger.removeHandler(existing)
            existing.close()
    setattr(handler, _HANDLER_MARK, kind)
    root_logger.addHandler(handler)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        _replace_handler(root_logger, file_handler, "file")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    _replace_handler(root_logger, console_handler, "console")

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("nametag")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=console_level,
    )

    return logger


class BuildLogger:
    """Logger for tracking build progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("nametag")
        self._stats = BuildStats()

    def log_part_start(self, part: str) -> None:
        """Log start of a part build."""
        self._logger.debug("Building part", part=part)

    def log_part_complete(self, part: str, faces: int, duration_ms: float) -> None:
        """Log a finished part."""
        self._logger.info(
            "Part built",
            part=part,
            faces=faces,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.parts_built += 1
        self._stats.part_durations[part] = duration_ms

    def log_boolean(self, operation: str, left_faces: int, right_faces: int, result_faces: int) -> None:
        """Log a boolean operation on two solids."""
        self._logger.debug(
            "Boolean applied",
            operation=operation,
            left=left_faces,
            right=right_faces,
            result=result_faces,
        )
        self._stats.booleans += 1

    def log_part_error(self, part: str, error: Exception) -> None:
        """Log a failed build step."""
        self._logger.error(
            "Build step failed",
            part=part,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.errors.append((part, str(error)))

    def log_validation(self, vertices: int, faces: int) -> None:
        """Log topology check results."""
        self._logger.debug(
            "Manifold check passed",
            vertices=vertices,
            faces=faces,
        )

    @property
    def stats(self) -> BuildStats:
        """Get current build statistics."""
        return self._stats
