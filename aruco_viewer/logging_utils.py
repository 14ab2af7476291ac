import logging
import sys
from typing import IO, Optional

FORMAT = "%(asctime)s %(levelname)s [%(tool)s] %(message)s"


class ToolNameFilter(logging.Filter):
    def __init__(self, tool_name: str):
        super().__init__()
        self.tool_name = tool_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.tool = self.tool_name
        return True


class BelowLevelFilter(logging.Filter):
    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def _has_own_handler(logger: logging.Logger) -> bool:
    return any(
        any(isinstance(f, ToolNameFilter) for f in h.filters) for h in logger.handlers
    )


def setup_logger(
    tool_name: str,
    level: int = logging.INFO,
    stream: Optional[IO[str]] = None,
    err_stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Readouts and progress go to stdout, errors to stderr."""
    logger = logging.getLogger(f"aruco_viewer.{tool_name}")
    logger.setLevel(level)

    if not _has_own_handler(logger):
        fmt = logging.Formatter(FORMAT)

        out = logging.StreamHandler(stream if stream is not None else sys.stdout)
        out.setFormatter(fmt)
        out.addFilter(ToolNameFilter(tool_name))
        out.addFilter(BelowLevelFilter(logging.ERROR))
        logger.addHandler(out)

        err = logging.StreamHandler(err_stream if err_stream is not None else sys.stderr)
        err.setLevel(logging.ERROR)
        err.setFormatter(fmt)
        err.addFilter(ToolNameFilter(tool_name))
        logger.addHandler(err)

    return logger
