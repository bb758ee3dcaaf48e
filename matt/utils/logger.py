"""
Logging for MATT auction runs.

Every module logs under the "matt" hierarchy, one child per subsystem:

    matt.clearing       price search and winner selection
    matt.verification   per-bid verifier outcomes
    matt.cli            command entry points

Nothing is printed until an entry point calls setup_from_config() (or
setup_logging()). Console output goes to stderr through colorlog so that
`matt clear --json` keeps stdout machine readable; a plain-text copy can
be appended to <log_dir>/matt.log.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional

import colorlog

ROOT_LOGGER = "matt"
LOG_FILE_NAME = "matt.log"

CLEARING = "clearing"
VERIFICATION = "verification"
CLI = "cli"
SUBSYSTEMS = (CLEARING, VERIFICATION, CLI)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(log_color)s%(asctime)s [%(name)s] %(levelname)-8s%(reset)s %(message)s"
FILE_FORMAT = "%(asctime)s [%(name)s] %(levelname)-8s %(message)s"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def _console_handler(level: int) -> logging.Handler:
    handler = colorlog.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(colorlog.ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT, log_colors=LOG_COLORS))
    return handler


def _file_handler(log_file: Path, level: int) -> logging.Handler:
    log_file.parent.mkdir(exist_ok=True, parents=True)
    handler = logging.FileHandler(log_file)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


class MattLogger:
    """Installs handlers on the "matt" logger once per process."""

    _initialized = False
    _log_file: Optional[Path] = None

    @classmethod
    def setup(
        cls,
        level: int = logging.INFO,
        log_dir: Optional[str] = None,
        log_to_file: bool = False,
    ):
        """
        Attach the console handler and, optionally, the auction log file.

        Args:
            level: Threshold for both handlers
            log_dir: Directory holding matt.log (./logs when None)
            log_to_file: Also append records to matt.log
        """
        if cls._initialized:
            return

        root_logger = logging.getLogger(ROOT_LOGGER)
        root_logger.setLevel(level)
        root_logger.handlers.clear()
        root_logger.addHandler(_console_handler(level))

        if log_to_file:
            cls._log_file = Path(log_dir or "logs") / LOG_FILE_NAME
            root_logger.addHandler(_file_handler(cls._log_file, level))

        cls._initialized = True
        root_logger.debug(f"Logging at {logging.getLevelName(level)}, file={cls._log_file}")

    @classmethod
    def setup_from_config(cls, config: Any, debug: bool = False):
        """Configure logging from a MattConfig's log_dir and log_to_file."""
        cls.setup(
            level=logging.DEBUG if debug else logging.INFO,
            log_dir=str(config.log_dir),
            log_to_file=config.log_to_file,
        )

    @classmethod
    def log_file(cls) -> Optional[Path]:
        """Path of the active log file, or None when logging to console only."""
        return cls._log_file

    @classmethod
    def reset(cls):
        """Drop installed handlers so setup() can run again."""
        root_logger = logging.getLogger(ROOT_LOGGER)
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()
        cls._initialized = False
        cls._log_file = None

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get the logger for one subsystem.

        Raises:
            ValueError: If name is not one of SUBSYSTEMS
        """
        if name not in SUBSYSTEMS:
            raise ValueError(f"Unknown logging subsystem {name!r}, expected one of {', '.join(SUBSYSTEMS)}")
        return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def describe_bid(bid: Any) -> str:
    """Short log label for a bid: shortened bidder address (if any) and amount."""
    amount = getattr(bid, "amount", "?")
    bidder = getattr(bid, "bidder", None)
    if isinstance(bidder, str) and len(bidder) > 12:
        bidder = f"{bidder[:6]}..{bidder[-4:]}"
    if bidder is None:
        return f"amount={amount}"
    return f"bidder={bidder} amount={amount}"


# Convenience functions
def get_logger(name: str) -> logging.Logger:
    return MattLogger.get_logger(name)


def setup_logging(
    level: int = logging.INFO,
    log_dir: Optional[str] = None,
    log_to_file: bool = False,
):
    MattLogger.setup(level=level, log_dir=log_dir, log_to_file=log_to_file)
