import sys
import logging

# third-party loggers that are noisy at INFO
QUIET_LOGGERS = ("urllib3", "web3", "aiohttp")


def setup_logging(debug: bool, to_file: str | None = None) -> None:
    """Log to stderr (stdout carries the CLI's JSON) and optionally to a file."""
    level = logging.DEBUG if debug else logging.INFO
    fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if to_file:
        handlers.append(logging.FileHandler(to_file, encoding="utf-8"))

    logging.basicConfig(level=level, format=fmt, datefmt="%H:%M:%S", handlers=handlers, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
