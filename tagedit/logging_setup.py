from __future__ import annotations
import logging, logging.handlers, sys
import structlog
from .paths import get_dirs

def setup_logging(level: str = "WARNING"):
    """Level is an upper-case stdlib name, as load_config() returns it."""
    dirs = get_dirs()
    log_dir = dirs["logs"]
    logfile = log_dir / "tagedit.log"

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    rot = logging.handlers.RotatingFileHandler(
        logfile, maxBytes=5_000_000, backupCount=3, encoding="utf-8"
    )
    # stdout is reserved for the tag report
    stream = logging.StreamHandler(sys.stderr)
    fmt = logging.Formatter("%(message)s")
    rot.setFormatter(fmt)
    stream.setFormatter(fmt)
    root.addHandler(rot)
    root.addHandler(stream)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),  # machine-parsable logs
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
    )
    return structlog.get_logger()
