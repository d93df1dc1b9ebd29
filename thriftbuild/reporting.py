"""Message sink used by every operation that reports progress.

Build steps never reach for a global logger on their own. Callers pass a sink
explicitly; any ``logging.Logger`` satisfies the protocol, so the default is
simply a module logger.

Contract:
- Inputs: Text messages at debug/info/warning/error importance
- Outputs: None
- Side Effects: Whatever the sink does (normally: emit log records)
"""

import logging
from typing import Protocol

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class MessageSink(Protocol):
    """Anything that can receive build messages."""

    def debug(self, msg: str) -> None: ...

    def info(self, msg: str) -> None: ...

    def warning(self, msg: str) -> None: ...

    def error(self, msg: str) -> None: ...


def get_sink(name: str = "thriftbuild") -> MessageSink:
    """Return the default sink for a component.

    Args:
        name: Logger name

    Returns:
        Standard library logger acting as a sink
    """
    return logging.getLogger(name)


def configure_logging(log_level: str = "info") -> None:
    """Configure root logging for command-line use.

    Args:
        log_level: Level name (debug, info, warning, error)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
