"""
githop logging: stdlib logging rendered through rich on stderr.

Loggers live under the "githop" namespace; only that namespace is configured so
libraries keep their own defaults.
"""
import logging

from rich.logging import RichHandler


def setup(console, /, *, debug=False):
    """
    Attach a RichHandler on the given console to the "githop" logger.

    Calling setup() again replaces the previous handler instead of stacking another.
    """
    logger = logging.getLogger("githop")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=console, show_time=False, show_path=debug, markup=False, rich_tracebacks=debug)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False
    return logger


__all__ = (
    "setup",
)
