"""Log setup for the command line.

Library modules only create module-level loggers; handlers are installed
once by the CLI entry point.
"""

import logging

from rich.logging import RichHandler

from clir.utils.formatting import err_console

_LEVELS: dict[int, int] = {
    0: logging.ERROR,
    1: logging.WARNING,
    2: logging.INFO,
}


def level_for_verbosity(verbosity: int) -> int:
    """Map the number of ``-v`` flags to a logging level.

    Args:
        verbosity: How often ``--verbose`` was given.

    Returns:
        ERROR, WARNING, INFO, or DEBUG for three or more.
    """
    return _LEVELS.get(verbosity, logging.DEBUG if verbosity > 0 else logging.ERROR)


def setup_logging(verbosity: int = 0) -> None:
    """Route clir's log records to stderr through Rich.

    Safe to call more than once; the previous handler is replaced.

    Args:
        verbosity: How often ``--verbose`` was given.
    """
    logger = logging.getLogger("clir")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=err_console,
        show_time=False,
        show_path=verbosity >= 3,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level_for_verbosity(verbosity))
