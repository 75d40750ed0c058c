import logging as root_logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

SDK_LOGGER_NAME = "wedeploy"


def setup_sdk_logging(
    level="INFO",
    pretty: bool = False,
    console: Optional[Console] = None,
    propagate: bool = False,
):
    """
    Configures the global logging strategy for the WeDeploy SDK.

    This function initializes the 'wedeploy' logger namespace and provides two
    output modes: a 'pretty' mode rendered by the Rich library, and a
    standard stream mode for plain environments.
    Existing handlers are cleared, so calling it again replaces the previous
    configuration instead of duplicating log entries.

    Args:
        level (str): The logging threshold (e.g., "DEBUG", "INFO", "WARNING").
            Defaults to "INFO".
        pretty (bool): If True, enables Rich terminal output with colors,
            timestamps, and formatted tracebacks.
        console (Optional[rich.console.Console]): An optional Rich Console
            instance, used only in pretty mode. Defaults to a new
            Console(stderr=True).
        propagate (bool): Whether records bubble up to the root logger.
            Defaults to False, which avoids duplicate output in test runners.
    """
    logger = root_logging.getLogger(SDK_LOGGER_NAME)

    if logger.hasHandlers():
        logger.handlers.clear()

    if pretty:
        console = console or Console(stderr=True)

        handler = RichHandler(
            level=level,
            console=console,
            show_time=True,
            show_path=True,
            markup=True,
            rich_tracebacks=True,
            log_time_format="[%X]",
        )
        formatter = root_logging.Formatter(
            fmt="[dim white]%(name)s[/dim white]: %(message)s", datefmt="[%X]"
        )
        handler.setFormatter(formatter)
        init_message = f"SDK Logging initialized at level: [bold]{level}[/bold]"
        extra = {"markup": True}
    else:
        handler = root_logging.StreamHandler(sys.stderr)
        formatter = root_logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        init_message = f"SDK Logging initialized at level: {level}"
        extra = {}

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate

    logger.info(init_message, extra=extra)


def get_logger(name: Optional[str] = None) -> root_logging.Logger:
    """
    Retrieves a logger instance within the WeDeploy SDK namespace.

    Args:
        name (Optional[str]): The name of the logger, typically `__name__`
            (e.g., 'wedeploy.comm.transport'). If None, the top-level
            'wedeploy' logger is returned.
    """
    if name is not None:
        return root_logging.getLogger(name=name)
    else:
        return root_logging.getLogger(SDK_LOGGER_NAME)
