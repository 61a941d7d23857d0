"""Helper functions and utilities for the package."""

import logging
import os
import pathlib
import sys


def configure_logging(
    app_name: str,
    *,
    level: int = logging.INFO,
    fmt_str: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    file_path: pathlib.Path | None = None,
) -> logging.Logger:
    """Configures and returns a logger for the application.

    Args:
        app_name: The name of the application.
        level: The logging level.
        fmt_str: The logging format.
        file_path: Optional path to a file to log messages to.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(level)

    # Replace handlers from an earlier call, e.g. another command run in the same process.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt_str)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if file_path:
        file_handler = logging.FileHandler(file_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def resolve_output_dir(
    inp_dir: pathlib.Path,
    out_dir: pathlib.Path | None,
    default_name: str,
) -> pathlib.Path:
    """Get the directory to write results to, creating it if needed.

    Args:
        inp_dir: The input directory, under which the default is placed.
        out_dir: The directory requested by the user, if any.
        default_name: Name of the subdirectory of `inp_dir` used when
            `out_dir` is None.

    Raises:
        PermissionError: If the default is needed but `inp_dir` is read-only.
    """
    if out_dir is None:
        if not os.access(inp_dir, os.W_OK):
            raise PermissionError(f"Cannot write to directory: {inp_dir}")
        out_dir = inp_dir / default_name
    out_dir.mkdir(parents=True, exist_ok=True)
    return out_dir


__all__ = ["configure_logging", "resolve_output_dir"]
