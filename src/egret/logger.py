"""Minimal logging helper wrapping the standard library logging module."""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under "egret.".

    Example:
        >>> get_logger("mymodule").name
        'egret.mymodule'
    """
    if not (name == "egret" or name.startswith("egret.")):
        name = f"egret.{name}"
    return logging.getLogger(name)
