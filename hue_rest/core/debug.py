"""Debug output for the Hue REST client.

A debug sink is any callable taking ``(level, message)``. Contexts filter
messages by their configured level before handing them to the sink.
"""

from enum import IntEnum
from typing import Callable

import click


class DebugLevel(IntEnum):
    MSG_OFF = 0
    MSG_ERR = 1
    MSG_INFO = 2
    MSG_DEBUG = 3


MSG_OFF = DebugLevel.MSG_OFF
MSG_ERR = DebugLevel.MSG_ERR
MSG_INFO = DebugLevel.MSG_INFO
MSG_DEBUG = DebugLevel.MSG_DEBUG

DebugSink = Callable[[int, str], None]


def click_sink(level: int, message: str) -> None:
    """Default sink: errors to stderr in red, everything else to stdout."""
    if level == MSG_ERR:
        click.secho(f"hue_rest: {message}", fg='red', err=True)
    elif level == MSG_DEBUG:
        click.secho(f"hue_rest: {message}", dim=True)
    else:
        click.echo(f"hue_rest: {message}")


class Debugger:
    """Level filter in front of a debug sink."""

    def __init__(self, sink: DebugSink | None = None, level: int = MSG_ERR):
        self.sink = sink if sink is not None else click_sink
        self.level = DebugLevel(level)

    def enabled(self, level: int) -> bool:
        return level != MSG_OFF and level <= self.level

    def log(self, level: int, message: str) -> None:
        if self.enabled(level):
            self.sink(level, message)

    def error(self, message: str) -> None:
        self.log(MSG_ERR, message)

    def info(self, message: str) -> None:
        self.log(MSG_INFO, message)

    def debug(self, message: str) -> None:
        self.log(MSG_DEBUG, message)
