"""Base class for demodulation models and the enumerations describing them."""

from __future__ import annotations

import enum
import threading
from typing import Any

from .options import parse_integer
from .stream import Block, Tag


class Mode(enum.Enum):
    """Which pair of AIS channels a model listens to."""

    AB = enum.auto()
    CD = enum.auto()
    ABCD = enum.auto()
    X = enum.auto()


class ModelClass(enum.Enum):
    """Kind of input a model expects."""

    IQ = enum.auto()
    FM = enum.auto()
    TXT = enum.auto()
    N2K = enum.auto()


class _MessageMutex(Block):
    """Pass messages through while holding a lock shared by all models.

    Keeps message streams from different devices from interleaving downstream.
    """

    _lock = threading.Lock()

    def receive(self, data: Any, tag: Tag) -> None:
        with self._lock:
            self.send(data, tag)


class Model:
    """A demodulation model: turns a device stream into decoded messages."""

    model_class = ModelClass.IQ

    def __init__(self) -> None:
        self.name = ""
        self.station = 0
        self.mode = Mode.AB
        self.designation = "AB"
        self.source: Any = None
        self.output = _MessageMutex()
        self.output_gps = Block()

    def build(self, ch1: str, ch2: str, sample_rate: int, source: Any) -> None:
        """Wire the model to its input source."""
        self.source = source

    def set(self, option: str, arg: str) -> Model:
        """Apply one named setting; raises ValueError on unknown options."""
        option = option.upper()
        if option in ("STATION_ID", "ID"):
            self.station = parse_integer(arg)
        else:
            raise ValueError("Model: unknown setting.")
        return self

    def get(self) -> str:
        """Describe the model's settings."""
        return ""