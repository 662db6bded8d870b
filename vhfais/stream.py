"""Streaming building blocks: tags, messages and connections between blocks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Tag:
    """Side information that travels along with a stream of samples or messages."""

    mode: int = 0
    ppm: float = 0.0
    level: float = 0.0
    sample_lvl: float = 0.0
    lat: float = 0.0
    lon: float = 0.0
    distance: float = 0.0
    speed: float = 0.0
    shipclass: int = 0


@dataclass
class AisMessage:
    """A decoded AIS message with its reception details."""

    msg_type: int = 0
    mmsi: int = 0
    channel: str = "A"
    station: int = 0
    nmea: list[str] = field(default_factory=list)
    rx_time: float = 0.0


class Connection:
    """Fan-out of a stream to any number of receiving blocks."""

    def __init__(self) -> None:
        self._targets: list[Any] = []

    def connect(self, target: Any) -> Any:
        self._targets.append(target)
        return target

    def send(self, data: Any, tag: Tag) -> None:
        for target in self._targets:
            target.receive(data, tag)

    def is_connected(self) -> bool:
        return bool(self._targets)

    def __rshift__(self, target: Any) -> Any:
        return self.connect(target)


class Block:
    """A stream processing element with one output connection.

    The base block passes its input through unchanged.
    """

    def __init__(self) -> None:
        self.out = Connection()

    def receive(self, data: Any, tag: Tag) -> None:
        self.send(data, tag)

    def send(self, data: Any, tag: Tag) -> None:
        self.out.send(data, tag)

    def __rshift__(self, target: Any) -> Any:
        return self.out.connect(target)