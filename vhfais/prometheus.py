"""Message statistics exported in the Prometheus text exposition format."""

from __future__ import annotations

import threading

from .stream import AisMessage, Tag

SHIP_CLASS_NAMES = (
    "Other",
    "Unknown",
    "Cargo",
    "Class B",
    "Passenger",
    "Special",
    "Tanker",
    "High Speed",
    "Fishing",
    "Plane",
    "Helicopter",
    "Station",
    "Aid-to-Navigation",
    "Search and Rescue Transponder EPIRB",
)

_MESSAGE_TYPES = 27
_CHANNELS = "ABCD"
_MAX_GAUGE_TEXT = 32768

_PPM_HEADER = "# HELP ais_msg_ppm\n# TYPE ais_msg_ppm gauge\n"
_LEVEL_HEADER = "# HELP ais_msg_level\n# TYPE ais_msg_level gauge\n"


class PrometheusCounter:
    """Counts received messages per type and channel and collects signal gauges."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.cutoff = 2500
        self._ppm = _PPM_HEADER
        self._level = _LEVEL_HEADER
        self._count = 0
        self._by_type = [0] * _MESSAGE_TYPES
        self._by_channel = dict.fromkeys(_CHANNELS, 0)
        self._distance = 0.0

    @property
    def count(self) -> int:
        """Total number of messages counted."""
        return self._count

    def clear(self) -> None:
        """Reset all counters and the longest distance."""
        with self._lock:
            self._count = 0
            self._by_type = [0] * _MESSAGE_TYPES
            self._by_channel = dict.fromkeys(_CHANNELS, 0)
            self._distance = 0.0

    def reset(self) -> None:
        """Drop the collected per-message gauges, keeping the counters."""
        with self._lock:
            self._ppm = _PPM_HEADER
            self._level = _LEVEL_HEADER

    def set_cutoff(self, cutoff: int) -> None:
        self.cutoff = cutoff

    def _add(self, message: AisMessage, tag: Tag) -> None:
        if not 1 <= message.msg_type <= _MESSAGE_TYPES:
            return
        if not 0 <= tag.shipclass < len(SHIP_CLASS_NAMES):
            return

        if tag.speed < 0:
            speed = "Unknown"
        elif tag.speed > 0.5:
            speed = "Moving"
        else:
            speed = "Stationary"

        labels = (
            f'{{type="{message.msg_type}",mmsi="{message.mmsi}",'
            f'station_id="{message.station}",speed="{speed}",'
            f'shipclass="{SHIP_CLASS_NAMES[tag.shipclass]}",channel="{message.channel}"}}'
        )
        if tag.ppm < 1000:
            self._ppm += f"ais_msg_ppm{labels} {tag.ppm:f}\n"
        if tag.level < 1000:
            self._level += f"ais_msg_level{labels} {tag.level:f}\n"

        self._count += 1
        self._by_type[message.msg_type - 1] += 1
        if message.channel in self._by_channel:
            self._by_channel[message.channel] += 1
        if tag.distance > self._distance:
            self._distance = tag.distance

    def receive(self, message: AisMessage, tag: Tag) -> None:
        """Account for one message; gauges stop growing once their text is large."""
        if len(self._ppm) > _MAX_GAUGE_TEXT or len(self._level) > _MAX_GAUGE_TEXT:
            return
        with self._lock:
            self._add(message, tag)

    def to_prometheus(self) -> str:
        """Render all counters and gauges as Prometheus metrics text."""
        with self._lock:
            parts = [
                "# HELP ais_stat_count Total number of messages\n",
                "# TYPE ais_stat_count counter\n",
                f"ais_stat_count {self._count}\n",
                "# HELP ais_stat_distance Longest distance\n",
                "# TYPE ais_stat_distance gauge\n",
                f"ais_stat_distance {self._distance:f}\n",
            ]
            for ch, n in self._by_channel.items():
                name = f"ais_stat_count_channel_{ch}"
                parts.append(f"# HELP {name} Total number of messages on channel {ch}\n")
                parts.append(f"# TYPE {name} counter\n")
                parts.append(f"{name} {n}\n")
            for msg_type, n in enumerate(self._by_type, start=1):
                name = f"ais_stat_count_type_{msg_type}"
                parts.append(f"# HELP {name} Total number of messages of type {msg_type}\n")
                parts.append(f"# TYPE {name} counter\n")
                parts.append(f"{name} {n}\n")
            parts.append(self._ppm)
            parts.append(self._level)
            return "".join(parts)