"""Translation of decoded AIS messages into SQL statements for a PostgreSQL schema."""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from .options import parse_integer, parse_switch
from .stream import AisMessage, Tag

_log = logging.getLogger(__name__)

_MAX_QUEUE = 32768 * 24

POSITION_KEYS = frozenset({"lat", "lon", "mmsi", "status", "turn", "heading", "course", "speed"})
VESSEL_KEYS = frozenset(
    {
        "mmsi", "imo", "shipname", "callsign", "to_bow", "to_stern", "to_starboard",
        "to_port", "draught", "shiptype", "destination", "eta", "lat", "lon", "status",
        "turn", "ppm", "signalpower", "heading", "alt", "aid_type", "course", "speed",
    }
)
STATIC_KEYS = frozenset(
    {
        "mmsi", "imo", "shipname", "callsign", "to_bow", "to_stern", "to_starboard",
        "to_port", "draught", "shiptype", "destination", "eta",
    }
)
BASESTATION_KEYS = frozenset({"lat", "lon", "mmsi"})
SAR_KEYS = frozenset({"lat", "lon", "alt", "course", "mmsi", "speed"})
ATON_KEYS = frozenset(
    {"lat", "lon", "name", "to_bow", "to_stern", "to_starboard", "to_port", "aid_type", "mmsi"}
)


def _escape(text: str) -> str:
    """Double single quotes so the text can sit inside an SQL string literal."""
    return text.replace("'", "''")


def _json(value: Any) -> str:
    return json.dumps(value)


def _timestamp(message: AisMessage) -> str:
    return datetime.fromtimestamp(message.rx_time, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def _items(properties: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> list[tuple[str, Any]]:
    if isinstance(properties, Mapping):
        return list(properties.items())
    return list(properties)


class PostgreSQLWriter:
    """Collects SQL for received messages; ``transaction`` hands out a batch to execute.

    ``property_keys`` maps property names to ids of the ``ais_keys`` table; those
    properties are additionally logged in ``ais_property``.
    """

    def __init__(self, property_keys: Mapping[str, int] | None = None) -> None:
        self.conn_string = "dbname=ais"
        self.groups_in = 0xFFFFFFFFFFFFFFFF
        self.station_id = 0
        self.interval = 10
        self.max_fails = 10
        self.msgs = False
        self.nmea = False
        self.vp = False
        self.vs = False
        self.bs = False
        self.aton = False
        self.sar = False
        self.vd = True
        self.property_keys = dict(property_keys or {})
        if self.property_keys and not self.msgs:
            _log.warning("no messages logged in combination with property logging. MSGS ON auto activated.")
            self.msgs = True
        self._parts: list[str] = []
        self._size = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> str:
        """SQL statements collected since the last transaction."""
        with self._lock:
            return "".join(self._parts)

    def set(self, option: str, arg: str) -> PostgreSQLWriter:
        """Apply one named setting; raises ValueError on unknown options or bad values."""
        option = option.upper()
        switches = {
            "NMEA": "nmea", "VP": "vp", "V": "vd", "VS": "vs",
            "MSGS": "msgs", "BS": "bs", "ATON": "aton", "SAR": "sar",
        }
        if option == "CONN_STR":
            self.conn_string = arg
        elif option == "GROUPS_IN":
            self.groups_in = parse_integer(arg)
        elif option == "STATION_ID":
            self.station_id = parse_integer(arg)
        elif option == "INTERVAL":
            self.interval = parse_integer(arg, 5, 1800, option)
        elif option == "MAX_FAILS":
            self.max_fails = parse_integer(arg)
        elif option in switches:
            setattr(self, switches[option], parse_switch(arg))
        else:
            raise ValueError(f"DBMS: unknown setting {option}")
        return self

    def _insert(self, table, keys, properties, message, msg_id, station_id, quote_strings) -> str:
        names: list[str] = []
        values: list[str] = []
        for key, value in _items(properties):
            if key not in keys:
                continue
            names.append(key)
            if quote_strings and isinstance(value, str):
                values.append(f"'{_escape(value)}'")
            else:
                values.append(_json(value))
        names += ["msg_id", "station_id", "received_at"]
        values += [msg_id, station_id, f"'{_timestamp(message)}'"]
        return f"\tINSERT INTO {table} ({','.join(names)}) VALUES ({','.join(values)});\n"

    def add_vessel_position(self, properties, message: AisMessage, msg_id: str, station_id: str) -> str:
        if not self.vp:
            return ""
        return self._insert("ais_vessel_pos", POSITION_KEYS, properties, message, msg_id, station_id, False)

    def add_vessel_static(self, properties, message: AisMessage, msg_id: str, station_id: str) -> str:
        if not self.vs:
            return ""
        return self._insert("ais_vessel_static", STATIC_KEYS, properties, message, msg_id, station_id, True)

    def add_basestation(self, properties, message: AisMessage, msg_id: str, station_id: str) -> str:
        if not self.bs:
            return ""
        return self._insert("ais_basestation", BASESTATION_KEYS, properties, message, msg_id, station_id, False)

    def add_sar_position(self, properties, message: AisMessage, msg_id: str, station_id: str) -> str:
        if not self.sar:
            return ""
        return self._insert("ais_sar_position", SAR_KEYS, properties, message, msg_id, station_id, False)

    def add_aton(self, properties, message: AisMessage, msg_id: str, station_id: str) -> str:
        if not self.aton:
            return ""
        return self._insert("ais_aton", ATON_KEYS, properties, message, msg_id, station_id, True)

    def add_vessel(self, properties, message: AisMessage, msg_id: str, station_id: str) -> str:
        """Upsert the vessel summary row, counting messages, types and channels seen."""
        if not self.vd:
            return ""
        names: list[str] = []
        updates: list[str] = []
        values: list[str] = []
        for key, value in _items(properties):
            if key not in VESSEL_KEYS:
                continue
            names.append(key)
            updates.append(f"{key}=EXCLUDED.{key}")
            values.append(f"'{_escape(value)}'" if isinstance(value, str) else _json(value))

        type_bit = 1 << message.msg_type
        ch = ord(message.channel[0]) - ord("A") if message.channel else 4
        if ch < 0 or ch > 4:
            ch = 4
        ch_bit = 1 << ch

        names += ["msg_id", "station_id", "received_at", "count", "msg_types", "channels"]
        updates += [
            "msg_id=EXCLUDED.msg_id",
            "station_id=EXCLUDED.station_id",
            "received_at=EXCLUDED.received_at",
            "count=ais_vessel.count+1",
            f"msg_types={type_bit}|ais_vessel.msg_types",
            f"channels={ch_bit}|ais_vessel.channels",
        ]
        values += [msg_id, station_id, f"'{_timestamp(message)}'", "1", str(type_bit), str(ch_bit)]
        return (
            f"\tINSERT INTO ais_vessel ({','.join(names)}) VALUES ({','.join(values)})"
            f"ON CONFLICT (mmsi) DO UPDATE SET {','.join(updates)}; \n"
        )

    def receive(self, properties, message: AisMessage, tag: Tag) -> None:
        """Queue the SQL statements for one decoded message."""
        props = _items(properties)
        msg_id = "m_id" if self.msgs else " NULL"
        station_id = str(self.station_id or message.station)
        stamp = _timestamp(message)
        parts: list[str] = []

        if self.msgs:
            parts.append(
                "\tINSERT INTO ais_message (mmsi, station_id, type, received_at,channel, signal_level, ppm) "
                f"VALUES ({message.mmsi},{station_id},{message.msg_type},'{stamp}','{message.channel}',"
                f"{tag.level:g},{tag.ppm:g}) RETURNING id INTO m_id;\n"
            )

        if self.nmea:
            for line in message.nmea:
                parts.append(
                    "\tINSERT INTO ais_nmea (msg_id,station_id,mmsi,received_at,nmea) VALUES "
                    f"({msg_id},{station_id},{message.mmsi},'{stamp}','{_escape(line)}');\n"
                )

        args = (props, message, msg_id, station_id)
        t = message.msg_type
        if t in (1, 2, 3, 27, 18):
            parts += [self.add_vessel_position(*args), self.add_vessel(*args)]
        elif t == 4:
            parts += [self.add_basestation(*args), self.add_vessel(*args)]
        elif t in (5, 24):
            parts += [self.add_vessel_static(*args), self.add_vessel(*args)]
        elif t == 9:
            parts += [self.add_sar_position(*args), self.add_vessel(*args)]
        elif t == 19:
            parts += [self.add_vessel_position(*args), self.add_vessel_static(*args), self.add_vessel(*args)]
        elif t == 21:
            parts += [self.add_aton(*args), self.add_vessel(*args)]

        for key, value in props:
            key_id = self.property_keys.get(key)
            if key_id is None:
                continue
            text = _escape(value) if isinstance(value, str) else _json(value)[:20]
            parts.append(
                f"INSERT INTO ais_property (msg_id, key, value) VALUES ({msg_id},'{key_id}','{text}');\n"
            )
        parts.append("\n")

        chunk = "".join(parts)
        with self._lock:
            if self._size > _MAX_QUEUE:
                _log.warning("DBMS: writing to database slow or failed, data lost.")
                self._parts.clear()
                self._size = 0
            self._parts.append(chunk)
            self._size += len(chunk)

    def transaction(self) -> str:
        """Take all queued statements as one anonymous code block; empty if none are queued."""
        with self._lock:
            body = "".join(self._parts)
            self._parts.clear()
            self._size = 0
        if not body:
            return ""
        return "DO $$\nDECLARE\n\tm_id INTEGER;\nBEGIN\n" + body + "\nEND $$;\n"