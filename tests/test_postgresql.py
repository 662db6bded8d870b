import pytest

from vhfais.postgresql import PostgreSQLWriter
from vhfais.stream import AisMessage, Tag


def _position_message():
    return AisMessage(msg_type=1, mmsi=244123456, channel="B", station=7, nmea=["!AIVDM,1,1,,B,abc,0*00"])


POSITION = {"mmsi": 244123456, "lat": 52.5, "lon": 4.25, "speed": 3.5, "shipname": "IGNORED"}


def test_default_writes_only_vessel_upsert():
    w = PostgreSQLWriter()
    w.receive(POSITION, _position_message(), Tag())
    sql = w.pending
    assert "INSERT INTO ais_vessel (" in sql
    assert "ais_vessel_pos" not in sql
    assert "ais_message" not in sql
    assert "ON CONFLICT (mmsi) DO UPDATE SET" in sql
    assert "count=ais_vessel.count+1" in sql


def test_vessel_position_when_enabled():
    w = PostgreSQLWriter().set("VP", "on")
    sql = w.add_vessel_position(POSITION, _position_message(), " NULL", "7")
    assert sql.startswith("\tINSERT INTO ais_vessel_pos (")
    assert "shipname" not in sql
    assert "lat" in sql and "52.5" in sql
    assert sql.endswith(");\n")


def test_disabled_builders_return_empty():
    w = PostgreSQLWriter()
    msg = _position_message()
    assert w.add_vessel_position(POSITION, msg, "m_id", "1") == ""
    assert w.add_vessel_static(POSITION, msg, "m_id", "1") == ""
    assert w.add_basestation(POSITION, msg, "m_id", "1") == ""
    assert w.add_sar_position(POSITION, msg, "m_id", "1") == ""
    assert w.add_aton(POSITION, msg, "m_id", "1") == ""
    assert PostgreSQLWriter().set("V", "off").add_vessel(POSITION, msg, "m_id", "1") == ""


def test_static_escapes_quotes():
    w = PostgreSQLWriter().set("VS", "on")
    msg = AisMessage(msg_type=5, mmsi=1, channel="A")
    sql = w.add_vessel_static({"mmsi": 1, "shipname": "O'NEIL"}, msg, " NULL", "0")
    assert "'O''NEIL'" in sql


def test_msgs_uses_message_id_variable():
    w = PostgreSQLWriter().set("MSGS", "on")
    w.receive(POSITION, _position_message(), Tag())
    sql = w.pending
    assert "RETURNING id INTO m_id;" in sql
    assert "m_id," in sql


def test_station_id_override():
    w = PostgreSQLWriter().set("STATION_ID", "99").set("MSGS", "on")
    w.receive(POSITION, _position_message(), Tag())
    assert "(244123456,99,1," in w.pending


def test_nmea_lines_logged():
    w = PostgreSQLWriter().set("NMEA", "on")
    w.receive(POSITION, _position_message(), Tag())
    assert "INSERT INTO ais_nmea" in w.pending
    assert "!AIVDM,1,1,,B,abc,0*00" in w.pending


def test_transaction_wraps_and_clears():
    w = PostgreSQLWriter()
    assert w.transaction() == ""
    w.receive(POSITION, _position_message(), Tag())
    tx = w.transaction()
    assert tx.startswith("DO $$\nDECLARE\n\tm_id INTEGER;\nBEGIN\n")
    assert tx.endswith("\nEND $$;\n")
    assert w.pending == ""
    assert w.transaction() == ""


def test_message_type_routing():
    w = PostgreSQLWriter()
    for option in ("VP", "VS", "BS", "SAR", "ATON"):
        w.set(option, "on")
    cases = {
        4: "ais_basestation",
        5: "ais_vessel_static",
        9: "ais_sar_position",
        21: "ais_aton",
        18: "ais_vessel_pos",
    }
    for msg_type, table in cases.items():
        w.receive({"mmsi": 5}, AisMessage(msg_type=msg_type, mmsi=5, channel="A"), Tag())
        assert f"INSERT INTO {table} (" in w.transaction()


def test_property_keys_enable_msgs_and_log():
    w = PostgreSQLWriter(property_keys={"shipname": 3})
    assert w.msgs is True
    w.receive({"shipname": "ALPHA"}, AisMessage(msg_type=5, mmsi=5), Tag())
    assert "INSERT INTO ais_property" in w.pending
    assert "'ALPHA'" in w.pending


def test_unknown_option_raises():
    with pytest.raises(ValueError):
        PostgreSQLWriter().set("BOGUS", "1")


def test_interval_range():
    w = PostgreSQLWriter().set("interval", "60")
    assert w.interval == 60
    with pytest.raises(ValueError):
        w.set("INTERVAL", "4")
    with pytest.raises(ValueError):
        w.set("INTERVAL", "1801")


def test_conn_str_and_bad_switch():
    w = PostgreSQLWriter().set("CONN_STR", "dbname=test")
    assert w.conn_string == "dbname=test"
    with pytest.raises(ValueError):
        w.set("VP", "maybe")