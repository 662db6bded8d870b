import pytest

from vhfais.model import Mode, Model, ModelClass
from vhfais.stream import AisMessage, Tag


class Sink:
    def __init__(self):
        self.items = []

    def receive(self, data, tag):
        self.items.append(data)


def test_station_id_setting():
    model = Model()
    model.set("STATION_ID", "42")
    assert model.station == 42


def test_id_alias_and_case_insensitive():
    model = Model()
    model.set("id", "7")
    assert model.station == 7


def test_set_returns_model_for_chaining():
    model = Model()
    assert model.set("ID", "3").set("station_id", "5") is model
    assert model.station == 5


def test_unknown_setting_raises():
    with pytest.raises(ValueError, match="unknown setting"):
        Model().set("FOO", "1")


def test_invalid_station_raises():
    with pytest.raises(ValueError):
        Model().set("ID", "abc")


def test_get_is_empty_for_base():
    assert Model().get() == ""


def test_defaults():
    model = Model()
    assert model.mode is Mode.AB
    assert model.designation == "AB"
    assert model.model_class is ModelClass.IQ


def test_build_stores_source():
    model = Model()
    source = object()
    model.build("A", "B", 48000, source)
    assert model.source is source


def test_output_passes_messages_through():
    model = Model()
    sink = Sink()
    model.output >> sink
    msg = AisMessage(msg_type=1, mmsi=123456789)
    model.output.receive(msg, Tag())
    assert sink.items == [msg]


def test_outputs_share_lock_across_models():
    a, b = Model(), Model()
    sink = Sink()
    a.output >> sink
    b.output >> sink
    a.output.receive("x", Tag())
    b.output.receive("y", Tag())
    assert sink.items == ["x", "y"]
    assert type(a.output)._lock is type(b.output)._lock