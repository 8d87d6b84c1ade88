import pytest

from slogpp.attribute import Attribute, Timestamp, integer, string
from slogpp.level import Level
from slogpp.record import Record


def test_default_timestamp_is_creation_time():
    before = Timestamp.now()
    record = Record(Level.INFO, "hello")
    after = Timestamp.now()
    assert before <= record.timestamp <= after


def test_explicit_fields():
    ts = Timestamp(24 * 3600 * 10**9)
    record = Record(Level.WARN, "simple", (integer("status", 404),), ts)
    assert record.level is Level.WARN
    assert record.message == "simple"
    assert record.attributes == (Attribute("status", 404),)
    assert record.timestamp == ts


def test_level_coerced_from_int():
    record = Record(int(Level.ERROR), "x")
    assert record.level is Level.ERROR


def test_attributes_become_tuple():
    attrs = [string("a", "b"), integer("c", 1)]
    record = Record(Level.INFO, "x", attrs)
    assert record.attributes == tuple(attrs)


def test_with_attributes_appends_in_order():
    ts = Timestamp(0)
    base = Record(Level.WARN, "unknown resource", (string("request", "https://example.com"),), ts)
    extended = base.with_attributes(integer("status", 404))
    assert extended.attributes == (
        string("request", "https://example.com"),
        integer("status", 404),
    )
    assert extended.level is base.level
    assert extended.message == base.message
    assert extended.timestamp == base.timestamp
    assert base.attributes == (string("request", "https://example.com"),)


def test_with_no_attributes_is_equal():
    record = Record(Level.DEBUG, "x", timestamp=Timestamp(5))
    assert record.with_attributes() == record


def test_rejects_non_attribute():
    with pytest.raises(TypeError):
        Record(Level.INFO, "x", ("nope",))


def test_rejects_non_string_message():
    with pytest.raises(TypeError):
        Record(Level.INFO, 12)


def test_rejects_bad_level():
    with pytest.raises(ValueError):
        Record(99, "x")


def test_rejects_bad_timestamp():
    with pytest.raises(TypeError):
        Record(Level.INFO, "x", timestamp=123)


def test_record_is_immutable():
    record = Record(Level.INFO, "x")
    with pytest.raises(AttributeError):
        record.message = "y"
    assert record.message == "x"