import json
import re

import pytest

from slogpp import api
from slogpp.attribute import integer, string
from slogpp.config import OutputFormat, from_level, with_file_output, with_format
from slogpp.level import Level
from slogpp.logger import set_abort_function
from slogpp.sink import MultiSink

RFC3339 = r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{3,9}Z"


def _split_line(line):
    timestamp, rest = line.split(" ", 1)
    return bool(re.fullmatch(RFC3339, timestamp)), rest


def test_default_logger_single_line(capsys):
    api.info("hello world", integer("a", 23))
    err = capsys.readouterr().err
    assert err.endswith("\n")
    lines = err.splitlines()
    assert len(lines) == 1
    assert _split_line(lines[0]) == (True, 'INFO "hello world" a=23')


def test_default_logger_multi_line(capsys):
    logger = api.with_attributes(string("domain", "coucou"))
    logger.warn("ouch")
    logger.info("ok")
    err = capsys.readouterr().err
    assert err.endswith("\n")
    lines = err.splitlines()
    assert [_split_line(line) for line in lines] == [
        (True, "WARN ouch domain=coucou"),
        (True, "INFO ok domain=coucou"),
    ]


def test_default_logger_filters_below_info(capsys):
    api.debug("hidden")
    api.log(Level.TRACE, "hidden too")
    assert capsys.readouterr().err == ""


def test_default_logger_is_shared():
    derived = api.with_attributes(integer("a", 1))
    assert derived.attributes == (integer("a", 1),)
    assert derived.sink is api.default_logger().sink
    assert api.default_logger().attributes == ()


def test_module_level_log_and_debug_variants(capsys):
    api.log(Level.ERROR, "boom")
    api.dwarn("careful")
    lines = capsys.readouterr().err.splitlines()
    assert lines[0].endswith(" ERROR boom")
    assert lines[1].endswith(" WARN careful")


def test_module_level_fatal_aborts(capsys):
    calls = []
    previous = set_abort_function(lambda: calls.append("aborted"))
    try:
        api.fatal("the end")
    finally:
        set_abort_function(previous)
    assert calls == ["aborted"]
    assert capsys.readouterr().err.rstrip("\n").endswith(" FATAL \"the end\"")


def test_build_sink_default_levels():
    sink = api.build_sink()
    assert sink.enabled(Level.INFO)
    assert sink.enabled(Level.FATAL)
    assert not sink.enabled(Level.DEBUG)


def test_build_sink_json_file(tmp_path):
    path = tmp_path / "out.log"
    sink = api.build_sink(
        with_file_output(str(path), with_format(OutputFormat.JSON), from_level(Level.INFO))
    )
    try:
        logger = api.Logger(sink)
        logger.debug("dropped")
        logger.info("new data", integer("code", 7), string("domain", "Witty Yak"))
    finally:
        sink.close()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    entry = json.loads(lines[0])
    assert entry["level"] == "INFO"
    assert entry["message"] == "new data"
    assert entry["code"] == 7
    assert entry["domain"] == "Witty Yak"
    assert re.fullmatch(RFC3339, entry["time"])


def test_build_sink_file_appends(tmp_path):
    path = tmp_path / "append.log"
    path.write_text("existing\n", encoding="utf-8")
    sink = api.build_sink(
        with_file_output(str(path), with_format(OutputFormat.TEXT), from_level(Level.WARN))
    )
    try:
        api.Logger(sink).warn("added")
    finally:
        sink.close()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "existing"
    assert lines[1].endswith(" WARN added")


def test_build_sink_several_outputs_tee(tmp_path):
    info_path = tmp_path / "info.log"
    error_path = tmp_path / "error.log"
    sink = api.build_sink(
        with_file_output(str(info_path), with_format(OutputFormat.TEXT), from_level(Level.INFO)),
        with_file_output(str(error_path), with_format(OutputFormat.TEXT), from_level(Level.ERROR)),
    )
    assert isinstance(sink, MultiSink)
    try:
        logger = api.Logger(sink)
        logger.info("an info")
        logger.error("an error")
    finally:
        for member in sink.sinks:
            member.close()
    info_lines = info_path.read_text(encoding="utf-8").splitlines()
    error_lines = error_path.read_text(encoding="utf-8").splitlines()
    assert [line.split(" ", 1)[1] for line in info_lines] == ['INFO "an info"', 'ERROR "an error"']
    assert [line.split(" ", 1)[1] for line in error_lines] == ['ERROR "an error"']


def test_build_sink_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        api.build_sink(with_file_output(str(tmp_path / "missing" / "x.log")))