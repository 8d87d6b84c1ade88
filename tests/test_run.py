import json
import random

import pytest

from slogpp.attribute import Timestamp
from slogpp.benchmarks.data import BenchmarkData
from slogpp.benchmarks.run import (
    NoopLogger,
    SlogDerivedLogger,
    SlogLogger,
    TextFileLogger,
    format_timestamp,
    main,
)
from slogpp.config import OutputFormat, from_level, with_file_output, with_format
from slogpp.formatters import format_duration, format_time
from slogpp.level import Level


@pytest.fixture
def data():
    return BenchmarkData.random(random.Random(7))


def test_format_timestamp_epoch():
    assert format_timestamp(Timestamp(0)) == "1970-01-01T00:00:00.0Z"


def test_format_timestamp_milliseconds():
    ns = 24 * 3600 * 10**9 + 123_000_000
    assert format_timestamp(ns) == "1970-01-02T00:00:00.123Z"


def test_format_timestamp_shares_seconds_with_rfc3339(data):
    assert format_timestamp(data.time)[:19] == format_time(data.time)[:19]
    assert format_timestamp(data.time).endswith("Z")


def test_noop_logger_returns_nothing(data):
    assert NoopLogger()(data) is None


def test_text_file_logger(tmp_path, data):
    path = tmp_path / "text.log"
    with TextFileLogger(path) as logger:
        logger(data)
        logger(data)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    line = lines[0]
    assert ' INFO  " new data " code=' in line
    assert f"code={data.code} " in line
    assert f" time={format_timestamp(data.time)} " in line
    assert f" request.url={data.request.url} " in line
    assert line.endswith(f" request.status={data.request.status}")


def test_slog_logger_json(tmp_path, data):
    path = tmp_path / "slog.json"
    with SlogLogger(
        with_file_output(str(path), with_format(OutputFormat.JSON), from_level(Level.INFO))
    ) as logger:
        logger(data)
    entry = json.loads(path.read_text(encoding="utf-8"))
    assert entry["message"] == "new data"
    assert entry["level"] == "INFO"
    assert entry["code"] == data.code
    assert entry["value"] == pytest.approx(data.value)
    assert entry["duration"] == format_duration(data.duration)
    assert entry["time"] == format_time(data.time)
    assert entry["request"] == {"url": data.request.url, "status": data.request.status}


def test_slog_logger_text(tmp_path, data):
    path = tmp_path / "slog.log"
    with SlogLogger(
        with_file_output(str(path), with_format(OutputFormat.TEXT), from_level(Level.INFO))
    ) as logger:
        logger(data)
    line = path.read_text(encoding="utf-8")
    assert " INFO " in line
    assert f"request.status={data.request.status}" in line


def test_slog_derived_logger_puts_request_first(tmp_path, data):
    path = tmp_path / "derived.json"
    with SlogDerivedLogger(with_file_output(str(path), from_level(Level.INFO))) as logger:
        logger(data)
    entry = json.loads(path.read_text(encoding="utf-8"))
    keys = list(entry)
    assert keys.index("request") < keys.index("code")
    assert entry["request"]["url"] == data.request.url
    assert entry["code"] == data.code


def test_main_runs_every_benchmark(capsys):
    assert main(["--target-ms", "1", "--no-display"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 5
    assert all(" ops in " in line for line in lines)


def test_main_rejects_bad_target():
    with pytest.raises(SystemExit):
        main(["--target-ms", "0"])