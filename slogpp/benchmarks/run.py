"""Compare the cost of logging the same data through several back-ends."""

from __future__ import annotations

import argparse
import os
import random
from datetime import datetime, timedelta
from typing import List, Optional

from ..api import build_sink
from ..attribute import Timestamp, duration, floating, group, integer, string, time
from ..config import OutputFormat, from_level, with_file_output, with_format
from ..level import Level
from ..logger import Logger
from ..sink import MultiSink, Sink, StreamSink
from .benchmarker import Benchmarker, humanize
from .data import BenchmarkData

_EPOCH = datetime(1970, 1, 1)

DATA_COUNT = 103


def format_timestamp(timestamp: Timestamp | int) -> str:
    """Render a time in UTC with its fraction shortened, without padding."""
    ns = timestamp.nanoseconds if isinstance(timestamp, Timestamp) else int(timestamp)
    seconds, nanos = divmod(ns, 1_000_000_000)
    moment = _EPOCH + timedelta(seconds=seconds)
    if nanos % 1_000_000 == 0:
        nanos //= 1_000_000
    elif nanos % 1_000 == 0:
        nanos //= 1_000
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{nanos}Z"


def _close_sink(sink: Optional[Sink]) -> None:
    if isinstance(sink, MultiSink):
        for member in sink.sinks:
            _close_sink(member)
    elif isinstance(sink, StreamSink):
        sink.close()


class NoopLogger:
    """Does nothing; measures the cost of the benchmark loop itself."""

    def __call__(self, data: BenchmarkData) -> None:
        return None


class TextFileLogger:
    """Writes each item as a hand-formatted line of text to a file."""

    def __init__(self, filename: str | os.PathLike) -> None:
        self._stream = open(filename, "w", encoding="utf-8")

    def __enter__(self) -> TextFileLogger:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __call__(self, data: BenchmarkData) -> None:
        value, units = humanize(data.duration.nanoseconds)
        self._stream.write(
            f"{format_timestamp(Timestamp.now())} INFO "
            ' " new data " '
            f"code={data.code}"
            f" value={data.value:g}"
            f" duration={value:g}{units}"
            f" time={format_timestamp(data.time)}"
            f" request.url={data.request.url}"
            f" request.status={data.request.status}\n"
        )
        self._stream.flush()

    def close(self) -> None:
        """Close the file."""
        self._stream.close()


class SlogLogger:
    """Logs each item with all its fields as attributes of one record."""

    def __init__(self, *options) -> None:
        self.logger = Logger(build_sink(*options))

    def __enter__(self) -> SlogLogger:
        return self

    def __exit__(self, *exc_info: object) -> None:
        _close_sink(self.logger.sink)

    def __call__(self, data: BenchmarkData) -> None:
        self.logger.info(
            "new data",
            integer("code", data.code),
            floating("value", data.value),
            duration("duration", data.duration),
            time("time", data.time),
            group(
                "request",
                string("url", data.request.url),
                integer("status", data.request.status),
            ),
        )


class SlogDerivedLogger:
    """Logs each item through a logger derived to carry the request group."""

    def __init__(self, *options) -> None:
        self.logger = Logger(build_sink(*options))

    def __enter__(self) -> SlogDerivedLogger:
        return self

    def __exit__(self, *exc_info: object) -> None:
        _close_sink(self.logger.sink)

    def __call__(self, data: BenchmarkData) -> None:
        derived = self.logger.with_attributes(
            group(
                "request",
                string("url", data.request.url),
                integer("status", data.request.status),
            )
        )
        derived.info(
            "new data",
            integer("code", data.code),
            floating("value", data.value),
            duration("duration", data.duration),
            time("time", data.time),
        )


def main(argv: Optional[List[str]] = None) -> int:
    """Run every benchmark and print one summary line for each."""
    parser = argparse.ArgumentParser(
        prog="slogpp-benchmarks", description="Compare the cost of logging back-ends."
    )
    parser.add_argument(
        "--target-ms", type=float, default=2000.0, help="time to spend on each benchmark"
    )
    parser.add_argument("--no-display", action="store_true", help="hide the progress bar")
    args = parser.parse_args(argv)
    if args.target_ms <= 0:
        parser.error("--target-ms must be positive")

    rng = random.Random()
    data = [BenchmarkData.random(rng) for _ in range(DATA_COUNT)]
    benchmarker = Benchmarker(data, target=max(1, int(args.target_ms * 1e6)))
    if args.no_display:
        benchmarker.display = False

    print(benchmarker.benchmark("Noop", NoopLogger()))

    with TextFileLogger(os.devnull) as text_logger:
        print(benchmarker.benchmark("Stream - text", text_logger))

    with SlogLogger(
        with_file_output(os.devnull, with_format(OutputFormat.TEXT), from_level(Level.INFO))
    ) as slog_text:
        print(benchmarker.benchmark("slogpp - text", slog_text))

    with SlogLogger(
        with_file_output(os.devnull, with_format(OutputFormat.JSON), from_level(Level.INFO))
    ) as slog_json:
        print(benchmarker.benchmark("slogpp - JSON", slog_json))

    with SlogDerivedLogger(with_file_output(os.devnull, from_level(Level.INFO))) as derived:
        print(benchmarker.benchmark("slogpp - JSON - Derived", derived))

    return 0