# slogpp

Structured logging built around typed key/value attributes. Every log entry
is a `Record` with a timestamp, a level, a message and a tuple of attributes.
Loggers pass records to sinks, and a sink renders each record in one of three
forms (see `slogpp.formatters`):

* **JSON** (`record_to_json`): one object per line, such as
  `{"time":"1970-01-02T00:00:00.000Z","level":"INFO","message":"hi","a":1}`.
* **Raw text** (`record_to_raw_text`):
  `2024-01-02T03:04:05.123Z INFO "hello world" a=23`.
* **ANSI text** (`record_to_ansi_text`): the level is coloured, and the
  attributes are drawn as a tree below the message.

## Installation

```
pip install .
```

The package uses only the standard library. To run the tests:

```
pip install .[test]
python -m pytest
```

## Quick start

The functions in `slogpp.api` log through a default logger, which is built
the first time it is used. That logger writes text to standard error,
starting at the `INFO` level. The text is coloured when standard error is a
terminal and plain otherwise.

```python
from slogpp.api import info, with_attributes
from slogpp.attribute import integer, string

info("hello world", integer("a", 23))

logger = with_attributes(string("domain", "example"))
logger.warn("ouch")
logger.info("ok")
```

`slogpp.api` also provides `log(level, message, *attributes)`, `trace`,
`debug`, `error`, `fatal` and `default_logger()`.

## Attributes

`slogpp.attribute` has a constructor for every value type:

| Constructor                     | Value and rendering                                    |
|---------------------------------|--------------------------------------------------------|
| `boolean(key, value)`           | `true` / `false`                                       |
| `integer(key, value)`           | integer                                                |
| `floating(key, value)`          | float, in its shortest round-trip form                 |
| `string(key, value)`            | text, or a path; quoted in text output when it holds whitespace |
| `duration(key, value)`          | a `Duration`, `timedelta` or nanoseconds; `4m5.001s`, `32µs`  |
| `time(key, value)`              | a `Timestamp`, `datetime` or epoch nanoseconds; RFC 3339 UTC |
| `pointer(key, address)`         | `0x1234`, or `nullptr` for `None` or 0                 |
| `group(key, *attributes)`       | nested attributes (at least one)                       |
| `map_container(key, items, fn)` | a group of `fn("#0", item0)`, `fn("#1", item1)`, ...   |
| `err(error)`                    | an `error` attribute from a message or an exception    |
| `location()`                    | a `location` group with the caller's function, file and line |

For an exception, `err` uses the result of the exception's `message()`
method when it has one. Otherwise it uses `str(error)`.

An `Attribute` whose value is `None` is empty and never appears in the
output. In raw text, groups flatten to dotted keys, such as
`request.status=200`. In JSON they become nested objects.

## Loggers and levels

```python
from slogpp.api import build_sink
from slogpp.attribute import group, integer, string
from slogpp.logger import Logger

logger = Logger(build_sink())
request_logger = logger.with_attributes(
    group("request", string("url", "https://example.com/"), integer("status", 200))
)
request_logger.info("served")
```

`Logger.with_attributes` returns a new logger on the same sink. That logger
puts the given attributes before the ones passed to each call. A record is
built only when the sink has the record's level enabled.

The levels in `slogpp.level.Level`, from lowest to highest, are `TRACE`,
`DEBUG`, `INFO`, `WARN`, `ERROR` and `FATAL`. Each level except `FATAL` has
three sub-levels, such as `TRACE_1` to `TRACE_3`. `sub_level(level, n)`
returns one of them.

`Logger.fatal` logs its record and then calls the abort function, which is
`os.abort` by default. `set_abort_function` replaces that function and
returns the previous one.

The `dtrace`, `ddebug`, `dinfo`, `dwarn` and `derror` variants log as usual.
When Python runs with `-O`, they do nothing.

`Logger.from_level(level)` and `Logger.set(level, enabled)` change which
levels the sink accepts. `Logger.set_sink` swaps the sink.

## Configuring sinks

`build_sink` takes option functions from `slogpp.config`:

```python
from slogpp.api import build_sink
from slogpp.config import (
    OutputFormat, from_level, with_file_output, with_format,
    with_program_output, with_stdout_output,
)
from slogpp.level import Level
from slogpp.logger import Logger

sink = build_sink(
    with_program_output(with_stdout_output(), with_format(OutputFormat.TEXT),
                        from_level(Level.INFO)),
    with_file_output("app.log", from_level(Level.DEBUG)),
)
logger = Logger(sink)
```

* A sink starts with no level enabled. `from_level(level)` enables a level
  and every level above it. `with_level(*levels)` enables exactly the levels
  given.
* The output format is JSON unless `with_format(OutputFormat.TEXT)` is
  given.
* Program output goes to standard error, or to standard output with
  `with_stdout_output()`. Text output there is coloured when the stream is a
  terminal or `with_force_color()` is given. It is never coloured when
  `with_disabled_color()` is given.
* File output opens the named file for appending. Text output to a file is
  never coloured. The file stays open until you call `close()` on the
  `StreamSink` that `build_sink` returned.
* `with_locking()` serialises writes with a lock.
* `with_async()` hands formatting and writing to the shared thread pool
  `slogpp.sink.THREAD_POOL`. That pool starts with no workers, and while it
  has none, jobs run at once in the calling thread. Call
  `THREAD_POOL.set_size(n)` to start workers.
  `with_thread_pool_size(n)` only sets `Config.thread_pool_size`, and
  `build_sink` does not act on it.
* With no output configured, `build_sink` gives the text-to-standard-error
  sink from `INFO` that the default logger uses.

When more than one output is configured, `build_sink` returns a `MultiSink`.
It forwards each record to every member sink that has the record's level
enabled. `tee_sink(*sinks)` builds the same combination from sinks you
already have.

To write to any text stream, use `StreamSink(stream, levels, formatter)`.
To write somewhere else, subclass `FormattingSink` and implement
`write(text)`.

`slogpp.threadpool.ThreadPool` and `slogpp.objectpool.ObjectPool` are
small utilities that the package also exposes.

## Benchmarks

This command times logging through several back-ends, with a progress bar
for each, and prints a summary line per back-end:

```
slogpp-benchmarks [--target-ms MS] [--no-display]
```

It compares a no-op, a hand-formatted text line written to a file, and this
package's text, JSON, and derived-logger JSON output. All output is written
to the null device. `slogpp.benchmarks.benchmarker.Benchmarker` and
`slogpp.benchmarks.data.BenchmarkData` can be used on their own.

## What it does not do

The package has no log rotation. It does not hook into Python's standard
`logging` module. The benchmark command compares only the back-ends listed
above, not other logging libraries.