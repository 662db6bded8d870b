# vhfais

Building blocks for receiving AIS (Automatic Identification System) traffic
from sampled VHF radio signals: push-style stream plumbing, an FFT, FM and
coherent demodulators, the filter taps they use, option parsing for models
and receivers, and two message outputs: Prometheus metrics text and SQL
statements for a PostgreSQL schema.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## What is inside

- `vhfais.stream`: `Block` and `Connection`, the stream plumbing. Blocks are
  chained with `>>`; a block's `receive(data, tag)` handles a chunk and
  `send`s the result to every connected target. `Tag` carries per-chunk
  metadata (mode bits, ppm, signal level, position, distance, speed, ship
  class) and `AisMessage` is a decoded message (type, MMSI, channel, station,
  NMEA lines, receive time).
- `vhfais.fft`: `fft`, an in-place radix-2 FFT for input already stored in
  bit-reversed order, with the helpers `log2` and `bit_reverse`. The length
  must be a power of two, otherwise `ValueError` is raised.
- `vhfais.filters`: the FIR tap sets `RECEIVER`, `COHERENT`,
  `BLACKMAN_HARRIS_28_3` and `BLACKMAN_HARRIS_32_5`.
- `vhfais.demod`: the `FM` discriminator (phase step between samples divided
  by pi) and the coherent demodulators `PhaseSearch` (energy over a history
  window, `set_params(history, delay)`) and `PhaseSearchEMA` (exponential
  moving average, `set_params(delay)`, `set_weight(weight)`). The phase
  searchers emit `+1.0`/`-1.0` per input sample.
- `vhfais.model`: the `Model` base class with its `Mode` (AB, CD, ABCD, X) and
  `ModelClass` (IQ, FM, TXT, N2K). `Model.set` accepts `STATION_ID`/`ID` and
  raises `ValueError` for anything else; `Model.build` records the input
  source.
- `vhfais.rates`: the intermediate sample rates that reduce to 96 kHz
  (`frontend_rates(allow_dsk)`), the rates used in X mode (`X_MODE_RATES`),
  and `select_bucket(sample_rate, rates)`, which returns the smallest rate at
  or above the input and whether upsampling is needed.
- `vhfais.receiver`: `parse_tags` (letters D, T, M to a bit mask 1, 2, 4),
  `resolve_channel` (AB, CD or X plus a two-character NMEA designation) and
  `parse_screen_level` returning an `OutputLevel` from 0 to 5.
- `vhfais.prometheus`: `PrometheusCounter`, counting messages per type (1–27)
  and per channel (A–D), tracking the longest distance, collecting per-message
  ppm and level gauges, and rendering all of it with `to_prometheus()`.
  `reset()` drops the gauges; `clear()` zeroes the counters.
- `vhfais.postgresql`: `PostgreSQLWriter`, which turns a decoded message and
  its properties into `INSERT` statements (messages, NMEA lines, positions,
  static data, base stations, SAR aircraft, aids to navigation, a vessel
  upsert and optional per-property rows) and hands out the queued batch as
  one `DO $$ ... $$` block through `transaction()`.
- `vhfais.options`: `parse_switch`, `parse_integer` and `parse_float` for
  setting values; all raise `ValueError` on bad input.

## Examples

Demodulate FM from a block of complex samples:

```python
import numpy as np
from vhfais.demod import FM
from vhfais.stream import Block, Tag


class Collect(Block):
    def __init__(self):
        super().__init__()
        self.values = []

    def receive(self, data, tag):
        self.values.extend(data)


fm = FM()
sink = Collect()
fm >> sink

samples = np.exp(1j * 0.1 * np.arange(64)).astype(np.complex64)
fm.receive(samples, Tag())
print(sink.values[:4])
```

Render statistics for scraping:

```python
from vhfais.prometheus import PrometheusCounter
from vhfais.stream import AisMessage, Tag

counter = PrometheusCounter()
counter.receive(AisMessage(msg_type=1, mmsi=123456789, channel="A"), Tag(ppm=0.5, level=-20.0))
print(counter.to_prometheus())
```

Build SQL for a position report:

```python
from vhfais.postgresql import PostgreSQLWriter
from vhfais.stream import AisMessage, Tag

writer = PostgreSQLWriter()
writer.set("VP", "ON")
message = AisMessage(msg_type=1, mmsi=123456789, channel="B", rx_time=0)
writer.receive({"mmsi": 123456789, "lat": 52.1, "lon": 4.3}, message, Tag())
print(writer.transaction())
```

Option values use the same conventions everywhere:

```python
from vhfais.options import parse_switch, parse_integer

parse_switch("on")                          # True
parse_integer("48000", 12500, 12288000, "sample rate")
```

## What this package does not do

- There is no command-line program; everything is used as a library.
- It does not read from radio hardware, files or network streams, and it has
  no resampling or downsampling chain, so it does not by itself turn raw
  device samples into demodulator input. `Model` only records its source.
- It does not decode bits into AIS messages; `AisMessage` objects are
  created by the caller.
- `PostgreSQLWriter` only produces SQL text; it does not connect to a
  database or execute anything.
- `PrometheusCounter` renders metrics text but does not serve it over HTTP.