"""FM and coherent (phase search) demodulators producing soft bits."""

from __future__ import annotations

import numpy as np

from .stream import Block, Tag

N_PHASES = 16

PHASES = np.array(
    [
        9.9518472640441780e-01 + 9.8017143048367339e-02j,
        9.5694033335306883e-01 + 2.9028468509743588e-01j,
        8.8192125790916542e-01 + 4.7139674887287397e-01j,
        7.7301044123076901e-01 + 6.3439329894649099e-01j,
        6.3439326515712957e-01 + 7.7301046896098113e-01j,
        4.7139671032286945e-01 + 8.8192127851457169e-01j,
        2.9028464326824349e-01 + 9.5694034604181499e-01j,
        9.8017099547459546e-02 + 9.9518473068888236e-01j,
    ]
)


def _rotate(z: complex, rot: int) -> tuple[float, float]:
    """Multiply ``z`` by 1j**rot, returning the real and imaginary parts."""
    if rot == 0:
        return z.real, z.imag
    if rot == 1:
        return -z.imag, z.real
    if rot == 2:
        return -z.real, -z.imag
    return z.imag, -z.real


def _projections(re: float, im: float) -> np.ndarray:
    """Signed projections of a sample onto all candidate phases."""
    with np.errstate(invalid="ignore", over="ignore"):
        a = re * PHASES.real
        b = im * PHASES.imag
        return np.concatenate((a + b, (a - b)[::-1]))


def _decide(bits: int, delay: int) -> float:
    b2 = (bits >> (delay + 1)) & 1
    b1 = (bits >> delay) & 1
    return 1.0 if b1 ^ b2 else -1.0


class FM(Block):
    """FM discriminator: phase difference between successive samples, scaled by 1/pi."""

    def __init__(self) -> None:
        super().__init__()
        self._prev = 0j

    def receive(self, data, tag: Tag) -> None:
        data = np.asarray(data, dtype=np.complex128)
        if data.size == 0:
            return
        previous = np.empty_like(data)
        previous[0] = self._prev
        previous[1:] = data[:-1]
        product = data * np.conj(previous)
        self._prev = complex(data[-1])
        self.send(np.arctan2(product.imag, product.real) / np.pi, tag)


class PhaseSearch(Block):
    """Coherent demodulator picking the phase with the largest recent energy."""

    MAX_HISTORY = 14
    _SEARCH = 2

    def __init__(self) -> None:
        super().__init__()
        self._history = 8
        self._delay = 0
        self._memory = np.zeros((N_PHASES, self.MAX_HISTORY))
        self._bits = np.zeros(N_PHASES, dtype=np.int64)
        self._max_idx = 0
        self._rot = 0
        self._last = 0

    def set_params(self, history: int, delay: int) -> None:
        if not 1 <= history <= self.MAX_HISTORY:
            raise ValueError(f"history must be between 1 and {self.MAX_HISTORY}")
        if not 0 <= delay <= history:
            raise ValueError("delay must be between 0 and the history length")
        self._history = history
        self._delay = delay

    def receive(self, data, tag: Tag) -> None:
        out = np.empty(len(data))
        for n, sample in enumerate(data):
            re, im = _rotate(complex(sample), self._rot)
            self._rot = (self._rot + 1) & 3

            t = _projections(re, im)
            self._bits = ((self._bits << 1) | (t > 0)) & 0xFF
            self._memory[:, self._last] = np.abs(t)
            self._last = (self._last + 1) % self._history

            max_val = 0.0
            prev_max = self._max_idx
            sums = self._memory[:, : self._history].sum(axis=1)
            for p in range(N_PHASES + prev_max - self._SEARCH, N_PHASES + prev_max + self._SEARCH + 1):
                j = p % N_PHASES
                if sums[j] > max_val:
                    max_val = sums[j]
                    self._max_idx = j

            out[n] = _decide(int(self._bits[self._max_idx]), self._delay)
        self.send(out, tag)


class PhaseSearchEMA(Block):
    """Coherent demodulator tracking phase energy with an exponential moving average."""

    _SEARCH = 1

    def __init__(self) -> None:
        super().__init__()
        self._delay = 0
        self._weight = 0.85
        self._ma = np.zeros(N_PHASES)
        self._bits = np.zeros(N_PHASES, dtype=np.int64)
        self._max_idx = 0
        self._rot = 0

    def set_params(self, delay: int) -> None:
        self._delay = delay

    def set_weight(self, weight: float) -> None:
        self._weight = weight

    def receive(self, data, tag: Tag) -> None:
        out = np.empty(len(data))
        w = self._weight
        mask = N_PHASES - 1
        for n, sample in enumerate(data):
            re, im = _rotate(complex(sample), self._rot)
            self._rot = (self._rot + 1) & 3

            t = _projections(re, im)
            self._bits = ((self._bits << 1) | (t > 0)) & 0xFF
            with np.errstate(invalid="ignore", over="ignore"):
                self._ma = w * self._ma + (1 - w) * np.abs(t)
            self._ma[~np.isfinite(self._ma)] = 0.0

            idx = (self._max_idx - self._SEARCH + N_PHASES) & mask
            max_val = self._ma[idx]
            self._max_idx = idx
            for _ in range(2 * self._SEARCH):
                idx = (idx + 1) & mask
                if self._ma[idx] > max_val:
                    max_val = self._ma[idx]
                    self._max_idx = idx

            out[n] = _decide(int(self._bits[self._max_idx]), self._delay)
        self.send(out, tag)