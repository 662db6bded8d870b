"""Radix-2 FFT working on input that is already in bit-reversed order."""

from __future__ import annotations

from functools import lru_cache

import numpy as np


def log2(x: int) -> int:
    """Integer base-2 logarithm, rounded down; 0 for values below 2."""
    return x.bit_length() - 1 if x > 1 else 0


def bit_reverse(x: int, log_n: int) -> int:
    """Reverse the lowest ``log_n`` bits of ``x``."""
    y = 0
    for _ in range(log_n):
        y = (y << 1) | (x & 1)
        x >>= 1
    return y


@lru_cache(maxsize=8)
def _twiddles(n: int) -> np.ndarray:
    return np.exp(-2j * np.pi * np.arange(n) / n)


def fft(x) -> np.ndarray:
    """Transform ``x`` in place; its samples must be stored in bit-reversed order.

    A complex numpy array is modified and returned; other sequences are copied first.
    """
    if not (isinstance(x, np.ndarray) and np.iscomplexobj(x) and x.flags.c_contiguous):
        x = np.ascontiguousarray(x, dtype=np.complex128)
    n = len(x)
    if n == 0 or n & (n - 1):
        raise ValueError("FFT length must be a power of two")

    omega = _twiddles(n)
    half, stride = 1, n
    for _ in range(log2(n)):
        stride >>= 1
        view = x.reshape(-1, 2 * half)
        top = view[:, :half]
        bottom = view[:, half:]
        t = omega[: half * stride : stride] * bottom
        bottom[:] = top - t
        top += t
        half <<= 1
    return x