"""Supported intermediate sample rates and the choice of rate for a given input."""

from __future__ import annotations

_RATES_NO_DSK = (96000, 192000, 288000, 384000, 768000, 1536000, 3072000, 6144000, 12288000)
_RATES_DSK = (
    96000, 192000, 288000, 384000, 576000, 768000,
    1152000, 1536000, 2304000, 3072000, 6144000, 12288000,
)

X_MODE_RATES = (48000, 96000, 192000)


def frontend_rates(allow_dsk: bool) -> tuple[int, ...]:
    """Input rates the front-end can reduce to 96 kHz, in ascending order.

    With ``allow_dsk`` the rates that need a decimation by three are included.
    """
    return _RATES_DSK if allow_dsk else _RATES_NO_DSK


def select_bucket(sample_rate: int, rates) -> tuple[int, bool]:
    """Pick the smallest supported rate at or above ``sample_rate``.

    Returns the chosen rate and whether the input has to be upsampled to reach it.
    """
    for rate in rates:
        if rate >= sample_rate:
            return rate, rate != sample_rate
    raise ValueError(f"sample rate {sample_rate} is above the supported maximum")