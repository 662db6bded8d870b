import pytest

from vhfais.rates import X_MODE_RATES, frontend_rates, select_bucket


def test_rates_without_dsk():
    assert frontend_rates(False) == (
        96000, 192000, 288000, 384000, 768000, 1536000, 3072000, 6144000, 12288000
    )


def test_rates_with_dsk_include_decimation_by_three():
    rates = frontend_rates(True)
    assert 576000 in rates
    assert 1152000 in rates
    assert 2304000 in rates
    assert 576000 not in frontend_rates(False)


@pytest.mark.parametrize("allow", [False, True])
def test_rates_sorted(allow):
    rates = frontend_rates(allow)
    assert list(rates) == sorted(rates)


def test_exact_rate_not_interpolated():
    assert select_bucket(96000, frontend_rates(False)) == (96000, False)
    assert select_bucket(1536000, frontend_rates(False)) == (1536000, False)


def test_rate_between_buckets_is_interpolated():
    assert select_bucket(576000, frontend_rates(False)) == (768000, True)
    assert select_bucket(576000, frontend_rates(True)) == (576000, False)


@pytest.mark.parametrize("rate", [96000, 100000, 250000, 1000000, 2400000, 12288000])
def test_bucket_is_smallest_at_or_above(rate):
    rates = frontend_rates(True)
    bucket, interpolated = select_bucket(rate, rates)
    assert bucket >= rate
    assert interpolated == (bucket != rate)
    assert all(r < rate for r in rates if r < bucket)


def test_x_mode_rates():
    assert select_bucket(12000, X_MODE_RATES) == (48000, True)
    assert select_bucket(192000, X_MODE_RATES) == (192000, False)


def test_rate_too_high():
    with pytest.raises(ValueError):
        select_bucket(12288001, frontend_rates(True))