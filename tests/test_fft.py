import numpy as np
import pytest

from vhfais.fft import bit_reverse, fft, log2


def test_log2_powers_and_small_values():
    assert log2(2048) == 11
    assert log2(1) == 0
    assert log2(3) == 1


@pytest.mark.parametrize("log_n", [1, 4, 9])
def test_bit_reverse_is_a_permutation_and_involution(log_n):
    n = 1 << log_n
    values = [bit_reverse(i, log_n) for i in range(n)]
    assert sorted(values) == list(range(n))
    assert all(bit_reverse(v, log_n) == i for i, v in enumerate(values))


def test_bit_reverse_top_bit():
    assert bit_reverse(1, 11) == 1 << 10


@pytest.mark.parametrize("log_n", [0, 1, 3, 9])
def test_fft_matches_numpy(log_n):
    n = 1 << log_n
    rng = np.random.default_rng(7)
    signal = rng.normal(size=n) + 1j * rng.normal(size=n)
    scrambled = np.empty(n, dtype=np.complex128)
    for i, v in enumerate(signal):
        scrambled[bit_reverse(i, log_n)] = v
    result = fft(scrambled)
    assert np.allclose(result, np.fft.fft(signal))


def test_fft_in_place_for_complex_arrays():
    data = np.ones(8, dtype=np.complex128)
    result = fft(data)
    assert result is data
    assert np.isclose(data[0], 8)


def test_fft_rejects_non_power_of_two():
    with pytest.raises(ValueError):
        fft(np.zeros(6, dtype=complex))