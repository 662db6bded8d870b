"""AIS receiving building blocks: stream plumbing, FFT, demodulators, option parsing, Prometheus statistics and SQL generation."""

__version__ = "0.55.0"