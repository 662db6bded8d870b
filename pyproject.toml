[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vhfais"
version = "0.55.0"
description = "AIS receiving building blocks: stream plumbing, FFT, FM and coherent demodulators, option parsing, Prometheus statistics and SQL generation"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["ais", "sdr", "dsp", "demodulation", "maritime", "vhf", "nmea", "prometheus"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Ham Radio",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["vhfais"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
