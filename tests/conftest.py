"""Shared fixtures for the cavitation checker tests."""

import matplotlib

matplotlib.use("Agg")

import pytest

from cavitation_checker.constants import DEFAULT_ENVELOPE
from cavitation_checker.data_model import PumpEnvelope

MIXED_CSV = (
    "Temperature,Pressure,Flow,NPSHr,NPSHa\n"
    "20,5,100,10,12\n"
    "30,5,100,10,9\n"
)

SECTIONED_CSV = (
    "#operating data\n"
    "Temperature,Pressure,Flow,NPSHa\n"
    "20,5,100,12\n"
    "25,5,300,13\n"
    "#npshr curve\n"
    "Flow,NPSHr\n"
    "50,8\n"
    "200,14\n"
)


@pytest.fixture
def mixed_csv():
    return MIXED_CSV


@pytest.fixture
def sectioned_csv():
    return SECTIONED_CSV


@pytest.fixture
def envelope():
    return PumpEnvelope.from_mapping(DEFAULT_ENVELOPE)


@pytest.fixture
def write_csv(tmp_path):
    """Write text to a CSV file under tmp_path and return its path."""

    def _write(text, name="pump.csv", encoding="utf-8"):
        path = tmp_path / name
        path.write_text(text, encoding=encoding)
        return str(path)

    return _write
