"""Pytest fixtures for framebind tests."""

import datetime as dt

import pytest

from framebind import Column, Frame, TypeTag


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: unit tests (in-memory only)")
    config.addinivalue_line("markers", "integration: round trips through pandas/polars/arrow")
    config.addinivalue_line("markers", "polars: requires polars package")
    config.addinivalue_line("markers", "pandas: requires pandas package")


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def reset_globals():
    """Keep process-wide settings isolated between tests."""
    import framebind

    yield
    framebind.use("pyarrow")
    framebind.strings_as_factors(False)


@pytest.fixture
def df_var() -> Frame:
    """One column of most kinds, three rows."""
    return Frame(
        {
            "l": Column(TypeTag.LOGICAL, [True, False, False]),
            "i": Column(TypeTag.INTEGER, [1, 1, 2]),
            "d": Column(TypeTag.DATE, [dt.date(2015, 6, 1), dt.date(2015, 6, 1), dt.date(2015, 6, 2)]),
            "f": Column(TypeTag.FACTOR, [0, 0, 1], levels=("a", "b")),
            "n": Column(TypeTag.DOUBLE, [1.5, 1.5, 2.5]),
            "t": Column(TypeTag.DATETIME, [1_000_000, 2_000_000, 3_000_000], tzone="UTC"),
            "c": Column(TypeTag.CHARACTER, ["a", "a", "b"]),
        }
    )


def _moment(tzone):
    # Same instant under every label
    return Frame({"date": Column(TypeTag.DATETIME, [-1_735_660_800_000_000], tzone=tzone)})


@pytest.fixture
def tz_chicago() -> Frame:
    return _moment("America/Chicago")


@pytest.fixture
def tz_utc() -> Frame:
    return _moment("UTC")


@pytest.fixture
def tz_none() -> Frame:
    return _moment(None)
