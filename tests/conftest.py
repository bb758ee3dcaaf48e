"""Shared fixtures for MATT tests."""

import pytest

from matt.core.bid import create_signed_bid
from matt.utils.logger import MattLogger

TOKEN = "0xCD2a3d9F938E13CD947Ec05AbC7FE734Df8DD826"


def address(i: int) -> str:
    """Deterministic test address for bidder i."""
    return "0x" + f"{i + 1:040x}"


def make_bids(amounts):
    """One signed bid per amount, each from a distinct bidder."""
    return [
        create_signed_bid(address(i), TOKEN, amount, sig="0x" + "ab" * 65)
        for i, amount in enumerate(amounts)
    ]


@pytest.fixture(autouse=True)
def reset_logging():
    """Handlers bound to captured streams must not leak between tests."""
    yield
    MattLogger.reset()


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """Run with no MATT_* variables and no .env file in reach."""
    import os

    for key in list(os.environ):
        if key.startswith("MATT_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def bids():
    """Factory fixture: bids(amounts) -> signed bids."""
    return make_bids


@pytest.fixture
def bidder():
    """Factory fixture: bidder(i) -> address."""
    return address
