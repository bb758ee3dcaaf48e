"""
Tests for logging setup.
"""

import logging

import pytest

from matt.core.config import MattConfig
from matt.utils.logger import (
    CLEARING,
    SUBSYSTEMS,
    MattLogger,
    describe_bid,
    get_logger,
    setup_logging,
)


class TestLogger:
    def test_subsystem_names(self):
        assert get_logger(CLEARING).name == "matt.clearing"
        assert {get_logger(name).parent.name for name in SUBSYSTEMS} == {"matt"}

    def test_unknown_subsystem(self):
        with pytest.raises(ValueError, match="Unknown logging subsystem"):
            get_logger("dag")

    def test_setup_is_idempotent(self, tmp_path):
        setup_logging(level=logging.DEBUG, log_dir=str(tmp_path), log_to_file=False)
        setup_logging(level=logging.DEBUG, log_dir=str(tmp_path), log_to_file=False)

        assert len(logging.getLogger("matt").handlers) == 1
        assert MattLogger.log_file() is None

    def test_file_handler(self, tmp_path):
        log_dir = tmp_path / "logs"
        setup_logging(level=logging.INFO, log_dir=str(log_dir), log_to_file=True)

        get_logger(CLEARING).info("cleared")
        for handler in logging.getLogger("matt").handlers:
            handler.flush()

        assert MattLogger.log_file() == log_dir / "matt.log"
        assert "cleared" in (log_dir / "matt.log").read_text()

    def test_reset(self):
        setup_logging()
        MattLogger.reset()

        assert logging.getLogger("matt").handlers == []
        assert MattLogger._initialized is False


class TestSetupFromConfig:
    """Entry points configure logging from MattConfig."""

    def test_console_only(self, tmp_path):
        MattLogger.setup_from_config(MattConfig(log_dir=tmp_path / "logs"))

        assert logging.getLogger("matt").level == logging.INFO
        assert MattLogger.log_file() is None
        assert not (tmp_path / "logs").exists()

    def test_debug_with_file(self, tmp_path):
        config = MattConfig(log_dir=tmp_path / "auction", log_to_file=True)
        MattLogger.setup_from_config(config, debug=True)

        assert logging.getLogger("matt").level == logging.DEBUG
        assert MattLogger.log_file() == tmp_path / "auction" / "matt.log"
        assert len(logging.getLogger("matt").handlers) == 2


class TestDescribeBid:
    def test_signed_bid(self, bids, bidder):
        label = describe_bid(bids([50])[0])

        assert label == f"bidder={bidder(0)[:6]}..{bidder(0)[-4:]} amount=50"

    def test_amount_only(self):
        class Plain:
            amount = 7

        assert describe_bid(Plain()) == "amount=7"
