"""Shared pytest fixtures for minibank tests."""

import logging
from datetime import UTC, datetime, timedelta

import pytest

from minibank.config import LedgerPolicy
from minibank.factories import create_bank


class FakeClock:
    """Controllable clock for deterministic timestamps."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now

    def set(self, moment: datetime) -> None:
        self.now = moment


@pytest.fixture
def clock():
    """Clock frozen at 2023-11-15 10:00 UTC."""
    return FakeClock(datetime(2023, 11, 15, 10, 0, tzinfo=UTC))


@pytest.fixture
def policy():
    return LedgerPolicy()


@pytest.fixture
def bank(policy, clock):
    """Create a Bank wired to the fake clock."""
    return create_bank(policy=policy, clock=clock, seed=1234)


@pytest.fixture
def registry(bank):
    return bank.registry


@pytest.fixture
def ledger(bank):
    return bank.ledger


@pytest.fixture
def interest_service(bank):
    return bank.interest


@pytest.fixture
def security(bank):
    return bank.security


@pytest.fixture
def sample_account(registry):
    """Create an account holding 100."""
    return registry.create_account("John", "Doe", 100)


@pytest.fixture
def second_account(registry):
    """Create an account holding 300."""
    return registry.create_account("Alice", "Johnson", 300)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def write_script(tmp_path):
    """Write a CLI script file and return its path."""

    def _write(text: str) -> str:
        path = tmp_path / "ops.txt"
        path.write_text(text)
        return str(path)

    return _write


@pytest.fixture(autouse=True)
def restore_minibank_logger():
    """Undo logging changes made by setup_logging during a test."""
    logger = logging.getLogger("minibank")
    saved = (logger.handlers[:], logger.level, logger.propagate)
    yield logger
    logger.handlers[:], logger.level, logger.propagate = saved
