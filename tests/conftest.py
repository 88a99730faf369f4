"""Shared pytest fixtures for cashplan tests."""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from cashplan.domain.clock import FixedClock
from cashplan.domain.csv_import import CSVImportService
from cashplan.domain.entities import Currency, OptimizationPlan
from cashplan.domain.ledger import LedgerService
from cashplan.domain.optimization import OptimizationAdvisor
from cashplan.domain.session import PlanningSession
from cashplan.domain.transaction import TransactionService
from cashplan.logging_config import reset_logging

TODAY = date(2023, 10, 1)


class FakeAdvisor(OptimizationAdvisor):
    """Advisor returning canned answers and recording what it was asked."""

    def __init__(self, plan=None, assessment="Liquidity looks fine.", error=None):
        self.plan = plan if plan is not None else OptimizationPlan(summary="Nothing to do.")
        self.assessment = assessment
        self.error = error
        self.requests = []
        self.assessed = []

    def optimize(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.plan

    def assess_liquidity(self, snapshots, currency):
        self.assessed.append((list(snapshots), currency))
        if self.error is not None:
            raise self.error
        return self.assessment


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo any logging configuration done by the CLI."""
    yield
    reset_logging()


@pytest.fixture
def clock():
    """Clock pinned to 2023-10-01 09:00."""
    return FixedClock(TODAY)


@pytest.fixture
def session(clock):
    """Create a planning session backed by a fresh in-memory store."""
    planning_session = PlanningSession.in_memory(clock)
    yield planning_session
    planning_session.close()


@pytest.fixture
def transaction_service(session):
    """Create a TransactionService for the test session."""
    return TransactionService(session)


@pytest.fixture
def ledger_service(session):
    """Create a LedgerService for the test session."""
    return LedgerService(session)


@pytest.fixture
def import_service(session):
    """Create a CSVImportService for the test session."""
    return CSVImportService(session)


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_ledger(import_service, fixtures_dir):
    """Import the four-line sample ledger with 100,000 EGP and 5,000 USD opening."""
    return import_service.import_file(
        fixtures_dir / "sample_ledger.csv",
        opening_balances={Currency.EGP: Decimal("100000"), Currency.USD: Decimal("5000")},
    )


@pytest.fixture
def make_advisor():
    """Return the advisor double class for tests that need canned answers."""
    return FakeAdvisor


@pytest.fixture
def fake_advisor():
    """Create an advisor double with an empty plan."""
    return FakeAdvisor()


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
