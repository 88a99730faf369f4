"""Ledger file import domain service."""

from dataclasses import replace
from decimal import Decimal
from pathlib import Path
from typing import Any, Mapping, Optional

from cashplan.domain.csv_format import parse_line
from cashplan.domain.entities import Currency, Transaction
from cashplan.domain.errors import ParseError
from cashplan.domain.session import PlanningSession
from cashplan.logging_config import get_logger

logger = get_logger("domain.csv_import")


class CSVImportService:
    """Service for loading a ledger file into the session store."""

    def __init__(self, session: PlanningSession):
        """Initialize import service.

        Args:
            session: Planning session to load into
        """
        self.session = session
        self.db = session.db
        self.audit = session.audit

    def import_file(
        self,
        file_path: str | Path,
        opening_balances: Optional[Mapping[Currency, Decimal]] = None,
    ) -> dict[str, Any]:
        """Import transactions from a ledger file.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Ledger file not found: {file_path}")
        return self.import_text(path.read_text(encoding="utf-8-sig"), opening_balances)

    def import_text(
        self,
        text: str,
        opening_balances: Optional[Mapping[Currency, Decimal]] = None,
    ) -> dict[str, Any]:
        """Replace the session's transactions with the contents of a ledger file.

        Lines with fewer than eight fields are dropped silently; lines that
        fail to parse are reported in ``errors`` and skipped. Every adjusted
        date before today is moved to today; original dates are kept.

        Args:
            text: File contents
            opening_balances: Opening balance per account to set alongside

        Returns:
            Dict with import statistics:
            - imported: number of transactions stored
            - clamped: list of (transaction id, previous adjusted date)
            - errors: list of error messages
        """
        today = self.session.clock.today()
        transactions: list[Transaction] = []
        clamped = []
        errors = []

        for line_number, line in enumerate(text.splitlines(), start=1):
            try:
                row = parse_line(line, today, line_number)
            except ParseError as e:
                errors.append(str(e))
                logger.warning("ledger line skipped", extra={"line_number": line_number, "error": str(e)})
                continue
            if row is None:
                continue

            txn = Transaction(id=self.session.new_id(), is_locked=False, **vars(row))
            if txn.adjusted_date < today:
                clamped.append((txn.id, txn.adjusted_date))
                txn = replace(txn, adjusted_date=today)
            transactions.append(txn)

        self.db.replace_all(transactions)
        if opening_balances:
            self.db.set_opening_balances(opening_balances)
        balances = self.db.get_opening_balances()

        message = f"Uploaded CSV with {len(transactions)} transactions."
        if clamped:
            previous = sorted({day for _, day in clamped})
            message += (
                f" {len(clamped)} transaction(s) dated prior to {today.isoformat()} "
                f"were auto-adjusted to today (previously "
                f"{', '.join(day.isoformat() for day in previous)})."
            )
        message += " Initial Balances set: " + ", ".join(
            f"{currency.value} {balances[currency]}"
            for currency in (Currency.EGP, Currency.USD, Currency.EUR)
        )
        self.audit.append(message)

        return {
            "imported": len(transactions),
            "clamped": clamped,
            "errors": errors,
        }
