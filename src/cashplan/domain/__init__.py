"""Domain layer for cashplan."""

from cashplan.domain.session import PlanningSession
from cashplan.domain.transaction import TransactionService
from cashplan.domain.csv_import import CSVImportService
from cashplan.domain.ledger import LedgerService, project
from cashplan.domain.conversion import convert
from cashplan.domain.optimization import OptimizationAdvisor, OptimizationService

__all__ = [
    "PlanningSession",
    "TransactionService",
    "CSVImportService",
    "LedgerService",
    "project",
    "convert",
    "OptimizationAdvisor",
    "OptimizationService",
]
