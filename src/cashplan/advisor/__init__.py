"""Optimization advisor adapters."""

from cashplan.advisor.http import HTTPOptimizationAdvisor
from cashplan.advisor.schemas import plan_from_payload

__all__ = ["HTTPOptimizationAdvisor", "plan_from_payload"]
