"""Deposit/buy workflow and its payment configuration providers."""

from desk.purchase.provider import (
    ConfigurationProvider,
    SqliteConfigurationProvider,
    StaticConfigurationProvider,
)
from desk.purchase.workflow import PurchaseWorkflow, WorkflowState

__all__ = [
    "ConfigurationProvider",
    "PurchaseWorkflow",
    "SqliteConfigurationProvider",
    "StaticConfigurationProvider",
    "WorkflowState",
]
