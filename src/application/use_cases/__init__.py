"""Application use cases package."""

from .get_companies import CompanySelection, GetCompaniesUseCase
from .get_dashboard_aggregates import GetDashboardAggregatesUseCase
from .get_financial_hierarchy import GetFinancialHierarchyUseCase
from .get_latest_etl_job import GetLatestEtlJobUseCase
from .load_financial_data import FinancialDataView, LoadFinancialDataUseCase
from .manage_companies import ManageCompaniesUseCase
from .run_etl_sync import EtlSyncResult, RunEtlSyncUseCase

__all__ = [
    "CompanySelection",
    "GetCompaniesUseCase",
    "GetDashboardAggregatesUseCase",
    "GetFinancialHierarchyUseCase",
    "GetLatestEtlJobUseCase",
    "FinancialDataView",
    "LoadFinancialDataUseCase",
    "ManageCompaniesUseCase",
    "EtlSyncResult",
    "RunEtlSyncUseCase",
]
