"""
Dashboard services module
"""

from .reports import RegistryReportService
from .stats import RegistryStatsService

__all__ = [
    'RegistryReportService',
    'RegistryStatsService',
]
