# =============================================================================
# core/services/dashboard_service.py - Dashboard Counters
# =============================================================================
# Exact row counts for the dashboard cards. A table that can't be counted
# (missing, unreachable) shows as 0 so the dashboard always renders.
# =============================================================================

import logging

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.stores import RecordStore

logger = logging.getLogger(__name__)

# Response key -> table
COUNTED_TABLES = {
    "clients": "clients",
    "workflows": "workflows",
    "tasks": "tasks",
    "team_members": "team_members",
}


class DashboardService:
    """Aggregate counts across the onboarding tables."""

    def __init__(self, records: RecordStore = SupabaseClient):
        self.records = records

    def get_stats(self) -> dict[str, int]:
        stats: dict[str, int] = {}
        for key, table in COUNTED_TABLES.items():
            try:
                stats[key] = self.records.count(table)
            except SupabaseClientError as e:
                logger.warning(f"Could not count {table}: {e}")
                stats[key] = 0
        return stats
