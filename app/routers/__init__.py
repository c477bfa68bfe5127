# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - brands.py: Brand directory CRUD
# - assets.py: Brand asset upload, listing, deletion and export
# - clients.py: Client CRUD
# - workflows.py: Workflow CRUD
# - dashboard.py: Dashboard counters
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import brands
from . import assets
from . import clients
from . import workflows
from . import dashboard

__all__ = [
    "health",
    "brands",
    "assets",
    "clients",
    "workflows",
    "dashboard",
]
