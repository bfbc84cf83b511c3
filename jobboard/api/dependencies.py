"""
Service providers for route handlers.

Routes depend on these functions rather than on the service singletons
directly, so tests can swap in services backed by in-memory stores via
``app.dependency_overrides``.
"""

from jobboard.core.candidates import CandidateService, get_candidate_service
from jobboard.core.dashboard import DashboardService, get_dashboard_service
from jobboard.core.jobs import JobService, get_job_service
from jobboard.core.listing import ListingService, get_listing_service
from jobboard.core.relations import RelationService, get_relation_service
from jobboard.data.database import DatabaseManager, get_database_manager


def listing_service() -> ListingService:
    return get_listing_service()


def dashboard_service() -> DashboardService:
    return get_dashboard_service()


def relation_service() -> RelationService:
    return get_relation_service()


def job_service() -> JobService:
    return get_job_service()


def candidate_service() -> CandidateService:
    return get_candidate_service()


def database_manager() -> DatabaseManager:
    return get_database_manager()
