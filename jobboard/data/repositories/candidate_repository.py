"""
Candidate repository.

Provides data access operations for candidate profile documents.
"""

from typing import Optional

from bson import ObjectId

from jobboard.data.database import CANDIDATES_COLLECTION
from jobboard.data.models.candidate import Candidate, CandidateUpdate
from jobboard.utils.constants import CandidateStatus
from jobboard.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class CandidateRepository(BaseRepository[Candidate]):
    """Repository for candidate document operations."""

    @property
    def collection_name(self) -> str:
        return CANDIDATES_COLLECTION

    @property
    def model_class(self) -> type[Candidate]:
        return Candidate

    async def update_from_schema_async(
        self, id_value: str | ObjectId, data: CandidateUpdate
    ) -> Optional[Candidate]:
        """Update a candidate profile from an update schema."""
        update_data = data.to_update()
        if not update_data:
            return await self.get_by_id_async(id_value)
        return await self.update_async(id_value, update_data)

    async def update_status_async(
        self, id_value: str | ObjectId, status: CandidateStatus
    ) -> Optional[Candidate]:
        """Update candidate account status."""
        return await self.update_async(id_value, {"status": CandidateStatus(status).value})


# Singleton instance
_candidate_repository: Optional[CandidateRepository] = None


def get_candidate_repository() -> CandidateRepository:
    """Get the candidate repository singleton instance."""
    global _candidate_repository
    if _candidate_repository is None:
        _candidate_repository = CandidateRepository()
    return _candidate_repository
