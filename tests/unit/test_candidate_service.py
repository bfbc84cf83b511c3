"""Tests for jobboard.core.candidates — profile reads, the recruiter list and account status."""

import asyncio
from datetime import datetime, timedelta

import pytest
from bson import ObjectId

from jobboard.core.errors import InvalidArgumentError, NotFoundError
from jobboard.core.listing import CandidateBrowseFilters
from jobboard.data.models import CandidateUpdate
from jobboard.utils.constants import CandidateStatus


@pytest.fixture
def roster(stores, make_candidate):
    """Three active candidates (oldest first) and one inactive one."""
    start = datetime(2024, 1, 1)
    people = [
        make_candidate(full_name="Asha Rao", city="Pune", skills=["Java", "SQL"], created_at=start),
        make_candidate(full_name="Ravi Kumar", city="Delhi", skills=["Go"], created_at=start + timedelta(days=1)),
        make_candidate(full_name="Meena Iyer", city="Pune", skills=["Java"], created_at=start + timedelta(days=2)),
        make_candidate(full_name="Old Account", status=CandidateStatus.INACTIVE, created_at=start),
    ]
    return [stores.candidates.add(person) for person in people]


class TestBrowse:
    def test_active_newest_first(self, stores, roster):
        page = asyncio.run(stores.candidate_service().browse()).to_response()

        names = [c["fullName"] for c in page["candidates"]]
        assert names == ["Meena Iyer", "Ravi Kumar", "Asha Rao"]
        assert page["pagination"] == {
            "currentPage": 1,
            "totalPages": 1,
            "totalCandidates": 3,
            "candidatesPerPage": 10,
        }

    def test_filters_combine(self, stores, roster):
        filters = CandidateBrowseFilters.from_params(skills="Java", city=["Pune"])
        page = asyncio.run(stores.candidate_service().browse(filters))

        assert [c["fullName"] for c in page.candidates] == ["Meena Iyer", "Asha Rao"]

    def test_all_listed_skills_required(self, stores, roster):
        filters = CandidateBrowseFilters.from_params(skills=["Java", "SQL"])
        page = asyncio.run(stores.candidate_service().browse(filters))

        assert [c["fullName"] for c in page.candidates] == ["Asha Rao"]

    def test_search_by_name(self, stores, roster):
        filters = CandidateBrowseFilters.from_params(search="ravi")
        page = asyncio.run(stores.candidate_service().browse(filters))
        assert page.pagination.total_candidates == 1

    def test_inactive_list(self, stores, roster):
        filters = CandidateBrowseFilters.from_params(status="In-Active")
        page = asyncio.run(stores.candidate_service().browse(filters))

        assert [c["fullName"] for c in page.candidates] == ["Old Account"]
        assert stores.candidates.calls[-1] == "find_page_async:updated_at"

    def test_paging(self, stores, roster):
        page = asyncio.run(stores.candidate_service().browse(page=2, limit=2))

        assert [c["fullName"] for c in page.candidates] == ["Asha Rao"]
        assert page.pagination.total_pages == 2

    def test_bad_page(self, stores):
        with pytest.raises(InvalidArgumentError, match="Invalid page or limit"):
            asyncio.run(stores.candidate_service().browse(page="0"))


class TestProfile:
    def test_get_missing(self, stores):
        with pytest.raises(NotFoundError, match="Candidate not found"):
            asyncio.run(stores.candidate_service().get(str(ObjectId())))

    def test_update(self, stores, make_candidate):
        candidate = stores.candidates.add(make_candidate())
        updated = asyncio.run(
            stores.candidate_service().update_profile(str(candidate.id), CandidateUpdate(city="Pune"))
        )
        assert updated.city == "Pune"


class TestSetStatus:
    def test_deactivate_and_reactivate(self, stores, make_candidate):
        candidate = stores.candidates.add(make_candidate())
        service = stores.candidate_service()

        assert asyncio.run(service.set_status(str(candidate.id), "In-Active")).status == "In-Active"
        assert asyncio.run(service.set_status(str(candidate.id), CandidateStatus.ACTIVE)).status == "Active"

    def test_unknown_status(self, stores, make_candidate):
        candidate = stores.candidates.add(make_candidate())
        with pytest.raises(ValueError):
            asyncio.run(stores.candidate_service().set_status(str(candidate.id), "Banned"))

    def test_missing_candidate(self, stores):
        with pytest.raises(NotFoundError):
            asyncio.run(stores.candidate_service().set_status(str(ObjectId()), "Active"))
