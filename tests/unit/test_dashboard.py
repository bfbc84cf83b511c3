"""Tests for jobboard.core.dashboard — month windows, change labels and stats."""

import asyncio
from datetime import datetime

import pytest
from bson import ObjectId

from jobboard.core.dashboard import month_windows, percentage_change_label
from jobboard.core.errors import NotFoundError


class TestPercentageChangeLabel:
    @pytest.mark.parametrize(
        "current, previous, label",
        [
            (0, 0, "+0% from last month"),
            (3, 0, "+100% from last month"),
            (0, 4, "-100% from last month"),
            (3, 2, "+50.00% from last month"),
            (1, 3, "-66.67% from last month"),
            (2, 2, "+0.00% from last month"),
        ],
    )
    def test_labels(self, current, previous, label):
        assert percentage_change_label(current, previous) == label


class TestMonthWindows:
    def test_mid_month(self):
        current_start, previous_start, previous_end = month_windows(datetime(2024, 3, 15, 10, 30))
        assert current_start == datetime(2024, 3, 1)
        assert previous_start == datetime(2024, 2, 1)
        assert previous_end == datetime(2024, 2, 29, 23, 59, 59, 999000)

    def test_january(self):
        current_start, previous_start, _ = month_windows(datetime(2024, 1, 2))
        assert current_start == datetime(2024, 1, 1)
        assert previous_start == datetime(2023, 12, 1)


class TestCandidateStats:
    def test_counts_and_labels(self, stores, make_job, make_candidate):
        candidate = stores.candidates.add(make_candidate())
        jobs = [stores.jobs.add(make_job()) for _ in range(4)]
        now = datetime(2024, 3, 15)

        stores.applied.add(candidate.id, jobs[0].id, created_at=datetime(2024, 3, 2))
        stores.applied.add(candidate.id, jobs[1].id, created_at=datetime(2024, 3, 10))
        stores.applied.add(candidate.id, jobs[2].id, created_at=datetime(2024, 2, 29, 18))
        stores.saved.add(candidate.id, jobs[3].id, created_at=datetime(2024, 2, 5))
        # Outside both windows
        stores.applied.add(candidate.id, jobs[3].id, created_at=datetime(2024, 1, 20))

        stats = asyncio.run(stores.dashboard_service().candidate_stats(str(candidate.id), now=now))

        assert stats.jobs_applied == 2
        assert stats.saved_jobs == 0
        assert stats.jobs_applied_percentage_change == "+100.00% from last month"
        assert stats.saved_jobs_percentage_change == "-100% from last month"
        assert stats.profile_strength == 50

    def test_serialized_shape(self, stores, make_candidate):
        candidate = stores.candidates.add(make_candidate())
        body = asyncio.run(stores.dashboard_service().candidate_stats(str(candidate.id))).model_dump(by_alias=True)
        assert set(body) == {
            "jobsApplied",
            "savedJobs",
            "profileStrength",
            "jobsAppliedPercentageChange",
            "savedJobsPercentageChange",
        }

    def test_unknown_candidate(self, stores):
        with pytest.raises(NotFoundError):
            asyncio.run(stores.dashboard_service().candidate_stats(str(ObjectId())))


class TestProfileTasks:
    def test_report(self, stores, make_candidate):
        candidate = stores.candidates.add(make_candidate(resume_url="cv.pdf"))
        report = asyncio.run(stores.dashboard_service().profile_tasks(str(candidate.id)))
        assert report.completed_tasks == 2
        assert report.completion_percentage == 29
