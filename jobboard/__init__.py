"""
jobboard - job-board backend for candidates, employers and admins.

Provides candidate-job match scoring, ranked job listings and the
supporting MongoDB data layer behind a FastAPI service.
"""

__app_name__ = "jobboard"
__version__ = "0.1.0"
