"""
Utility modules for the jobboard service.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Application-wide constants
"""

from jobboard.utils.config import (
    AppSettings,
    get_settings,
    reload_settings,
    ROOT_DIR,
    LOGS_DIR,
)
from jobboard.utils.constants import (
    APP_NAME,
    APP_DISPLAY_NAME,
    VERSION,
    ApplicationStatus,
    AuditAction,
    CandidateStatus,
    JobStatus,
    ListingMode,
)
from jobboard.utils.logger import (
    setup_logging,
    get_logger,
    audit_log,
    LoggerMixin,
    log,
)

__all__ = [
    # Config
    "AppSettings",
    "get_settings",
    "reload_settings",
    "ROOT_DIR",
    "LOGS_DIR",
    # Constants
    "APP_NAME",
    "APP_DISPLAY_NAME",
    "VERSION",
    "ApplicationStatus",
    "AuditAction",
    "CandidateStatus",
    "JobStatus",
    "ListingMode",
    # Logger
    "setup_logging",
    "get_logger",
    "audit_log",
    "LoggerMixin",
    "log",
]
