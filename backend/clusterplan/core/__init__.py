"""Core utilities and configuration."""

from clusterplan.core.config import Settings, get_settings
from clusterplan.core.database import Base, db_manager, get_session, transaction
from clusterplan.core.logging import (
    db_logger,
    get_logger,
    planning_logger,
    setup_logging,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Database
    "Base",
    "db_manager",
    "get_session",
    "transaction",
    # Logging
    "db_logger",
    "get_logger",
    "planning_logger",
    "setup_logging",
]
