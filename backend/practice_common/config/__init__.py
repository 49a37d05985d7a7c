"""
Configuration module: Settings, logging, constants.
"""

from practice_common.config.settings import settings, get_settings
from practice_common.config.logging import get_logger, setup_logging
from practice_common.config.constants import Limits, SortOrder, AuditColumns

__all__ = [
    # settings
    "settings",
    "get_settings",
    # logging
    "get_logger",
    "setup_logging",
    # constants
    "Limits",
    "SortOrder",
    "AuditColumns",
]
