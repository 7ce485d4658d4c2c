# FileHelper - Core Module
"""
Core infrastructure for FileHelper: typed errors, the audit log and
configuration loading.
"""

from .errors import FileHelperError, NotFoundError, InvalidArgumentError, FileOperationError
from .logger import AuditLogger, AuditEntry, ActionType, ActionStatus
from .config import HelperConfig, load_config, save_config

__all__ = [
    "FileHelperError",
    "NotFoundError",
    "InvalidArgumentError",
    "FileOperationError",
    "AuditLogger",
    "AuditEntry",
    "ActionType",
    "ActionStatus",
    "HelperConfig",
    "load_config",
    "save_config",
]

__version__ = "0.1.0"
