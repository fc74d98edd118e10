"""
Data models for devsetup.
"""

from .tool import InstallStrategy, ProbeResult, ToolSpec
from .installation import (
    CommandResult,
    InstallationRecord,
    InstallStatus,
    ProvisionSummary,
    StepResult,
    StepStatus,
)

__all__ = [
    "InstallStrategy",
    "ProbeResult",
    "ToolSpec",
    "CommandResult",
    "InstallationRecord",
    "InstallStatus",
    "ProvisionSummary",
    "StepResult",
    "StepStatus"
]
