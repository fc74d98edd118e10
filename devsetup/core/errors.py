"""
Errors that end a provisioning run.
"""

from typing import Optional

from ..models.installation import StepResult
from ..models.tool import ToolSpec


class ProvisionError(Exception):
    """Base class for fatal provisioning failures."""


class InstallError(ProvisionError):
    """A catalog tool was still missing after its installer ran."""

    def __init__(self, tool: ToolSpec, cause: str):
        self.tool = tool
        self.cause = cause
        super().__init__(
            f"{tool.label} installation failed: {cause}. Please check the logs and try again."
        )


class VerificationError(ProvisionError):
    """A post-install step's read-back check failed; ``result`` holds the FAILED step."""

    def __init__(self, step: str, message: str, result: Optional[StepResult] = None):
        self.step = step
        self.message = message
        self.result = result
        super().__init__(f"{message}. Please check the logs and try again.")
