"""
Installation, command and run result models.
"""

from enum import Enum
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field

from .tool import ToolSpec


class InstallStatus(str, Enum):
    """Per-tool install state."""
    NOT_STARTED = "not_started"
    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


_TRANSITIONS = {
    InstallStatus.NOT_STARTED: {InstallStatus.ATTEMPTING},
    InstallStatus.ATTEMPTING: {InstallStatus.SUCCEEDED, InstallStatus.FAILED},
    InstallStatus.SUCCEEDED: set(),
    InstallStatus.FAILED: set(),
}


class InstallationRecord(BaseModel):
    """Tracks one tool through NOT_STARTED -> ATTEMPTING -> SUCCEEDED/FAILED."""
    tool: ToolSpec
    status: InstallStatus = Field(default=InstallStatus.NOT_STARTED)
    error: Optional[str] = Field(None, description="Failure cause if the install failed")

    # Timing
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None

    def update_status(self, status: InstallStatus, error: Optional[str] = None) -> None:
        """Move to ``status``, rejecting transitions the state machine does not allow."""
        if status not in _TRANSITIONS[self.status]:
            raise ValueError(
                f"Invalid transition for {self.tool.name}: {self.status.value} -> {status.value}"
            )
        self.status = status
        if status == InstallStatus.ATTEMPTING:
            self.started_at = datetime.utcnow()
        else:
            self.completed_at = datetime.utcnow()
            if self.started_at:
                self.duration_seconds = (self.completed_at - self.started_at).total_seconds()
        if error:
            self.error = error


class CommandResult(BaseModel):
    """Result of one external command."""
    args: List[str] = Field(..., description="Command line that was run")
    returncode: int = Field(..., description="Process exit status")
    output: str = Field(default="", description="Captured stdout and stderr")
    duration_seconds: float = Field(default=0.0)

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class StepStatus(str, Enum):
    """Status of a post-install step."""
    PASSED = "passed"
    FAILED = "failed"


class StepResult(BaseModel):
    """Result of a post-install step after its read-back check."""
    step: str = Field(..., description="Step name")
    status: StepStatus = Field(..., description="Verification status")
    output: Optional[str] = Field(None, description="Verification output")
    error: Optional[str] = Field(None, description="Error message if failed")

    class Config:
        json_schema_extra = {
            "example": {
                "step": "runtime_pin",
                "status": "passed",
                "output": "Python 3.9.13"
            }
        }


class ProvisionSummary(BaseModel):
    """Outcome of one provisioning run."""
    probed: int = 0
    installed: List[str] = Field(default_factory=list)
    declined: bool = False
    steps: List[StepResult] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None

    def complete(self) -> None:
        """Mark the run as complete."""
        self.completed_at = datetime.utcnow()
        self.duration_seconds = (self.completed_at - self.started_at).total_seconds()
