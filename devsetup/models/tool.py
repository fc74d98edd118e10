"""
Tool-related data models.
"""

from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field, validator


class InstallStrategy(str, Enum):
    """Closed set of procedures used to install or remove a catalog entry."""
    HOMEBREW_BOOTSTRAP = "homebrew_bootstrap"
    HOMEBREW_CASK = "homebrew_cask"
    ASDF_CLONE = "asdf_clone"
    HOMEBREW_FORMULA = "homebrew_formula"


class ToolSpec(BaseModel):
    """Specification for a tool managed by the catalog."""
    name: str = Field(..., description="Unique tool identifier")
    display_name: Optional[str] = Field(None, description="Human readable name")
    executable: Optional[str] = Field(None, description="Command resolved on the search path")
    version_args: List[str] = Field(
        default_factory=lambda: ["--version"],
        description="Arguments that make the tool print its version"
    )
    strategy: InstallStrategy = Field(
        default=InstallStrategy.HOMEBREW_FORMULA,
        description="Installer strategy used for install and removal"
    )
    package: Optional[str] = Field(None, description="Formula or cask name for the package manager")

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "name": "aws",
                "display_name": "AWS CLI v2",
                "executable": "aws",
                "strategy": "homebrew_formula",
                "package": "awscli"
            }
        }

    @validator('name')
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Tool name must not be empty")
        return v.strip()

    @property
    def label(self) -> str:
        return self.display_name or self.name

    @property
    def command(self) -> str:
        return self.executable or self.name

    @property
    def package_name(self) -> str:
        return self.package or self.name


class ProbeResult(BaseModel):
    """Outcome of a presence check for one tool."""
    tool: ToolSpec
    installed: bool = Field(..., description="Whether the executable resolved on the search path")
    version: Optional[str] = Field(None, description="First line of the tool's version output")

    class Config:
        frozen = True

    @property
    def missing(self) -> bool:
        return not self.installed
