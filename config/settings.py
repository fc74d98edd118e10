"""
Configuration settings for devsetup.
"""

from typing import Optional, List
from pathlib import Path
from pydantic import BaseModel, Field, validator
from pydantic_settings import BaseSettings


HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
HOMEBREW_UNINSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/uninstall.sh"


def _expand(path: Path) -> Path:
    return Path(path).expanduser()


class HomebrewConfig(BaseModel):
    """Homebrew bootstrap configuration."""
    install_script_url: str = Field(default=HOMEBREW_INSTALL_URL, description="Remote install script")
    uninstall_script_url: str = Field(default=HOMEBREW_UNINSTALL_URL, description="Remote uninstall script")
    prefixes: List[Path] = Field(
        default_factory=lambda: [
            Path("/opt/homebrew"),
            Path("/usr/local"),
            Path("/home/linuxbrew/.linuxbrew"),
        ],
        description="Install prefixes whose bin directory is added to the search path"
    )

    class Config:
        frozen = True


class AsdfConfig(BaseModel):
    """asdf version manager configuration."""
    repo_url: str = Field(default="https://github.com/asdf-vm/asdf.git", description="asdf git repository")
    branch: str = Field(default="v0.12.0", description="Release branch to clone")
    install_dir: Path = Field(default_factory=lambda: Path.home() / ".asdf", description="Clone target for asdf")

    class Config:
        frozen = True

    @validator('install_dir')
    def expand_install_dir(cls, v):
        return _expand(v)


class ShellConfig(BaseModel):
    """Shell start-up files that receive asdf sourcing lines."""
    rc_files: List[Path] = Field(
        default_factory=lambda: [Path.home() / ".zshrc", Path.home() / ".bashrc"],
        description="Shell rc files to register asdf in"
    )

    class Config:
        frozen = True

    @validator('rc_files')
    def expand_rc_files(cls, v):
        return [_expand(p) for p in v]


class ProgressConfig(BaseModel):
    """Progress indicator configuration."""
    interval_seconds: float = Field(default=0.1, description="Delay between spinner frames")
    probe_timeout_seconds: float = Field(default=10.0, description="Timeout for version queries")

    class Config:
        frozen = True


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format"
    )
    file_path: Optional[Path] = Field(default=Path("logs/devsetup.log"))
    max_file_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(default=5, description="Number of log backups to keep")

    class Config:
        frozen = True


class Settings(BaseSettings):
    """Run configuration, fixed for the duration of one invocation."""
    debug: bool = Field(default=False, description="Verbose output instead of progress animation")
    assume_yes: bool = Field(default=False, description="Answer the install prompt with yes")

    # Post-install sequence
    python_version: str = Field(default="3.9.13", description="Python version pinned through asdf")
    python_package: str = Field(default="aws-okta-processor", description="Package installed with pip")
    dotfiles_repo: str = Field(
        default="https://github.com/milorad-kukic/dotfiles",
        description="Repository cloned after the catalog pass"
    )
    clone_dir: Path = Field(default_factory=lambda: Path.home() / "MalwareSamples", description="Clone target path")

    # Component configs
    homebrew: HomebrewConfig = Field(default_factory=HomebrewConfig)
    asdf: AsdfConfig = Field(default_factory=AsdfConfig)
    shell: ShellConfig = Field(default_factory=ShellConfig)
    progress: ProgressConfig = Field(default_factory=ProgressConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        frozen = True
        env_prefix = "DEVSETUP_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_nested_delimiter = "__"
        extra = "ignore"  # Ignore extra fields from environment

    @validator('clone_dir')
    def expand_clone_dir(cls, v):
        return _expand(v)

    @validator('python_version')
    def validate_python_version(cls, v):
        parts = v.split(".")
        if len(parts) != 3 or not all(p.isdigit() for p in parts):
            raise ValueError(f"python_version must be MAJOR.MINOR.PATCH, got {v!r}")
        return v
