"""
Core modules for devsetup.
"""

from .catalog import build_catalog, default_catalog
from .command_runner import CommandRunner
from .decommissioner import Decommissioner
from .dispatcher import InstallerDispatcher
from .errors import InstallError, ProvisionError, VerificationError
from .host import HostEnvironment
from .installers import InstallerRegistry
from .post_install import PostInstallSequence
from .prober import Prober
from .provisioner import Provisioner

__all__ = [
    "build_catalog",
    "default_catalog",
    "CommandRunner",
    "Decommissioner",
    "InstallerDispatcher",
    "InstallError",
    "ProvisionError",
    "VerificationError",
    "HostEnvironment",
    "InstallerRegistry",
    "PostInstallSequence",
    "Prober",
    "Provisioner"
]
