"""
Utility modules for devsetup.
"""

from .console import Console
from .logging import setup_root_logger

__all__ = ["Console", "setup_root_logger"]
