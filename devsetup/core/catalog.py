"""
The fixed, ordered list of tools devsetup manages.
"""

from typing import Iterable, List

from ..models.tool import InstallStrategy, ToolSpec


DEFAULT_TOOLS = [
    ToolSpec(name="brew", display_name="Homebrew", strategy=InstallStrategy.HOMEBREW_BOOTSTRAP),
    ToolSpec(name="docker", display_name="Docker Desktop", strategy=InstallStrategy.HOMEBREW_CASK),
    ToolSpec(name="asdf", display_name="asdf", strategy=InstallStrategy.ASDF_CLONE),
    ToolSpec(name="kubectl", strategy=InstallStrategy.HOMEBREW_FORMULA),
    ToolSpec(name="helm", strategy=InstallStrategy.HOMEBREW_FORMULA),
    ToolSpec(name="jq", strategy=InstallStrategy.HOMEBREW_FORMULA),
    ToolSpec(name="aws", display_name="AWS CLI v2", strategy=InstallStrategy.HOMEBREW_FORMULA,
             package="awscli"),
]


def build_catalog(tools: Iterable[ToolSpec]) -> List[ToolSpec]:
    """
    Build an ordered catalog, rejecting duplicate tool names.

    Args:
        tools: Tool specifications in the order they should be probed

    Returns:
        List of tool specifications
    """
    catalog: List[ToolSpec] = []
    seen = set()
    for tool in tools:
        if tool.name in seen:
            raise ValueError(f"Duplicate tool in catalog: {tool.name}")
        seen.add(tool.name)
        catalog.append(tool)
    return catalog


def default_catalog() -> List[ToolSpec]:
    return build_catalog(DEFAULT_TOOLS)
