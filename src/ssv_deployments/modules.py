"""SSV module kinds and their validation."""

from enum import Enum
from typing import List

from .exceptions import InvalidModuleError


class ModuleKind(Enum):
    """
    Module contracts wired into SSVNetwork.

    Value strings are the contract identifiers in the artifacts directory.
    Declaration order is the deployment order.
    """

    OPERATORS = "SSVOperators"
    CLUSTERS = "SSVClusters"
    DAO = "SSVDAO"
    VIEWS = "SSVViews"


def module_values() -> List[str]:
    """Return the valid module value strings in declaration order."""
    return [kind.value for kind in ModuleKind]


def validate_module(name: str) -> ModuleKind:
    """
    Map an unvalidated module name to its ModuleKind.

    Matching is against value strings ("SSVOperators"), never against
    member names ("OPERATORS").

    Args:
        name: Requested module name

    Returns:
        Matching ModuleKind

    Raises:
        InvalidModuleError: If name is not a module value string
    """
    values = module_values()
    if name not in values:
        raise InvalidModuleError(
            f"Invalid SSVModule: {name}. Expected one of: {', '.join(values)}"
        )
    return ModuleKind(name)
