from abc import ABC, abstractmethod
from collections.abc import Sequence

from cigate.domain.value_objects.toolchain_types import ToolchainStep


class ToolchainPort(ABC):
    """Port for provisioning the toolchain the checks depend on."""

    @abstractmethod
    async def provision(self, steps: Sequence[ToolchainStep], cwd: str) -> None:
        """Run every provisioning step in order.

        Raises ToolchainError on the first step that fails.
        """
