"""ToolRegistry — ordered name-to-tool map shared by the request handlers."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from toolbridge.protocol.errors import ToolNotFoundError
from toolbridge.tools.errors import RegistryFrozenError

if TYPE_CHECKING:
    from toolbridge.tools.models import ToolBehavior, ToolDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisteredTool:
    """A descriptor paired with the callable that implements it."""

    descriptor: ToolDescriptor
    behavior: ToolBehavior


class ToolRegistry:
    """Holds tool descriptors and behaviors in registration order.

    Built once during startup and frozen before the server starts reading
    requests.

    Usage::

        registry = ToolRegistry()
        registry.register(descriptor, behavior)
        registry.freeze()

        registry.list()            # descriptors, insertion order
        registry.lookup("echo")    # descriptor or ToolNotFoundError
    """

    def __init__(self) -> None:
        self._tools: dict[str, RegisteredTool] = {}
        self._lock = threading.RLock()
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, descriptor: ToolDescriptor, behavior: ToolBehavior) -> None:
        """Add a tool, replacing any earlier tool with the same name.

        A replaced tool keeps its original position in :meth:`list`.
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(descriptor.name)
            if descriptor.name in self._tools:
                logger.warning("Replacing previously registered tool %s", descriptor.name)
            self._tools[descriptor.name] = RegisteredTool(descriptor, behavior)

    def freeze(self) -> None:
        """Reject any further registration."""
        with self._lock:
            self._frozen = True

    def get(self, name: str) -> RegisteredTool:
        with self._lock:
            entry = self._tools.get(name)
        if entry is None:
            raise ToolNotFoundError(name)
        return entry

    def lookup(self, name: str) -> ToolDescriptor:
        """Return the descriptor registered under *name*."""
        return self.get(name).descriptor

    def behavior(self, name: str) -> ToolBehavior:
        """Return the callable registered under *name*."""
        return self.get(name).behavior

    def list(self) -> list[ToolDescriptor]:
        """Return all descriptors in registration order."""
        with self._lock:
            return [entry.descriptor for entry in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._tools

    def __len__(self) -> int:
        with self._lock:
            return len(self._tools)
