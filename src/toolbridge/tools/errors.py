"""Error types for tool registration."""

from __future__ import annotations


class RegistryError(Exception):
    """Base error for tool registry misuse."""


class RegistryFrozenError(RegistryError):
    """A tool was registered after the registry was frozen."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Cannot register tool '{name}': registry is frozen")
