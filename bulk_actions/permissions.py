"""Capability oracles consulted before listing or running an action."""

from typing import Callable, Iterable, Optional, Protocol, runtime_checkable


@runtime_checkable
class CapabilityOracle(Protocol):
    """Answers whether the current actor holds a capability."""

    def has_capability(self, capability: str) -> bool:  # pragma: no cover - interface
        ...


class CapabilitySet:
    """Oracle backed by a fixed set of capability tokens."""

    def __init__(self, capabilities: Iterable[str] = ()) -> None:
        self.capabilities = frozenset(capabilities)

    def has_capability(self, capability: str) -> bool:
        return capability in self.capabilities

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"{self.__class__.__name__}({sorted(self.capabilities)!r})"


class CallableOracle:
    """Adapts a plain ``capability -> bool`` function to the oracle protocol."""

    def __init__(self, check: Callable[[str], bool]) -> None:
        self._check = check

    def has_capability(self, capability: str) -> bool:
        return bool(self._check(capability))


def is_permitted(actor: CapabilityOracle, capability: Optional[str]) -> bool:
    """Check an actor against a capability; empty capabilities always pass."""
    if not capability:
        return True
    return actor.has_capability(capability)
