"""Permission gate backed by a configured set of granted capabilities."""

from collections.abc import Iterable

from src.config.constants import REQUIRED_CAPABILITIES


class StaticPermissionGate:
    """Capability gate whose grants are fixed at construction or via grant()/revoke()."""

    def __init__(self, granted: Iterable[str] = REQUIRED_CAPABILITIES):
        self._granted = set(granted)

    def has_capability(self, name: str) -> bool:
        return name in self._granted

    def missing_capabilities(self) -> set[str]:
        return set(REQUIRED_CAPABILITIES) - self._granted

    def grant(self, name: str) -> None:
        self._granted.add(name)

    def revoke(self, name: str) -> None:
        self._granted.discard(name)
