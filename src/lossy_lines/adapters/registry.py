from __future__ import annotations

from typing import Callable, Iterable

from lossy_lines.adapters.contracts import get_adapter_meta


class AdapterRegistryError(ValueError):
    # Raised when adapter lookup/build fails.
    pass


class AdapterRegistry:
    # Registry of adapter factories keyed by role + kind.
    def __init__(self) -> None:
        self._factories: dict[tuple[str, str], Callable[[dict[str, object]], object]] = {}

    def register(self, role: str, kind: str, factory: Callable[[dict[str, object]], object]) -> None:
        key = (role, kind)
        if key in self._factories:
            raise AdapterRegistryError(f"Duplicate adapter registration: {role}/{kind}")
        self._factories[key] = factory

    def register_all(self, factories: Iterable[Callable[[dict[str, object]], object]]) -> None:
        # Role and kind come from @adapter metadata; undecorated factories are a wiring error.
        for factory in factories:
            meta = get_adapter_meta(factory)
            if meta is None or not meta.kind:
                raise AdapterRegistryError(f"Factory {factory!r} has no @adapter name/kind")
            self.register(meta.name, meta.kind, factory)

    def build(self, role: str, config: dict[str, object]) -> object:
        if not isinstance(config, dict):
            raise AdapterRegistryError("Adapter config must be a mapping")
        kind = config.get("kind")
        if not isinstance(kind, str):
            raise AdapterRegistryError("Adapter kind must be a string")
        settings = config.get("settings", {})
        if not isinstance(settings, dict):
            raise AdapterRegistryError("Adapter settings must be a mapping")
        key = (role, kind)
        if key not in self._factories:
            known = ", ".join(self.kinds(role)) or "none"
            raise AdapterRegistryError(f"Unknown adapter kind for role {role}: {kind} (known: {known})")
        return self._factories[key](settings)

    def kinds(self, role: str) -> list[str]:
        return sorted(kind for r, kind in self._factories if r == role)
