from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class AdapterMeta:
    # Registry key of a factory: the role it fills (source/sink/log) and its kind.
    name: str
    kind: str | None


def adapter(*, name: str | None = None, kind: str | None = None) -> Callable[[T], T]:
    # Decorator tags an adapter factory with the role/kind it is registered under.

    def _decorate(target: T) -> T:
        resolved_name = name
        if not isinstance(resolved_name, str) or not resolved_name:
            resolved_name = getattr(target, "__name__", "")
        setattr(target, "__adapter_meta__", AdapterMeta(name=resolved_name, kind=kind))
        return target

    return _decorate


def get_adapter_meta(target: object) -> AdapterMeta | None:
    meta = getattr(target, "__adapter_meta__", None)
    if isinstance(meta, AdapterMeta):
        return meta
    return None
