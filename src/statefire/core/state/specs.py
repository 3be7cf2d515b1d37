"""Guard and callback specs.

A spec describes a unit of behavior to invoke against a subject:

- ``NamedOperation``: an operation looked up by name in an operation table
  when the machine is defined, never on the subject at firing time.
- ``InlineClosure``: a callable supplied directly.
- ``SpecList``: an ordered sequence of specs, possibly nested.

Every form is called as ``fn(subject, *args)``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple, Union

if TYPE_CHECKING:
    from .registries import OperationRegistry


@dataclass(frozen=True)
class NamedOperation:
    name: str
    fn: Callable[..., Any]

    def __repr__(self) -> str:
        return f"NamedOperation({self.name!r})"


@dataclass(frozen=True)
class InlineClosure:
    fn: Callable[..., Any]


@dataclass(frozen=True)
class SpecList:
    items: Tuple[Any, ...] = ()

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


Spec = Union[NamedOperation, InlineClosure, SpecList]

SPEC_TYPES = (NamedOperation, InlineClosure, SpecList)


def is_spec(value: Any) -> bool:
    return isinstance(value, SPEC_TYPES)


def coerce_spec(value: Any, operations: Optional["OperationRegistry"] = None, *, domain: Optional[str] = None) -> Any:
    """Normalize a user-supplied guard/callback into a spec.

    Strings are resolved against ``operations`` right away, so an unknown
    name fails at definition time with ``UnknownOperationError``. Values of
    any other unsupported type are returned untouched; the invoker treats
    them as unrecognized.
    """
    if value is None or is_spec(value):
        return value
    if isinstance(value, str):
        if operations is None:
            from .registries import registry as operations
        return NamedOperation(value, operations.resolve(value, domain))
    if isinstance(value, (list, tuple)):
        return SpecList(tuple(coerce_spec(v, operations, domain=domain) for v in value))
    if callable(value):
        return InlineClosure(value)
    return value


def append_spec(existing: Any, *values: Any) -> SpecList:
    """Return a list spec holding ``existing`` followed by ``values``.

    Used to accumulate callback groups: repeated declarations append in
    call order instead of replacing what is already there.
    """
    items: list[Any] = []
    if isinstance(existing, SpecList):
        items.extend(existing.items)
    elif existing is not None:
        items.append(existing)
    items.extend(values)
    return SpecList(tuple(items))


__all__ = [
    "NamedOperation",
    "InlineClosure",
    "SpecList",
    "Spec",
    "SPEC_TYPES",
    "is_spec",
    "coerce_spec",
    "append_spec",
]
