"""A single candidate state change within an event."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple

from ..exceptions import DefinitionError
from . import invoker
from .subject import State


def _normalize_targets(to: Any) -> Tuple[State, ...]:
    if isinstance(to, (list, tuple)):
        raw: Iterable[Any] = to
    elif to is None:
        raw = ()
    else:
        raw = (to,)
    seen: list[State] = []
    for state in raw:
        if state not in seen:
            seen.append(state)
    return tuple(seen)


@dataclass(frozen=True, eq=False)
class Transition:
    """Origin, ordered destinations, guard and transition-scoped callbacks.

    ``origin`` is ``None`` only for transitions declared to fire from any
    state. ``targets`` keeps declaration order; the first entry is what a
    real fire resolves to.
    """

    origin: Optional[State]
    targets: Tuple[State, ...]
    guard: Any = None
    callbacks: Any = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        targets = _normalize_targets(self.targets)
        if not targets:
            raise DefinitionError(
                "Transition requires at least one target state",
                context={"from": self.origin},
            )
        object.__setattr__(self, "targets", targets)
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @property
    def has_origin(self) -> bool:
        return self.origin is not None

    @property
    def default_target(self) -> State:
        return self.targets[0]

    def matches_origin(self, state: State) -> bool:
        return self.origin == state

    def leads_to(self, state: State) -> bool:
        return state in self.targets

    def perform(self, subject: Any, *args: Any) -> bool:
        """Evaluate the guard. A transition without a guard always passes."""
        return invoker.evaluate(self.guard, subject, *args)

    def execute(self, subject: Any, target: State, *args: Any) -> State:
        """Run transition callbacks, then hand ``target`` to the subject."""
        invoker.invoke(self.callbacks, subject, *args)
        subject.adopt_state(target)
        return target

    def __repr__(self) -> str:
        return f"Transition(from={self.origin!r}, to={list(self.targets)!r})"


__all__ = ["Transition"]
