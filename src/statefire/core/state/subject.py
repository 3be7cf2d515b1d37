"""Subject capability contract consumed by the firing engine."""
from __future__ import annotations

from typing import Any, Hashable, Protocol, runtime_checkable

State = Hashable


@runtime_checkable
class Subject(Protocol):
    """Object whose state a machine resolves.

    The engine only reads ``current_state()``. It never assigns state itself;
    after a transition's callbacks run it asks the subject to
    ``adopt_state(target)``, and persisting that is the subject's business.
    """

    def current_state(self) -> State:
        ...

    def adopt_state(self, state: State) -> Any:
        ...


__all__ = ["State", "Subject"]
