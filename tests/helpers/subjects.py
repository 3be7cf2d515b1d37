"""Small subjects and call recorders shared by the state tests."""
from __future__ import annotations

from typing import Any, Callable, List, Tuple


class Document:
    """Minimal subject: holds a state and a history of adopted states."""

    def __init__(self, state: Any, *, ready: bool = True) -> None:
        self.state = state
        self.ready = ready
        self.history: List[Any] = []

    def current_state(self) -> Any:
        return self.state

    def adopt_state(self, state: Any) -> None:
        self.history.append(state)
        self.state = state

    def archive(self, *args: Any) -> None:
        self.history.append(("archive", args))


class Recorder:
    """Collects ``(label, args)`` pairs in call order."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def op(self, label: str, result: Any = None) -> Callable[..., Any]:
        def _op(subject: Any, *args: Any) -> Any:
            self.calls.append((label, args))
            return result

        _op.__name__ = label
        return _op

    def guard(self, label: str, result: bool) -> Callable[..., bool]:
        return self.op(label, result)

    @property
    def labels(self) -> List[str]:
        return [label for label, _ in self.calls]
