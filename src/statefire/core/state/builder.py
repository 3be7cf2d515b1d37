"""Definition-time surface for events.

A configuration function receives an ``EventBuilder`` and declares
transitions and callbacks on it; ``build()`` then freezes the result into an
immutable ``Event``::

    def configure(e: EventBuilder) -> None:
        e.transitions(from_=["draft", "review"], to="published", guard="is_ready")
        e.before("log_attempt")

    publish = define_event("publish", configure, operations=ops)
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from .event import CALLBACK_GROUPS, Event
from .registries import OperationRegistry
from .specs import append_spec, coerce_spec
from .transition import Transition

_MISSING = object()


class EventBuilder:
    """Accumulates transitions and callback groups for one event."""

    def __init__(
        self,
        name: str,
        options: Optional[Mapping[str, Any]] = None,
        operations: Optional[OperationRegistry] = None,
        *,
        domain: Optional[str] = None,
    ) -> None:
        self.name = name
        self.operations = operations
        self.domain = domain
        self._transitions: List[Transition] = []
        self._options: Dict[str, Any] = {}
        for key, value in (options or {}).items():
            self._options[key] = self._coerce(value)

    def _coerce(self, value: Any) -> Any:
        return coerce_spec(value, self.operations, domain=self.domain)

    def transitions(
        self,
        from_: Any = None,
        to: Any = _MISSING,
        guard: Any = None,
        callbacks: Any = None,
        **extra: Any,
    ) -> List[Transition]:
        """Declare transitions and return everything declared so far.

        One transition is created per origin in ``from_``. When ``from_`` is
        omitted and no transition exists yet, a single transition that fires
        from any state is created instead.
        """
        if to is _MISSING:
            return list(self._transitions)

        if callbacks is None:
            callbacks = extra.pop("on_transition", None)
        guard_spec = self._coerce(guard)
        callback_spec = self._coerce(callbacks)

        if from_ is None:
            origins: List[Any] = []
        elif isinstance(from_, (list, tuple)):
            origins = list(from_)
        else:
            origins = [from_]

        for origin in origins:
            self._transitions.append(
                Transition(origin, to, guard=guard_spec, callbacks=callback_spec, options=extra)
            )
        if not self._transitions and to is not None:
            self._transitions.append(
                Transition(None, to, guard=guard_spec, callbacks=callback_spec, options=extra)
            )
        return list(self._transitions)

    def transition(self, definition: Mapping[str, Any]) -> List[Transition]:
        """Declare transitions from a ``{from, to, guard, on_transition}`` mapping."""
        opts = dict(definition)
        from_ = opts.pop("from", None)
        to = opts.pop("to", None)
        return self.transitions(from_=from_, to=to, **opts)

    def _append(self, group: str, specs: tuple) -> Any:
        self._options[group] = append_spec(
            self._options.get(group), *(self._coerce(s) for s in specs)
        )

    def before(self, *specs: Any) -> Any:
        return self._group("before", specs)

    def after(self, *specs: Any) -> Any:
        return self._group("after", specs)

    def error(self, *specs: Any) -> Any:
        return self._group("error", specs)

    def success(self, *specs: Any) -> Any:
        return self._group("success", specs)

    def _group(self, group: str, specs: tuple) -> Any:
        self._append(group, specs)
        # Allows ``@builder.before`` on a plain function.
        if len(specs) == 1 and callable(specs[0]):
            return specs[0]
        return self

    def build(self) -> Event:
        return Event(self.name, self._transitions, self._options)


def define_event(
    name: str,
    configure: Optional[Callable[[EventBuilder], Any]] = None,
    *,
    options: Optional[Mapping[str, Any]] = None,
    operations: Optional[OperationRegistry] = None,
    domain: Optional[str] = None,
) -> Event:
    """Build an event by passing a fresh builder to ``configure``."""
    builder = EventBuilder(name, options, operations, domain=domain)
    if configure is not None:
        configure(builder)
    return builder.build()


__all__ = ["EventBuilder", "define_event", "CALLBACK_GROUPS"]
