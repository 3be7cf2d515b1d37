from __future__ import annotations

import logging
import warnings
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from . import invoker
from .subject import State
from .transition import Transition

logger = logging.getLogger(__name__)

CALLBACK_GROUPS = ("before", "after", "error", "success")


class Event:
    """A named set of transitions plus event-scoped callback groups.

    Events are built once (see ``EventBuilder``) and are read-only afterwards,
    so one instance can be fired against any number of subjects.
    """

    def __init__(
        self,
        name: str,
        transitions: Iterable[Transition] = (),
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._name = name
        self._transitions: Tuple[Transition, ...] = tuple(transitions)
        self._options: Mapping[str, Any] = MappingProxyType(dict(options or {}))

    @property
    def name(self) -> str:
        return self._name

    @property
    def options(self) -> Mapping[str, Any]:
        return self._options

    @property
    def transitions(self) -> Tuple[Transition, ...]:
        return self._transitions

    def all_transitions(self) -> Tuple[Transition, ...]:
        warnings.warn(
            "Event.all_transitions() is deprecated; use Event.transitions",
            DeprecationWarning,
            stacklevel=2,
        )
        return self._transitions

    def may_fire(self, subject: Any, to_state: Optional[State] = None, *args: Any) -> bool:
        """Report whether the event could fire, without firing it.

        Guards run; transition callbacks and callback groups do not, and the
        subject is never asked to change state. ``to_state`` restricts the
        check to transitions that can reach it.
        """
        return self._fire(subject, True, to_state, *args)

    def fire(self, subject: Any, *args: Any) -> Optional[State]:
        """Fire the event and return the state reached, or None.

        The destination cannot be chosen by the caller; the matched
        transition's first declared target is used.
        """
        return self._fire(subject, False, None, *args)

    def transitions_from_state(self, state: State) -> List[Transition]:
        return [t for t in self._transitions if t.matches_origin(state)]

    def transitions_from_state_exists(self, state: State) -> bool:
        return bool(self.transitions_from_state(state))

    def transitions_to_state(self, state: State) -> List[Transition]:
        return [t for t in self._transitions if t.leads_to(state)]

    def transitions_to_state_exists(self, state: State) -> bool:
        return bool(self.transitions_to_state(state))

    def fire_callbacks(self, callback_name: str, subject: Any, *args: Any) -> bool:
        return invoker.invoke(self._options.get(callback_name), subject, *args)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Event):
            return self._name == other._name
        return self._name == other

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return f"Event({self._name!r}, transitions={len(self._transitions)})"

    # Test mode returns True/False; real mode returns the new state or None.
    def _fire(self, subject: Any, test: bool, to_state: Optional[State] = None, *args: Any) -> Any:
        result: Any = False if test else None

        if any(t.has_origin for t in self._transitions):
            current = subject.current_state()
            candidates = [t for t in self._transitions if t.matches_origin(current)]
            if not candidates:
                logger.debug("event %s: no transition from %r", self._name, current)
                return result
        else:
            candidates = list(self._transitions)

        for transition in candidates:
            if to_state is not None and not transition.leads_to(to_state):
                continue
            if transition.perform(subject, *args):
                logger.debug("event %s: matched %r (test=%s)", self._name, transition, test)
                if test:
                    result = True
                else:
                    result = transition.default_target
                    transition.execute(subject, result, *args)
                break
        else:
            logger.debug("event %s: no guard passed", self._name)

        return result


__all__ = ["Event", "CALLBACK_GROUPS"]
