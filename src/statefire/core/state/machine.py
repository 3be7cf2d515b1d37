"""Machine-level orchestration around ``Event``.

``Event.fire`` only resolves and executes a transition. ``StateMachine.fire``
wraps it with the event's callback groups:

1. ``before`` callbacks
2. ``Event.fire``
3. ``success`` then ``after`` callbacks when a state was reached
4. ``error`` callbacks (with the exception appended to the arguments) when
   anything above raised; without ``error`` callbacks the exception propagates

When no transition applies, whiny machines raise ``InvalidTransitionError``
and quiet ones return ``None``.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..config import StatefireConfig
from ..exceptions import DefinitionError, InvalidTransitionError, UnknownEventError
from .event import Event
from .subject import State

logger = logging.getLogger(__name__)


class StateMachine:
    """A named collection of events sharing one configuration."""

    def __init__(
        self,
        name: str,
        events: Iterable[Event] = (),
        *,
        initial_state: Optional[State] = None,
        config: Optional[StatefireConfig] = None,
    ) -> None:
        self.name = name
        self.initial_state = initial_state
        self.config = config or StatefireConfig()
        self._events: Dict[str, Event] = {}
        for event in events:
            if event.name in self._events:
                raise DefinitionError(
                    f"Event '{event.name}' defined twice in machine '{name}'",
                    context={"machine": name, "event": event.name},
                )
            self._events[event.name] = event

    @property
    def events(self) -> Dict[str, Event]:
        return dict(self._events)

    def event(self, name: str) -> Event:
        try:
            return self._events[name]
        except KeyError:
            raise UnknownEventError(
                f"Machine '{self.name}' has no event '{name}'",
                context={"machine": self.name, "event": name},
            ) from None

    def may_fire(self, subject: Any, name: str, to_state: Optional[State] = None, *args: Any) -> bool:
        return self.event(name).may_fire(subject, to_state, *args)

    def fire(self, subject: Any, name: str, *args: Any) -> Optional[State]:
        event = self.event(name)
        from_state = subject.current_state()

        try:
            event.fire_callbacks("before", subject, *args)
            new_state = event.fire(subject, *args)
            if new_state is not None:
                event.fire_callbacks("success", subject, *args)
                event.fire_callbacks("after", subject, *args)
                logger.info("%s: %s %r -> %r", self.name, name, from_state, new_state)
                return new_state
        except Exception as exc:
            if event.fire_callbacks("error", subject, *args, exc):
                logger.warning("%s: %s failed from %r: %s", self.name, name, from_state, exc)
                return None
            raise

        return self._failed(name, from_state)

    def _failed(self, name: str, from_state: State) -> None:
        if self.config.whiny_transitions:
            raise InvalidTransitionError(
                f"Event '{name}' cannot transition from {from_state!r}",
                event=name,
                from_state=from_state,
                context={"machine": self.name},
            )
        logger.debug("%s: %s not applicable from %r", self.name, name, from_state)
        return None

    def events_for_state(self, state: State) -> List[str]:
        return [
            name for name, event in self._events.items() if event.transitions_from_state_exists(state)
        ]

    def permissible_events(self, subject: Any) -> List[str]:
        return [name for name, event in self._events.items() if event.may_fire(subject)]

    def states(self) -> List[State]:
        seen: set = set()
        if self.initial_state is not None:
            seen.add(self.initial_state)
        for event in self._events.values():
            for transition in event.transitions:
                if transition.has_origin:
                    seen.add(transition.origin)
                seen.update(transition.targets)
        return sorted(seen, key=str)


__all__ = ["StateMachine"]
