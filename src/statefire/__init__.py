"""statefire - event-driven finite state machine resolution."""
from __future__ import annotations

from statefire.core.config import StatefireConfig, load_config
from statefire.core.exceptions import (
    DefinitionError,
    InvalidTransitionError,
    SchemaValidationError,
    StatefireError,
    UnknownEventError,
    UnknownOperationError,
)
from statefire.core.state import (
    Event,
    EventBuilder,
    InlineClosure,
    NamedOperation,
    OperationRegistry,
    SpecList,
    StateMachine,
    Subject,
    Transition,
    define_event,
    load_machine,
    register_operation,
)

__version__ = "0.1.0"

__all__ = [
    "DefinitionError",
    "Event",
    "EventBuilder",
    "InlineClosure",
    "InvalidTransitionError",
    "NamedOperation",
    "OperationRegistry",
    "SchemaValidationError",
    "SpecList",
    "StateMachine",
    "StatefireConfig",
    "StatefireError",
    "Subject",
    "Transition",
    "UnknownEventError",
    "UnknownOperationError",
    "define_event",
    "load_config",
    "load_machine",
    "register_operation",
]
