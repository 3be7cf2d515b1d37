from .specs import (
    NamedOperation,
    InlineClosure,
    SpecList,
    Spec,
    coerce_spec,
    append_spec,
)
from .registries import OperationRegistry, registry as operation_registry, register_operation
from .invoker import invoke, evaluate
from .subject import State, Subject
from .transition import Transition
from .event import Event, CALLBACK_GROUPS
from .builder import EventBuilder, define_event
from .machine import StateMachine
from .loader import load_machine


__all__ = [
    # Specs
    "NamedOperation",
    "InlineClosure",
    "SpecList",
    "Spec",
    "coerce_spec",
    "append_spec",
    # Operation table
    "OperationRegistry",
    "operation_registry",
    "register_operation",
    # Dispatch
    "invoke",
    "evaluate",
    # Model
    "State",
    "Subject",
    "Transition",
    "Event",
    "CALLBACK_GROUPS",
    # Definition surface
    "EventBuilder",
    "define_event",
    "StateMachine",
    "load_machine",
]
