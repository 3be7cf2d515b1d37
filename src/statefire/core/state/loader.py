"""Build state machines from YAML definitions.

Document shape::

    name: article
    domain: article          # optional, operation lookup domain
    initial: draft           # optional
    whiny_transitions: true  # optional, overrides the loaded config
    events:
      publish:
        before: log_attempt
        transitions:
          - from: [draft, review]
            to: published
            guard: is_ready
            on_transition: stamp

Guards and callbacks are operation names (or lists of them) resolved against
an ``OperationRegistry`` while loading. Only the document's shape is
validated; reachability and determinism are not.
"""
from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from ..config import StatefireConfig
from ..exceptions import SchemaValidationError
from ..schemas.validation import validate_payload
from ..utils.yaml_io import read_yaml
from .builder import EventBuilder
from .event import CALLBACK_GROUPS
from .machine import StateMachine
from .registries import OperationRegistry

logger = logging.getLogger(__name__)

MACHINE_SCHEMA = "machine"


def _read_definition(source: Union[str, Path, Mapping[str, Any]]) -> Mapping[str, Any]:
    if isinstance(source, Mapping):
        return source
    data = read_yaml(Path(source), default=None, raise_on_error=True)
    if not isinstance(data, Mapping):
        raise SchemaValidationError(
            f"Machine definition {source} must contain a YAML mapping",
            context={"path": str(source)},
        )
    return data


def load_machine(
    source: Union[str, Path, Mapping[str, Any]],
    *,
    operations: Optional[OperationRegistry] = None,
    config: Optional[StatefireConfig] = None,
) -> StateMachine:
    """Load, validate and build a ``StateMachine``.

    Raises:
        SchemaValidationError: If the document does not match the schema.
        UnknownOperationError: If a guard or callback names an unregistered operation.
    """
    definition = _read_definition(source)
    validate_payload(dict(definition), MACHINE_SCHEMA)

    name = str(definition["name"])
    domain = definition.get("domain")
    cfg = config or StatefireConfig()
    if "whiny_transitions" in definition:
        cfg = dataclasses.replace(cfg, whiny_transitions=bool(definition["whiny_transitions"]))

    events = []
    for event_name, event_def in (definition.get("events") or {}).items():
        options = {g: event_def[g] for g in CALLBACK_GROUPS if g in event_def}
        builder = EventBuilder(str(event_name), options, operations, domain=domain)
        for trans_def in event_def.get("transitions") or []:
            builder.transition(trans_def)
        events.append(builder.build())

    logger.debug("loaded machine %s with %d events", name, len(events))
    return StateMachine(name, events, initial_state=definition.get("initial"), config=cfg)


__all__ = ["load_machine", "MACHINE_SCHEMA"]
