from __future__ import annotations

from typing import Any, Dict, Mapping


class StatefireError(Exception):
    """Base exception for statefire."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class DefinitionError(StatefireError, ValueError):
    """Raised when an event or machine definition is malformed."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        StatefireError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class UnknownOperationError(DefinitionError):
    """Raised when a named operation is not present in the operation table."""


class UnknownEventError(StatefireError, KeyError):
    """Raised when a machine is asked for an event it does not define."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        StatefireError.__init__(self, message, context=context)
        KeyError.__init__(self, message)

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class InvalidTransitionError(StatefireError, RuntimeError):
    """Raised by whiny machines when an event cannot fire from the current state."""

    def __init__(
        self,
        message: str,
        *,
        event: str | None = None,
        from_state: Any = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if event is not None:
            ctx["event"] = event
        if from_state is not None:
            ctx["from"] = from_state
        StatefireError.__init__(self, message, context=ctx)
        RuntimeError.__init__(self, message)
        self.event = event
        self.from_state = from_state


class SchemaValidationError(StatefireError, ValueError):
    """Raised when a definition or config payload fails schema validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        StatefireError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "StatefireError",
    "DefinitionError",
    "UnknownOperationError",
    "UnknownEventError",
    "InvalidTransitionError",
    "SchemaValidationError",
]
