"""Domain-aware operation table for named guards and callbacks.

Named operations are registered once, optionally per domain (one domain per
machine, typically), and resolved to function references while events are
being defined. Lookups fall back from the domain-specific entry to the
shared one.

Example usage:
    registry.register("stamp", stamp_fn)
    registry.register("notify", notify_article, domain="article")

    registry.get("notify", domain="article")  # notify_article
    registry.get("stamp", domain="article")   # falls back to stamp_fn
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from ..exceptions import UnknownOperationError

Operation = Callable[..., Any]


class OperationRegistry:
    """Registry of operations keyed by name, with domain fallback.

    Operations are called as ``fn(subject, *args)``.

    Attributes:
        SHARED_DOMAIN: Constant for operations that apply to all domains
    """

    SHARED_DOMAIN = "shared"

    def __init__(self) -> None:
        self._handlers: Dict[str, Operation] = {}

    def _make_key(self, name: str, domain: str = SHARED_DOMAIN) -> str:
        if domain == self.SHARED_DOMAIN:
            return name
        return f"{domain}:{name}"

    def register(self, name: str, handler: Operation, domain: str = SHARED_DOMAIN) -> None:
        """Register an operation. Overwrites if already registered."""
        if not callable(handler):
            raise TypeError("handler must be callable")
        self._handlers[self._make_key(name, domain)] = handler

    def add(self, name: str, handler: Operation, domain: str = SHARED_DOMAIN) -> None:
        """Add an operation (alias for register)."""
        self.register(name, handler, domain)

    def get(self, name: str, domain: str = SHARED_DOMAIN) -> Optional[Operation]:
        """Get an operation by name, with domain fallback."""
        if domain != self.SHARED_DOMAIN:
            key = self._make_key(name, domain)
            if key in self._handlers:
                return self._handlers[key]
        return self._handlers.get(name)

    def has(self, name: str, domain: str = SHARED_DOMAIN) -> bool:
        return self.get(name, domain) is not None

    def resolve(self, name: str, domain: Optional[str] = None) -> Operation:
        """Return the operation registered under ``name``.

        Raises:
            UnknownOperationError: If neither the domain nor the shared table has it.
        """
        dom = domain or self.SHARED_DOMAIN
        handler = self.get(name, dom)
        if handler is None:
            raise UnknownOperationError(
                f"Unknown operation: {name} (domain: {dom})",
                context={"operation": name, "domain": dom},
            )
        return handler

    def list_handlers(self, domain: Optional[str] = None) -> Dict[str, Operation]:
        """List all operations, optionally filtered by domain."""
        if domain is None:
            return dict(self._handlers)

        result: Dict[str, Operation] = {}
        prefix = f"{domain}:"
        for key, handler in self._handlers.items():
            if key.startswith(prefix):
                result[key[len(prefix):]] = handler
            elif ":" not in key and key not in result:
                result[key] = handler
        return result

    def reset(self) -> None:
        """Clear all operations."""
        self._handlers.clear()

    def from_subject_methods(
        self, subject_type: type, *names: str, domain: str = SHARED_DOMAIN
    ) -> "OperationRegistry":
        """Register methods that ``subject_type`` explicitly exposes.

        The attribute is looked up once, here, so firing never does a
        string-to-method lookup on the subject.
        """
        for name in names:
            method = getattr(subject_type, name, None)
            if method is None or not callable(method):
                raise UnknownOperationError(
                    f"{subject_type.__name__} does not expose operation '{name}'",
                    context={"operation": name, "subject_type": subject_type.__name__},
                )
            self.register(name, method, domain)
        return self


# Global registry instance
registry = OperationRegistry()


def register_operation(name: str, domain: str = OperationRegistry.SHARED_DOMAIN):
    """Decorator to register an operation in the global registry."""

    def decorator(fn):
        registry.register(name, fn, domain)
        return fn

    return decorator


__all__ = [
    "Operation",
    "OperationRegistry",
    "registry",
    "register_operation",
]
