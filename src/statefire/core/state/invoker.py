"""Single dispatch point for guards, transition callbacks and event callback groups."""
from __future__ import annotations

import logging
from typing import Any, Iterator, Tuple

from .specs import InlineClosure, NamedOperation, SpecList

logger = logging.getLogger(__name__)


def _dispatch(spec: Any, subject: Any, args: Tuple[Any, ...]) -> Iterator[Tuple[bool, Any]]:
    """Run ``spec`` and yield ``(recognized, result)`` for every leaf called.

    List specs are walked in declaration order with no short-circuit.
    Unrecognized forms yield a single ``(False, None)`` and call nothing.
    """
    if isinstance(spec, NamedOperation):
        logger.debug("invoking operation %s", spec.name)
        yield True, spec.fn(subject, *args)
    elif isinstance(spec, InlineClosure):
        logger.debug("invoking closure %r", spec.fn)
        yield True, spec.fn(subject, *args)
    elif isinstance(spec, SpecList):
        for item in spec.items:
            yield from _dispatch(item, subject, args)
        # An empty list is still a recognized form.
        yield True, True
    else:
        yield False, None


def invoke(spec: Any, subject: Any, *args: Any) -> bool:
    """Invoke a callback spec.

    Returns:
        True when ``spec`` is a recognized, runnable form (named operation,
        inline closure or list); False for anything else, which is a no-op.
    """
    recognized = False
    # Drain the generator fully; every list element must run.
    for leaf_recognized, _ in _dispatch(spec, subject, args):
        recognized = recognized or leaf_recognized
    return recognized


def evaluate(spec: Any, subject: Any, *args: Any) -> bool:
    """Evaluate a guard spec.

    ``None`` and unrecognized forms pass. Named and inline guards pass when
    they return a truthy value. A list evaluates every element and passes
    only when all of them pass.
    """
    passed = True
    for recognized, result in _dispatch(spec, subject, args):
        if recognized and not result:
            passed = False
    return passed


__all__ = ["invoke", "evaluate"]
