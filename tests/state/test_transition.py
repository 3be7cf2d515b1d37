import dataclasses

import pytest

from statefire.core.exceptions import DefinitionError
from statefire.core.state import InlineClosure, Transition

from helpers.subjects import Document


def test_targets_normalized_to_ordered_tuple() -> None:
    t = Transition("draft", ["approved", "rejected", "approved"])

    assert t.targets == ("approved", "rejected")
    assert t.default_target == "approved"
    assert Transition("draft", "published").targets == ("published",)


@pytest.mark.parametrize("to", [None, [], ()])
def test_transition_requires_a_target(to) -> None:
    with pytest.raises(DefinitionError):
        Transition("draft", to)


def test_transition_is_immutable() -> None:
    t = Transition("draft", "published")
    with pytest.raises(dataclasses.FrozenInstanceError):
        t.origin = "archived"  # type: ignore[misc]


def test_origin_and_target_queries() -> None:
    t = Transition("draft", ["published", "archived"])

    assert t.has_origin
    assert t.matches_origin("draft")
    assert not t.matches_origin("published")
    assert t.leads_to("archived")
    assert not t.leads_to("draft")
    assert not Transition(None, "published").has_origin


def test_perform_without_guard_passes() -> None:
    assert Transition("draft", "published").perform(Document("draft")) is True


def test_perform_passes_args_to_guard() -> None:
    seen = []

    def guard(subject, *args):
        seen.append(args)
        return args[0] == "ok"

    t = Transition("draft", "published", guard=InlineClosure(guard))
    doc = Document("draft")

    assert t.perform(doc, "ok") is True
    assert t.perform(doc, "no") is False
    assert seen == [("ok",), ("no",)]
    assert doc.history == []


def test_execute_runs_callbacks_before_adopting_state() -> None:
    order = []
    doc = Document("draft")
    t = Transition(
        "draft",
        "published",
        callbacks=InlineClosure(lambda subject, *args: order.append(("cb", subject.state, args))),
    )

    assert t.execute(doc, "published", 7) == "published"
    assert order == [("cb", "draft", (7,))]
    assert doc.state == "published"


def test_document_satisfies_subject_protocol() -> None:
    from statefire.core.state import Subject

    assert isinstance(Document("draft"), Subject)
    assert not isinstance(object(), Subject)
