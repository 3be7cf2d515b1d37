import pytest

from statefire.core.config import StatefireConfig
from statefire.core.exceptions import DefinitionError, InvalidTransitionError, UnknownEventError
from statefire.core.state import EventBuilder, StateMachine, define_event

from helpers.subjects import Document


def _article_machine(recorder, *, whiny: bool = True) -> StateMachine:
    publish = EventBuilder("publish")
    publish.transitions(from_=["draft", "review"], to="published", guard=lambda s, *a: s.ready)
    publish.before(recorder.op("before_a"))
    publish.before(recorder.op("before_b"))
    publish.success(recorder.op("success"))
    publish.after(recorder.op("after"))

    archive = define_event("archive", lambda e: e.transitions(from_="published", to="archived"))
    return StateMachine(
        "article",
        [publish.build(), archive],
        initial_state="draft",
        config=StatefireConfig(whiny_transitions=whiny),
    )


def test_real_fire_runs_groups_in_order(recorder) -> None:
    machine = _article_machine(recorder)
    doc = Document("draft")

    assert machine.fire(doc, "publish", "editor") == "published"
    assert recorder.calls == [
        ("before_a", ("editor",)),
        ("before_b", ("editor",)),
        ("success", ("editor",)),
        ("after", ("editor",)),
    ]


def test_before_groups_run_on_every_fire(recorder) -> None:
    machine = _article_machine(recorder)

    machine.fire(Document("draft"), "publish")
    machine.fire(Document("review"), "publish")
    assert recorder.labels.count("before_a") == 2
    assert recorder.labels.count("before_b") == 2


def test_may_fire_runs_no_groups(recorder) -> None:
    machine = _article_machine(recorder)
    doc = Document("draft")

    assert machine.may_fire(doc, "publish") is True
    assert machine.may_fire(doc, "archive") is False
    assert recorder.calls == []
    assert doc.state == "draft"


def test_whiny_machine_raises_on_negative_result(recorder) -> None:
    machine = _article_machine(recorder)
    doc = Document("draft", ready=False)

    with pytest.raises(InvalidTransitionError) as excinfo:
        machine.fire(doc, "publish")
    assert excinfo.value.event == "publish"
    assert excinfo.value.from_state == "draft"
    assert excinfo.value.to_json_error()["context"]["machine"] == "article"
    assert "success" not in recorder.labels
    assert doc.state == "draft"


def test_quiet_machine_returns_none(recorder) -> None:
    machine = _article_machine(recorder, whiny=False)
    doc = Document("archived")

    assert machine.fire(doc, "publish") is None
    assert recorder.labels == ["before_a", "before_b"]


def test_error_group_handles_callback_failures() -> None:
    handled = []

    def explode(subject, *args):
        raise RuntimeError("persist failed")

    builder = EventBuilder("publish")
    builder.transitions(from_="draft", to="published", on_transition=explode)
    builder.error(lambda subject, *args: handled.append(args[-1]))
    machine = StateMachine("article", [builder.build()])

    assert machine.fire(Document("draft"), "publish") is None
    assert len(handled) == 1
    assert isinstance(handled[0], RuntimeError)


def test_failures_propagate_without_error_group() -> None:
    def explode(subject, *args):
        raise RuntimeError("persist failed")

    event = define_event("publish", lambda e: e.transitions(from_="draft", to="published", on_transition=explode))
    machine = StateMachine("article", [event])

    with pytest.raises(RuntimeError, match="persist failed"):
        machine.fire(Document("draft"), "publish")


def test_invalid_transition_is_not_routed_to_error_group() -> None:
    handled = []
    builder = EventBuilder("publish")
    builder.transitions(from_="draft", to="published")
    builder.error(lambda subject, *args: handled.append(args))
    machine = StateMachine("article", [builder.build()])

    with pytest.raises(InvalidTransitionError):
        machine.fire(Document("archived"), "publish")
    assert handled == []


def test_unknown_event(recorder) -> None:
    machine = _article_machine(recorder)
    with pytest.raises(UnknownEventError, match="no event 'delete'"):
        machine.fire(Document("draft"), "delete")


def test_duplicate_event_names_rejected() -> None:
    a = define_event("publish", lambda e: e.transitions(from_="draft", to="published"))
    b = define_event("publish", lambda e: e.transitions(from_="review", to="published"))
    with pytest.raises(DefinitionError):
        StateMachine("article", [a, b])


def test_introspection(recorder) -> None:
    machine = _article_machine(recorder)

    assert machine.events_for_state("draft") == ["publish"]
    assert machine.events_for_state("published") == ["archive"]
    assert machine.permissible_events(Document("review")) == ["publish"]
    assert machine.permissible_events(Document("review", ready=False)) == []
    assert machine.states() == ["archived", "draft", "published", "review"]
    assert set(machine.events) == {"publish", "archive"}
    assert machine.event("archive") == "archive"
