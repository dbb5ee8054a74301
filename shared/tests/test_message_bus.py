"""Tests for the message bus and the unit of work."""

from dataclasses import dataclass
from uuid import uuid4

import pytest

from shared.application.message_bus import MessageBus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.base import Aggregate, DomainEvent


@dataclass(kw_only=True)
class SomethingHappened(DomainEvent):
    note: str = ""


@dataclass(kw_only=True, eq=False)
class Thing(Aggregate):
    label: str = ""


def test_bus_calls_every_handler_once():
    bus = MessageBus()
    seen = []

    def first(event):
        seen.append(("first", event.note))

    def second(event):
        seen.append(("second", event.note))

    bus.register_event_handler(SomethingHappened, first)
    bus.register_event_handler(SomethingHappened, second)
    bus.register_event_handler(SomethingHappened, first)

    bus.publish_events([SomethingHappened(note="hello")])

    assert seen == [("first", "hello"), ("second", "hello")]
    assert bus.handlers_for(SomethingHappened) == [first, second]


def test_failing_handler_does_not_stop_the_others():
    bus = MessageBus()
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    def working(event):
        seen.append(event.event_id)

    bus.register_event_handler(SomethingHappened, broken)
    bus.register_event_handler(SomethingHappened, working)

    event = SomethingHappened()
    bus.publish_events([event])

    assert seen == [event.event_id]


@pytest.mark.django_db
def test_events_are_published_after_commit(django_capture_on_commit_callbacks):
    bus = MessageBus()
    seen = []
    bus.register_event_handler(SomethingHappened, lambda event: seen.append(event.note))

    thing = Thing(label="x")
    thing.add_event(SomethingHappened(aggregate_id=thing.id, note="committed"))

    with django_capture_on_commit_callbacks(execute=True):
        with DjangoUnitOfWork(bus=bus) as uow:
            uow.collect_events(thing)
            assert seen == []

    assert seen == ["committed"]
    assert thing.events == []


@pytest.mark.django_db
def test_events_are_discarded_on_rollback(django_capture_on_commit_callbacks):
    bus = MessageBus()
    seen = []
    bus.register_event_handler(SomethingHappened, lambda event: seen.append(event.note))

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(ValueError):
            with DjangoUnitOfWork(bus=bus) as uow:
                uow.add_event(SomethingHappened(aggregate_id=uuid4(), note="lost"))
                raise ValueError("abort")

    assert callbacks == []
    assert seen == []
