"""Tests for the unit of work and message bus."""

from __future__ import annotations

from dataclasses import dataclass
from unittest import mock

import pytest
from django.test import TestCase

from shared.application.message_bus import MessageBus, message_bus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.base import DomainEvent


@dataclass
class SomethingHappened(DomainEvent):
    detail: str = ''


@dataclass
class DoSomething:
    value: int


class UnitOfWorkTests(TestCase):
    def test_events_publish_after_commit(self) -> None:
        with mock.patch.object(message_bus, "publish_events") as publish:
            with self.captureOnCommitCallbacks(execute=True):
                with DjangoUnitOfWork() as uow:
                    uow.record(SomethingHappened(detail="ok"))
                    self.assertEqual(len(uow.pending_events), 1)
                publish.assert_not_called()

        publish.assert_called_once()
        self.assertEqual(publish.call_args.args[0][0].detail, "ok")

    def test_rollback_discards_events(self) -> None:
        with mock.patch.object(message_bus, "publish_events") as publish:
            with self.captureOnCommitCallbacks(execute=True) as callbacks:
                with self.assertRaises(RuntimeError):
                    with DjangoUnitOfWork() as uow:
                        uow.record(SomethingHappened())
                        raise RuntimeError("boom")

        self.assertEqual(callbacks, [])
        publish.assert_not_called()


def test_command_has_single_handler():
    bus = MessageBus()
    bus.register_command_handler(DoSomething, lambda command: command.value * 2)

    assert bus.handle_command(DoSomething(21)) == 42
    with pytest.raises(ValueError):
        bus.register_command_handler(DoSomething, lambda command: None)


def test_unregistered_command_raises():
    with pytest.raises(ValueError):
        MessageBus().handle_command(DoSomething(1))


def test_failing_event_handler_does_not_stop_others():
    bus = MessageBus()
    seen = []

    def broken(event):
        raise RuntimeError("handler failed")

    bus.register_event_handler(SomethingHappened, broken)
    bus.register_event_handler(SomethingHappened, seen.append)
    bus.register_event_handler(SomethingHappened, seen.append)

    event = SomethingHappened(detail="x")
    bus.publish_events([event])

    assert seen == [event]
    assert event.to_dict()["event_type"] == "SomethingHappened"
