"""
Unit tests for NotificationDispatcher
"""

import asyncio
import logging

import pytest

from src.app.services.notification_dispatcher import NotificationDispatcher
from src.app.services.notifier import INotifier
from tests.fixtures.notifiers import RecordingNotifier


class SlowNotifier(INotifier):
    def __init__(self, delay: float):
        self.delay = delay
        self.finished = 0

    async def send(self, destination: str, message: str) -> None:
        await asyncio.sleep(self.delay)
        self.finished += 1


@pytest.mark.asyncio
async def test_dispatch_delivers_in_background(dispatcher, notifier):
    task = dispatcher.dispatch("user@example.com", "hello")
    assert dispatcher.pending == 1

    await task

    assert notifier.sent == [("user@example.com", "hello")]
    assert dispatcher.pending == 0


@pytest.mark.asyncio
async def test_failed_delivery_is_logged_not_raised(caplog):
    dispatcher = NotificationDispatcher(RecordingNotifier(fail=True))

    with caplog.at_level(logging.ERROR):
        await dispatcher.dispatch("user@example.com", "hello")

    assert "Failed to send notification" in caplog.text


@pytest.mark.asyncio
async def test_drain_waits_for_outstanding_tasks():
    notifier = SlowNotifier(delay=0.05)
    dispatcher = NotificationDispatcher(notifier)
    dispatcher.dispatch("a@example.com", "one")
    dispatcher.dispatch("b@example.com", "two")

    cancelled = await dispatcher.drain(timeout=5)

    assert cancelled == 0
    assert notifier.finished == 2
    assert dispatcher.pending == 0


@pytest.mark.asyncio
async def test_drain_is_bounded():
    notifier = SlowNotifier(delay=10)
    dispatcher = NotificationDispatcher(notifier)
    dispatcher.dispatch("a@example.com", "one")

    cancelled = await dispatcher.drain(timeout=0.05)

    assert cancelled == 1
    assert notifier.finished == 0
    assert dispatcher.pending == 0


@pytest.mark.asyncio
async def test_drain_with_nothing_pending(dispatcher):
    assert await dispatcher.drain(timeout=1) == 0
