"""Tests for LiveFeed."""

import asyncio

from contactbook.application import LiveFeed


def test_subscribe_receives_current_then_published_values() -> None:
    feed = LiveFeed([])
    seen = []
    feed.subscribe(seen.append)
    feed.publish([1])
    feed.publish([1, 2])
    assert seen == [[], [1], [1, 2]]
    assert feed.value == [1, 2]
    assert feed.version == 2


def test_closed_subscription_stops_notifications() -> None:
    feed = LiveFeed(0)
    seen = []
    subscription = feed.subscribe(seen.append)
    subscription.close()
    feed.publish(1)
    assert seen == [0]
    assert feed.subscriber_count == 0


def test_failing_subscriber_does_not_block_others() -> None:
    feed = LiveFeed(0)
    seen = []

    def broken(value):
        if value:
            raise RuntimeError("boom")

    feed.subscribe(broken)
    feed.subscribe(seen.append)
    feed.publish(5)
    assert seen == [0, 5]


async def test_updates_yields_current_then_each_publish() -> None:
    feed = LiveFeed("a")
    received = []

    async def consume():
        async for value in feed.updates():
            received.append(value)
            if value == "c":
                break

    task = asyncio.create_task(consume())
    await asyncio.sleep(0)
    feed.publish("b")
    feed.publish("c")
    await asyncio.wait_for(task, timeout=1)
    assert received == ["a", "b", "c"]
