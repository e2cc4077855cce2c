from __future__ import annotations

import asyncio
import json
import threading

from socorro.services.realtime import INCIDENT_CHANGED, Broadcaster, RealtimeEvent
from socorro.services.realtime.api import event_stream


def test_every_connected_observer_receives_the_event() -> None:
    async def scenario():
        broadcaster = Broadcaster()
        first = broadcaster.subscribe()
        second = broadcaster.subscribe()

        broadcaster.publish(INCIDENT_CHANGED, {"action": "create", "id": "abc"})

        return await asyncio.wait_for(
            asyncio.gather(first.next_event(), second.next_event()), timeout=1
        )

    received = asyncio.run(scenario())

    expected = RealtimeEvent(event=INCIDENT_CHANGED, data={"action": "create", "id": "abc"})
    assert received == [expected, expected]
    assert expected.to_mapping() == {
        "event": "incident_changed",
        "data": {"action": "create", "id": "abc"},
    }


def test_publish_without_observers_is_a_no_op() -> None:
    broadcaster = Broadcaster()

    broadcaster.publish(INCIDENT_CHANGED, {"action": "delete"})

    assert broadcaster.observer_count == 0


def test_late_subscriber_does_not_receive_past_events() -> None:
    async def scenario():
        broadcaster = Broadcaster()
        broadcaster.publish(INCIDENT_CHANGED, {"n": 1})
        late = broadcaster.subscribe()
        broadcaster.publish(INCIDENT_CHANGED, {"n": 2})
        return await asyncio.wait_for(late.next_event(), timeout=1)

    event = asyncio.run(scenario())

    assert event.data == {"n": 2}


def test_closed_subscription_stops_receiving() -> None:
    async def scenario():
        broadcaster = Broadcaster()
        subscription = broadcaster.subscribe()
        subscription.close()
        broadcaster.publish(INCIDENT_CHANGED, {"n": 1})
        await asyncio.sleep(0)
        return broadcaster.observer_count, subscription._queue.qsize()

    assert asyncio.run(scenario()) == (0, 0)


def test_full_queue_drops_events_instead_of_blocking() -> None:
    async def scenario():
        broadcaster = Broadcaster(max_queue_size=2)
        subscription = broadcaster.subscribe()
        for number in range(5):
            broadcaster.publish(INCIDENT_CHANGED, {"n": number})
        await asyncio.sleep(0)
        return [
            (await subscription.next_event()).data["n"],
            (await subscription.next_event()).data["n"],
            subscription._queue.qsize(),
        ]

    assert asyncio.run(scenario()) == [0, 1, 0]


def test_publish_from_worker_thread_reaches_loop_observer() -> None:
    async def scenario():
        broadcaster = Broadcaster()
        subscription = broadcaster.subscribe()
        worker = threading.Thread(
            target=broadcaster.publish, args=(INCIDENT_CHANGED, {"origin": "thread"})
        )
        worker.start()
        event = await asyncio.wait_for(subscription.next_event(), timeout=1)
        worker.join()
        return event

    assert asyncio.run(scenario()).data == {"origin": "thread"}


def test_observer_with_closed_loop_is_removed_on_publish() -> None:
    broadcaster = Broadcaster()

    async def subscribe():
        return broadcaster.subscribe()

    asyncio.run(subscribe())
    assert broadcaster.observer_count == 1

    broadcaster.publish(INCIDENT_CHANGED, {"n": 1})

    assert broadcaster.observer_count == 0


class _FakeRequest:
    def __init__(self, checks_before_disconnect: int) -> None:
        self._remaining = checks_before_disconnect

    async def is_disconnected(self) -> bool:
        self._remaining -= 1
        return self._remaining < 0


def test_event_stream_yields_sse_messages_until_disconnect() -> None:
    async def scenario():
        broadcaster = Broadcaster()
        subscription = broadcaster.subscribe()
        broadcaster.publish(INCIDENT_CHANGED, {"action": "delete", "id": "abc"})
        messages = [
            message
            async for message in event_stream(
                _FakeRequest(checks_before_disconnect=2), subscription, poll_seconds=0.01
            )
        ]
        return messages, broadcaster.observer_count

    messages, observers = asyncio.run(scenario())

    assert messages == [
        {"event": "incident_changed", "data": json.dumps({"action": "delete", "id": "abc"})}
    ]
    assert observers == 0
