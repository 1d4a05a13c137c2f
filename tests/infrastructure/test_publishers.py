"""Tests for the event sinks."""

import json
import threading

from ims.application.event_publisher import EventPublisher
from ims.infrastructure.messaging.publishers import (
    BackgroundEventPublisher,
    JsonLinesEventPublisher,
    NullEventPublisher,
)
from tests.fakes import BrokenEventPublisher, FakeEventPublisher


class TestJsonLinesEventPublisher:

    def test_appends_one_record_per_event(self, tmp_path):
        path = tmp_path / "out" / "events.jsonl"
        publisher = JsonLinesEventPublisher(path)

        publisher.publish("orders.created", {"order_id": "a"})
        publisher.publish("orders.created", {"order_id": "b"})

        records = [json.loads(line) for line in path.read_text().splitlines()]
        assert [r["payload"]["order_id"] for r in records] == ["a", "b"]
        assert all(r["topic"] == "orders.created" for r in records)
        assert all("published_at" in r for r in records)

    def test_unwritable_sink_swallowed(self, tmp_path):
        # a directory where the file should be
        path = tmp_path / "events.jsonl"
        path.mkdir()

        JsonLinesEventPublisher(path).publish("orders.created", {"order_id": "a"})


class TestNullEventPublisher:

    def test_publish_is_a_no_op(self):
        NullEventPublisher().publish("orders.created", {})


class _BlockingSink(EventPublisher):

    def __init__(self) -> None:
        self.release = threading.Event()
        self.received = []

    def publish(self, topic, payload):
        self.release.wait(5)
        self.received.append((topic, payload))


class TestBackgroundEventPublisher:

    def test_delivers_to_sink(self):
        sink = FakeEventPublisher()
        publisher = BackgroundEventPublisher(sink)

        publisher.publish("orders.created", {"order_id": "a"})
        publisher.close()

        assert sink.published == [("orders.created", {"order_id": "a"})]

    def test_does_not_wait_for_slow_sink(self):
        sink = _BlockingSink()
        publisher = BackgroundEventPublisher(sink)

        publisher.publish("orders.created", {"order_id": "a"})
        assert sink.received == []

        sink.release.set()
        publisher.close()
        assert sink.received == [("orders.created", {"order_id": "a"})]

    def test_sink_failure_swallowed(self):
        publisher = BackgroundEventPublisher(BrokenEventPublisher())
        publisher.publish("orders.created", {"order_id": "a"})
        publisher.close()

    def test_full_queue_drops_event(self):
        sink = _BlockingSink()
        publisher = BackgroundEventPublisher(sink, max_pending=1)

        for i in range(5):
            publisher.publish("orders.created", {"n": i})

        sink.release.set()
        publisher.close()
        assert 1 <= len(sink.received) < 5

    def test_publish_after_close_is_dropped(self):
        sink = FakeEventPublisher()
        publisher = BackgroundEventPublisher(sink)
        publisher.close()

        publisher.publish("orders.created", {"order_id": "late"})

        assert sink.published == []

    def test_close_twice_closes_sink_once(self):
        sink = _CountingSink()
        publisher = BackgroundEventPublisher(sink)

        publisher.close()
        publisher.close()

        assert sink.closed == 1


class _CountingSink(EventPublisher):

    def __init__(self) -> None:
        self.closed = 0

    def publish(self, topic, payload):
        pass

    def close(self):
        self.closed += 1
