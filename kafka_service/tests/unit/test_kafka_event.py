import json

from kafka_service.app.models.kafka_event import EventType, KafkaEvent, parse_event_type


class TestEventType:
    def test_known_types(self):
        assert parse_event_type("CREATED") is EventType.CREATED
        assert parse_event_type("UPDATED") is EventType.UPDATED
        assert parse_event_type("DELETED") is EventType.DELETED

    def test_unknown_types_default_to_created(self):
        assert parse_event_type("UNKNOWN") is EventType.CREATED
        assert parse_event_type("deleted") is EventType.CREATED


class TestKafkaEvent:
    def test_generated_fields_and_json_shape(self):
        first = KafkaEvent(
            topic="product-events", partition=2, offset=9, key="4", value="{}",
            type=EventType.UPDATED,
        )
        second = KafkaEvent(
            topic="product-events", partition=2, offset=10, key="4", value="{}",
            type=EventType.UPDATED,
        )

        assert first.id != second.id
        body = json.loads(first.model_dump_json())
        assert set(body) == {
            "id", "topic", "partition", "offset", "key", "value", "timestamp", "type"
        }
        assert body["type"] == "UPDATED"
