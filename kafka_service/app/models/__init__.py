from .kafka_event import EventType, KafkaEvent, parse_event_type

__all__ = ["EventType", "KafkaEvent", "parse_event_type"]
