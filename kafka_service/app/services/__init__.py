from .topic_service import TopicService

__all__ = ["TopicService"]
