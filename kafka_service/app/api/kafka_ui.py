"""Kafka dashboard page and topic listing."""

from pathlib import Path
from typing import List

from aiokafka.errors import KafkaError  # type: ignore
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..core.setting import get_settings
from ..services.topic_service import TopicService
from ..utils.logging import setup_kafka_logging
from .dependencies import TopicServiceDep

logger = setup_kafka_logging("kafka_service.kafka_ui", get_settings().LOG_LEVEL)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(prefix="/kafka-ui")


@router.get("", response_class=HTMLResponse)
async def dashboard(request: Request, topic_service: TopicService = TopicServiceDep):
    try:
        topics = await topic_service.list_topics()
    except (KafkaError, OSError) as e:
        logger.error("Error loading Kafka dashboard", exc_info=True)
        return templates.TemplateResponse(
            request, "error.html", {"error": f"Failed to load Kafka topics: {e}"}
        )

    return templates.TemplateResponse(
        request,
        "kafka_dashboard.html",
        {"topics": topics, "events_path": get_settings().WEBSOCKET_EVENTS_PATH},
    )


@router.get("/topics")
async def get_topics(topic_service: TopicService = TopicServiceDep) -> List[str]:
    try:
        return await topic_service.list_topics()
    except (KafkaError, OSError):
        logger.error("Error getting Kafka topics", exc_info=True)
        return []
