"""
Consumer error handling: exponential backoff retries, then dead-lettering.

A record whose processing raises is retried in place. Once the backoff is
exhausted, or straight away for errors that retrying cannot fix, the
original record is published to ``<topic>.DLT`` with headers describing the
failure.
"""

import asyncio
from typing import Awaitable, Callable, Iterator, List, Optional, Tuple, Type

from aiokafka import AIOKafkaProducer  # type: ignore
from aiokafka.structs import ConsumerRecord  # type: ignore

from ..core.setting import get_settings
from ..utils.logging import setup_kafka_logging

logger = setup_kafka_logging("kafka_service.error_handler", get_settings().LOG_LEVEL)

DLT_EXCEPTION_FQCN = "kafka_dlt-exception-fqcn"
DLT_EXCEPTION_MESSAGE = "kafka_dlt-exception-message"
DLT_ORIGINAL_TOPIC = "kafka_dlt-original-topic"
DLT_ORIGINAL_PARTITION = "kafka_dlt-original-partition"
DLT_ORIGINAL_OFFSET = "kafka_dlt-original-offset"

RecordHandler = Callable[[ConsumerRecord], Awaitable[object]]


class NonRetryableError(Exception):
    """Processing failure that is dead-lettered without retrying"""


class ExponentialBackOff:
    """
    Retry intervals growing by ``multiplier`` up to ``max_interval_ms``.

    Intervals stop once their sum reaches ``max_elapsed_ms``; with no limit
    the sequence never ends.
    """

    def __init__(
        self,
        initial_interval_ms: int = 1000,
        multiplier: float = 2.0,
        max_interval_ms: int = 10000,
        max_elapsed_ms: Optional[int] = None,
    ):
        self.initial_interval_ms = initial_interval_ms
        self.multiplier = multiplier
        self.max_interval_ms = max_interval_ms
        self.max_elapsed_ms = max_elapsed_ms

    def intervals(self) -> Iterator[float]:
        """Yield successive waits in seconds"""
        interval = float(self.initial_interval_ms)
        elapsed = 0.0
        while self.max_elapsed_ms is None or elapsed < self.max_elapsed_ms:
            yield interval / 1000
            elapsed += interval
            interval = min(interval * self.multiplier, float(self.max_interval_ms))


class DeadLetterPublishingRecoverer:
    """Publishes failed records, unchanged, to the dead-letter topic"""

    def __init__(self, producer: AIOKafkaProducer, dlt_suffix: str = ".DLT"):
        self.producer = producer
        self.dlt_suffix = dlt_suffix

    def destination(self, record: ConsumerRecord) -> str:
        return f"{record.topic}{self.dlt_suffix}"

    @staticmethod
    def failure_headers(
        record: ConsumerRecord, exc: BaseException
    ) -> List[Tuple[str, bytes]]:
        headers = list(record.headers or [])
        headers.extend(
            [
                (
                    DLT_EXCEPTION_FQCN,
                    f"{type(exc).__module__}.{type(exc).__qualname__}".encode(),
                ),
                (DLT_EXCEPTION_MESSAGE, str(exc).encode()),
                (DLT_ORIGINAL_TOPIC, record.topic.encode()),
                (DLT_ORIGINAL_PARTITION, str(record.partition).encode()),
                (DLT_ORIGINAL_OFFSET, str(record.offset).encode()),
            ]
        )
        return headers

    async def recover(self, record: ConsumerRecord, exc: BaseException) -> None:
        topic = self.destination(record)
        key = record.key.encode() if isinstance(record.key, str) else record.key
        await self.producer.send_and_wait(
            topic,
            value=record.value,
            key=key,
            headers=self.failure_headers(record, exc),
        )
        logger.warning(
            "Record sent to dead-letter topic",
            extra={
                "dlt_topic": topic,
                "original_topic": record.topic,
                "partition": record.partition,
                "offset": record.offset,
                "error": str(exc),
            },
        )


class DefaultErrorHandler:
    """Runs a record handler under the retry and dead-letter policy"""

    def __init__(
        self,
        recoverer: DeadLetterPublishingRecoverer,
        backoff: ExponentialBackOff,
        not_retryable: Tuple[Type[BaseException], ...] = (NonRetryableError,),
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.recoverer = recoverer
        self.backoff = backoff
        self.not_retryable = not_retryable
        self._sleep = sleep

    async def process(self, record: ConsumerRecord, handler: RecordHandler) -> bool:
        """
        Returns True when the handler eventually succeeded, False when the
        record was dead-lettered.
        """
        intervals = self.backoff.intervals()
        attempt = 0
        while True:
            attempt += 1
            try:
                await handler(record)
                return True
            except Exception as e:
                if isinstance(e, self.not_retryable):
                    logger.error(
                        "Non-retryable error processing record",
                        extra=_record_context(record, attempt, e),
                    )
                    await self.recoverer.recover(record, e)
                    return False

                delay = next(intervals, None)
                if delay is None:
                    logger.error(
                        "Retries exhausted processing record",
                        extra=_record_context(record, attempt, e),
                    )
                    await self.recoverer.recover(record, e)
                    return False

                logger.warning(
                    f"Error processing record, retrying in {delay:.1f}s",
                    extra=_record_context(record, attempt, e),
                )
                await self._sleep(delay)


def _record_context(record: ConsumerRecord, attempt: int, exc: BaseException) -> dict:
    return {
        "topic": record.topic,
        "partition": record.partition,
        "offset": record.offset,
        "attempt": attempt,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }
