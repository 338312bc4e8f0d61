"""
Order event notifiers.

A notifier publishes a serialized order snapshot together with an event type
label. Publishing is best-effort: every notifier reports its outcome as a
PublishResult instead of raising, so callers can log the outcome and move on.

Backends:
- SnsNotifier      — AWS SNS via aiobotocore
- DisabledNotifier — no topic configured; every publish is skipped
"""
from __future__ import annotations

import asyncio
import enum
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

import structlog
from aiobotocore.config import AioConfig
from aiobotocore.session import get_session
from botocore.exceptions import BotoCoreError, ClientError

from shared.config import aws

logger = structlog.get_logger(__name__)


class PublishStatus(str, enum.Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    SKIPPED = "skipped"  # no channel configured


@dataclass
class PublishResult:
    """Outcome of a single publish attempt."""

    status: PublishStatus
    event_type: str
    message_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == PublishStatus.SUCCESS

    @classmethod
    def success(cls, event_type: str, message_id: Optional[str] = None) -> "PublishResult":
        return cls(PublishStatus.SUCCESS, event_type, message_id=message_id)

    @classmethod
    def failure(cls, event_type: str, error: str) -> "PublishResult":
        return cls(PublishStatus.FAILURE, event_type, error=error)

    @classmethod
    def skipped(cls, event_type: str, reason: str) -> "PublishResult":
        return cls(PublishStatus.SKIPPED, event_type, error=reason)


@runtime_checkable
class OrderEventNotifier(Protocol):
    async def publish(self, message: str, event_type: str) -> PublishResult:
        ...


class DisabledNotifier:
    """Used when no notification channel is configured."""

    async def publish(self, message: str, event_type: str) -> PublishResult:
        return PublishResult.skipped(event_type, "notification channel not configured")


class SnsNotifier:
    """
    Publishes order events to an SNS topic.

    The event type travels both as the message Subject and as an
    ``eventType`` message attribute so that subscriptions can filter on it.
    Each publish is bounded by ``timeout`` seconds on top of the client's
    own connect/read timeouts.
    """

    def __init__(
        self,
        topic_arn: str,
        *,
        timeout: float = 5.0,
        client_kwargs: Optional[dict[str, Any]] = None,
    ):
        self.topic_arn = topic_arn
        self.timeout = timeout
        self.client_kwargs = client_kwargs or {}

        self._client: Any = None
        self._client_ctx: Any = None

    async def initialize(self) -> None:
        if self._client is not None:
            return
        logger.info("sns_notifier_initializing", topic_arn=self.topic_arn,
                    region=self.client_kwargs.get("region_name"))
        config = AioConfig(
            connect_timeout=self.timeout,
            read_timeout=self.timeout,
            retries={"max_attempts": 1},
        )
        session = get_session()
        self._client_ctx = session.create_client("sns", config=config, **self.client_kwargs)
        self._client = await self._client_ctx.__aenter__()

    async def shutdown(self) -> None:
        if self._client_ctx is not None:
            await self._client_ctx.__aexit__(None, None, None)
        self._client = None
        self._client_ctx = None
        logger.info("sns_notifier_shutdown", topic_arn=self.topic_arn)

    async def publish(self, message: str, event_type: str) -> PublishResult:
        if self._client is None:
            return PublishResult.failure(event_type, "SNS client is not initialized")
        try:
            response = await asyncio.wait_for(
                self._client.publish(
                    TopicArn=self.topic_arn,
                    Message=message,
                    Subject=event_type,
                    MessageAttributes={
                        "eventType": {"DataType": "String", "StringValue": event_type},
                    },
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            return PublishResult.failure(event_type, f"publish timed out after {self.timeout}s")
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "Unknown")
            return PublishResult.failure(event_type, f"{code}: {e}")
        except BotoCoreError as e:
            return PublishResult.failure(event_type, str(e))
        return PublishResult.success(event_type, response.get("MessageId"))


def build_notifier() -> SnsNotifier | DisabledNotifier:
    """Build the notifier described by the environment."""
    if not aws.SNS_TOPIC_ARN:
        logger.warning("sns_topic_not_configured", detail="order events will not be published")
        return DisabledNotifier()
    return SnsNotifier(
        aws.SNS_TOPIC_ARN,
        timeout=aws.SNS_PUBLISH_TIMEOUT,
        client_kwargs=aws.client_kwargs(),
    )
