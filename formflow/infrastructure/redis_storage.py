from typing import Optional

import redis
import structlog
from pydantic import ValidationError

from formflow.core.config import FormFlowSettings, settings as default_settings
from formflow.core.exceptions import StorageError
from formflow.domain.context import FlowContext
from formflow.infrastructure.storage import FlowStorage

logger = structlog.get_logger(__name__)


class RedisFlowStorage(FlowStorage):
    def __init__(
        self,
        client: redis.Redis,
        key_prefix: Optional[str] = None,
        ttl_seconds: Optional[int] = None,
    ):
        self.redis = client
        self.key_prefix = key_prefix or default_settings.storage_key_prefix
        self.ttl_seconds = ttl_seconds or default_settings.storage_ttl_seconds

    @classmethod
    def from_settings(cls, settings: Optional[FormFlowSettings] = None) -> "RedisFlowStorage":
        settings = settings or default_settings
        client = redis.from_url(settings.redis_url, decode_responses=True)
        return cls(
            client,
            key_prefix=settings.storage_key_prefix,
            ttl_seconds=settings.storage_ttl_seconds,
        )

    def key(self, flow_name: str, instance_id: str) -> str:
        return f"{self.key_prefix}:{instance_id}:{flow_name}"

    def load(self, flow_name: str, instance_id: str) -> Optional[FlowContext]:
        key = self.key(flow_name, instance_id)
        try:
            raw = self.redis.get(key)
        except redis.RedisError as e:
            logger.error("flow_storage_error", operation="load", key=key, error=str(e))
            raise StorageError(f"Failed to load flow context {key}", {"key": key}) from e

        if raw is None:
            return None

        try:
            return FlowContext.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("flow_context_corrupt", key=key, error=str(e))
            return None

    def save(self, context: FlowContext) -> None:
        key = self.key(context.flow_name, context.instance_id)
        try:
            self.redis.set(key, context.model_dump_json(), ex=self.ttl_seconds)
        except redis.RedisError as e:
            logger.error("flow_storage_error", operation="save", key=key, error=str(e))
            raise StorageError(f"Failed to save flow context {key}", {"key": key}) from e

        logger.debug(
            "flow_context_saved",
            key=key,
            current_step=context.current_step_number,
            ttl_seconds=self.ttl_seconds,
        )

    def delete(self, flow_name: str, instance_id: str) -> bool:
        key = self.key(flow_name, instance_id)
        try:
            return bool(self.redis.delete(key))
        except redis.RedisError as e:
            logger.error("flow_storage_error", operation="delete", key=key, error=str(e))
            raise StorageError(f"Failed to delete flow context {key}", {"key": key}) from e
