# remote_sdk/services/schema_service.py
import logging
from typing import Optional

from remote_sdk.clients.base import RemoteDataClient
from remote_sdk.exceptions import RemoteSDKError, display_message_for
from .state import LoadStatus, SchemaState, StateCallback

logger = logging.getLogger("remote_sdk.services.schema_service")


class SchemaService:
    """Загружает схему компании. Каждая загрузка заменяет схему целиком, кэша нет."""

    def __init__(self, client: RemoteDataClient, on_change: Optional[StateCallback[SchemaState]] = None):
        self.client = client
        self.on_change = on_change

    def _emit(self, state: SchemaState) -> SchemaState:
        if self.on_change is not None:
            self.on_change(state)
        return state

    async def fetch(self) -> SchemaState:
        self._emit(SchemaState(status=LoadStatus.LOADING))
        try:
            schema = await self.client.fetch_schema()
        except RemoteSDKError as e:
            logger.warning(f"Schema fetch from {self.client.base_url_str} failed: {e}")
            return self._emit(SchemaState(status=LoadStatus.FAILED, error=display_message_for(e)))
        logger.info(f"Schema loaded: {len(schema.tables)} table(s)")
        return self._emit(SchemaState(status=LoadStatus.LOADED, current=schema))
