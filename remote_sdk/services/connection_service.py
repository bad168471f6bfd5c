# remote_sdk/services/connection_service.py
import logging
from typing import Optional

from remote_sdk.clients.base import RemoteDataClient
from remote_sdk.exceptions import RemoteSDKError, display_message_for
from .state import ConnectionState, StateCallback

logger = logging.getLogger("remote_sdk.services.connection_service")

ACCESS_DENIED_MESSAGE = "Неверный секретный ключ или доступ запрещен"


class ConnectionService:
    """Проверяет доступность компании и сообщает о смене состояния через on_change."""

    def __init__(self, client: RemoteDataClient, on_change: Optional[StateCallback[ConnectionState]] = None):
        self.client = client
        self.on_change = on_change

    def _emit(self, state: ConnectionState) -> ConnectionState:
        if self.on_change is not None:
            self.on_change(state)
        return state

    async def check(self) -> ConnectionState:
        self._emit(ConnectionState.connecting())
        try:
            accessible = await self.client.check_connection()
        except RemoteSDKError as e:
            logger.warning(f"Connection check for {self.client.base_url_str} failed: {e}")
            return self._emit(ConnectionState.failed(display_message_for(e)))
        if not accessible:
            return self._emit(ConnectionState.failed(ACCESS_DENIED_MESSAGE))
        logger.info(f"Connected to {self.client.base_url_str}")
        return self._emit(ConnectionState.connected())
