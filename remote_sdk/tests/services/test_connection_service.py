# remote_sdk/tests/services/test_connection_service.py
from typing import List

import httpx
import pytest
from respx import MockRouter

from remote_sdk.clients.base import RemoteDataClient
from remote_sdk.services.connection_service import ACCESS_DENIED_MESSAGE, ConnectionService
from remote_sdk.services.state import ConnectionState, ConnectionStatus

pytestmark = pytest.mark.asyncio

HOST = "crm.example.com"
CHECK_PATH = "/api/remote/check-access"


@pytest.fixture
def states() -> List[ConnectionState]:
    return []


@pytest.fixture
def service(remote_client: RemoteDataClient, states: List[ConnectionState]) -> ConnectionService:
    return ConnectionService(remote_client, on_change=states.append)


async def test_connected(service: ConnectionService, states, respx_mock: MockRouter):
    respx_mock.get(host=HOST, path=CHECK_PATH).respond(200, json={"message": "ok"})

    result = await service.check()

    assert result.status is ConnectionStatus.CONNECTED
    assert [s.status for s in states] == [ConnectionStatus.CONNECTING, ConnectionStatus.CONNECTED]
    assert result.display_text == "Подключено"


async def test_access_denied(service: ConnectionService, states, respx_mock: MockRouter):
    respx_mock.get(host=HOST, path=CHECK_PATH).respond(403)

    result = await service.check()

    assert result.status is ConnectionStatus.FAILED
    assert result.message == ACCESS_DENIED_MESSAGE
    assert states[-1] == result


async def test_network_failure(service: ConnectionService, respx_mock: MockRouter):
    respx_mock.get(host=HOST, path=CHECK_PATH).mock(side_effect=httpx.ConnectError("refused"))

    result = await service.check()

    assert result.status is ConnectionStatus.FAILED
    assert result.message.startswith("Ошибка сети")


async def test_server_error_message(service: ConnectionService, respx_mock: MockRouter):
    respx_mock.get(host=HOST, path=CHECK_PATH).respond(503)

    result = await service.check()

    assert result.message == "Ошибка сервера (503)"
    assert result.display_text == "Ошибка: Ошибка сервера (503)"


async def test_recheck_goes_through_connecting_again(service: ConnectionService, states, respx_mock: MockRouter):
    route = respx_mock.get(host=HOST, path=CHECK_PATH)
    route.side_effect = [httpx.Response(401), httpx.Response(200, json={"message": "ok"})]

    await service.check()
    await service.check()

    assert [s.status for s in states] == [
        ConnectionStatus.CONNECTING,
        ConnectionStatus.FAILED,
        ConnectionStatus.CONNECTING,
        ConnectionStatus.CONNECTED,
    ]


def test_initial_state_is_unknown():
    assert ConnectionState().status is ConnectionStatus.UNKNOWN
    assert ConnectionState().display_text == "Не проверено"
