# remote_sdk/tests/conftest.py
import json
import logging
from typing import Any, AsyncGenerator, Dict

import httpx
import pytest
import pytest_asyncio

from remote_sdk.clients.base import RemoteDataClient
from remote_sdk.config import ClientSettings
from remote_sdk.schemas.schema import Schema, Table, parse_schema

logger = logging.getLogger("remote_sdk.tests.conftest")

SERVICE_URL_STR = "https://crm.example.com"
API_URL = f"{SERVICE_URL_STR}/api/remote"
SECRET = "s3cret-key"


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(
        DISPLAY_LOCALE="en",
        REQUEST_TIMEOUT=5.0,
        RESOURCE_TIMEOUT=10.0,
        DEFAULT_PAGE_LIMIT=20,
    )


@pytest_asyncio.fixture
async def http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """httpx.AsyncClient, закрывается после теста."""
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def remote_client(http_client: httpx.AsyncClient, settings: ClientSettings) -> RemoteDataClient:
    return RemoteDataClient(
        SERVICE_URL_STR,
        secret=SECRET,
        http_client=http_client,
        settings=settings,
    )


@pytest.fixture
def schema_payload() -> Dict[str, Any]:
    return {
        "tables": [
            {
                "name": "users",
                "fields": [
                    {"name": "id", "type": "integer", "readonly": True},
                    {"name": "name", "type": "string", "required": True},
                    {"name": "email", "type": "email", "required": True},
                    {"name": "age", "type": "integer"},
                    {"name": "balance", "type": "decimal"},
                    {"name": "is_active", "type": "boolean"},
                    {"name": "birthday", "type": "date"},
                    {"name": "last_login", "type": "datetime", "readonly": True},
                    {"name": "password", "type": "password"},
                    {"name": "extra_json", "type": "json"},
                ],
            },
            {
                "name": "orders",
                "fields": [
                    {"name": "number", "type": "string", "required": True, "readonly": True},
                    {"name": "total", "type": "decimal"},
                ],
            },
        ]
    }


@pytest.fixture
def schema(schema_payload: Dict[str, Any]) -> Schema:
    return parse_schema(json.dumps(schema_payload))


@pytest.fixture
def users_table(schema: Schema) -> Table:
    table = schema.table("users")
    assert table is not None
    return table
