# remote_sdk/clients/base.py
import asyncio
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from remote_sdk.config import ClientSettings, get_settings
from remote_sdk.exceptions import (
    BadRequestError,
    ConfigurationError,
    DecodeError,
    ForbiddenError,
    HTTPStatusError,
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
    NotFoundError,
    RemoteValidationError,
    ServerError,
    UnauthorizedError,
    UnknownStatusError,
)
from remote_sdk.schemas.company import Company
from remote_sdk.schemas.pagination import PaginatedResponse, parse_page
from remote_sdk.schemas.record import Record, encode_create, encode_update, parse_record, record_from_mapping
from remote_sdk.schemas.schema import Schema, parse_schema
from remote_sdk.schemas.validation import parse_validation_error
from remote_sdk.schemas.values import loads_json

logger = logging.getLogger("remote_sdk.clients.base")

_STATUS_ERRORS = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
}


def _response_url(response: httpx.Response) -> Optional[str]:
    try:
        return str(response.request.url)
    except RuntimeError:
        return None


def classify_status(response: httpx.Response) -> Optional[HTTPStatusError]:
    """
    Превращает ответ с кодом вне 2xx в типизированное исключение.
    Для 400 сначала пробуем разобрать тело как ошибку валидации.
    """
    status = response.status_code
    url = _response_url(response)
    if 200 <= status < 300:
        return None
    if status == 400:
        validation_error = parse_validation_error(response.content)
        if validation_error is not None:
            return RemoteValidationError(validation_error, url=url)
    if status in _STATUS_ERRORS:
        return _STATUS_ERRORS[status](status, url=url)
    if 500 <= status < 600:
        return ServerError(status, url=url)
    return UnknownStatusError(status, url=url)


class RemoteDataClient:
    """
    Асинхронный HTTP-клиент для динамического CRUD API (/api/remote/...).
    Все тела запросов и ответов - JSON; авторизация - общий секрет в заголовке.
    """

    def __init__(
        self,
        base_url: str,
        secret: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        settings: Optional[ClientSettings] = None,
    ):
        self.settings = settings or get_settings()
        self.base_url_str = self._validate_base_url(base_url)
        self.secret = secret
        self.api_base_url = f"{self.base_url_str}/{self.settings.API_PREFIX.strip('/')}"

        self._http_client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.REQUEST_TIMEOUT)
        )
        self._owns_client = http_client is None
        logger.debug(f"RemoteDataClient initialized for API base: {self.api_base_url}. Owns client: {self._owns_client}")

    @classmethod
    def for_company(
        cls,
        company: Optional[Company],
        http_client: Optional[httpx.AsyncClient] = None,
        settings: Optional[ClientSettings] = None,
    ) -> "RemoteDataClient":
        if company is None:
            raise ConfigurationError("No active company selected")
        return cls(company.url, secret=company.secret, http_client=http_client, settings=settings)

    @staticmethod
    def _validate_base_url(base_url: str) -> str:
        stripped = (base_url or "").strip().rstrip("/")
        try:
            parsed = httpx.URL(stripped)
        except (httpx.InvalidURL, TypeError) as e:
            raise InvalidURLError(base_url) from e
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise InvalidURLError(base_url)
        return stripped

    def _get_auth_headers(self) -> Dict[str, str]:
        if self.secret:
            return {self.settings.SECRET_HEADER: self.secret}
        return {}

    def _redacted(self, headers: Dict[str, str]) -> Dict[str, str]:
        return {k: ("***" if k == self.settings.SECRET_HEADER else v) for k, v in headers.items()}

    def table_url(self, table: str, record_id: Optional[str] = None) -> str:
        url = f"{self.api_base_url}/{quote(table, safe='')}"
        if record_id is not None:
            url += f"/{quote(str(record_id), safe='')}"
        return url

    async def _request(
        self,
        method: str,
        url: str,
        content: Optional[bytes] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        headers.update(self._get_auth_headers())
        logger.debug(
            f"Executing remote call: {method} {url}, Params: {params}, "
            f"Body: {content[:500] if content else None!r}, Headers: {self._redacted(headers)}"
        )
        try:
            response = await asyncio.wait_for(
                self._http_client.request(method, url, headers=headers, content=content, params=params),
                timeout=self.settings.RESOURCE_TIMEOUT,
            )
        except asyncio.TimeoutError as e:
            raise NetworkError(f"Request deadline exceeded for {url}", url=url, cause=e) from e
        except httpx.TimeoutException as e:
            raise NetworkError(f"Timeout error accessing {url}: {e!s}", url=url, cause=e) from e
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise InvalidURLError(url) from e
        except httpx.RequestError as e:
            raise NetworkError(f"Network error accessing {url}: {e!s}", url=url, cause=e) from e

        error = classify_status(response)
        if error is not None:
            logger.warning(
                f"Remote call to {url} returned status {response.status_code}. Response text: {response.text[:500]}"
            )
            raise error
        logger.debug(f"Remote call to {url} successful. Status: {response.status_code}")
        return response

    @staticmethod
    def _require_body(response: httpx.Response) -> bytes:
        if not response.content:
            raise InvalidResponseError(f"Empty response body from {response.request.url}")
        return response.content

    # --- Проверка доступа ---

    async def check_access(self) -> Dict[str, Any]:
        url = f"{self.api_base_url}/check-access"
        logger.info(f"Client CHECK-ACCESS: {url}")
        response = await self._request("GET", url)
        payload = loads_json(self._require_body(response))
        if not isinstance(payload, dict):
            raise DecodeError("check-access response must be a JSON object")
        return payload

    async def check_connection(self) -> bool:
        """
        True, если сервер доступен и секрет принят; False при 401/403.
        Если check-access отсутствует (404), делаем простой GET на базовый URL.
        """
        try:
            await self.check_access()
            return True
        except (UnauthorizedError, ForbiddenError) as e:
            logger.info(f"Access denied by {self.base_url_str}: {e.status_code}")
            return False
        except NotFoundError:
            logger.info(f"check-access not available on {self.base_url_str}, falling back to plain GET")
            return await self._simple_connection_test()

    async def _simple_connection_test(self) -> bool:
        try:
            response = await asyncio.wait_for(
                self._http_client.get(self.base_url_str),
                timeout=self.settings.RESOURCE_TIMEOUT,
            )
        except (asyncio.TimeoutError, httpx.RequestError) as e:
            raise NetworkError(f"Network error accessing {self.base_url_str}: {e!s}", url=self.base_url_str, cause=e) from e
        return response.status_code < 500

    # --- Схема ---

    async def fetch_schema(self) -> Schema:
        url = f"{self.api_base_url}/schema"
        logger.info(f"Client SCHEMA: Fetching schema from {url}")
        response = await self._request("GET", url)
        return parse_schema(self._require_body(response))

    # --- Записи ---

    async def list_records(
        self,
        table: str,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> PaginatedResponse[Record]:
        url = self.table_url(table)
        params = {"page": page, "limit": limit or self.settings.DEFAULT_PAGE_LIMIT}
        logger.info(f"Client LIST: Fetching '{table}' from {url} with params: {params}")
        response = await self._request("GET", url, params=params)
        return parse_page(self._require_body(response), record_from_mapping)

    async def get_record(self, table: str, record_id: str) -> Record:
        url = self.table_url(table, record_id)
        logger.info(f"Client GET: Fetching '{table}' record {record_id} from {url}")
        response = await self._request("GET", url)
        return parse_record(self._require_body(response))

    async def create_record(self, table: str, record: Record) -> Record:
        url = self.table_url(table)
        body = encode_create(record)
        logger.info(f"Client CREATE: Posting to {url}")
        response = await self._request("POST", url, content=body)
        if not response.content:
            # Сервер не вернул запись: оставляем отправленную
            return record
        return parse_record(response.content)

    async def update_record(self, table: str, record: Record) -> Record:
        url = self.table_url(table, record.wire_id)
        body = encode_update(record)
        logger.info(f"Client UPDATE: Putting to {url} for ID {record.wire_id}")
        response = await self._request("PUT", url, content=body)
        if not response.content:
            return record
        return parse_record(response.content)

    async def delete_record(self, table: str, record: Record) -> None:
        url = self.table_url(table, record.wire_id)
        logger.info(f"Client DELETE: Deleting '{table}' record {record.wire_id} at {url}")
        await self._request("DELETE", url)

    async def close(self) -> None:
        if self._owns_client and self._http_client:
            logger.info(f"Closing owned HTTP client for {self.api_base_url}")
            await self._http_client.aclose()
        elif not self._owns_client:
            logger.debug(f"HTTP client for {self.api_base_url} is managed externally, not closing.")

    async def __aenter__(self) -> "RemoteDataClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
