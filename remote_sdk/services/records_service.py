# remote_sdk/services/records_service.py
import logging
from typing import List, Optional

from remote_sdk.clients.base import RemoteDataClient
from remote_sdk.exceptions import RemoteSDKError
from remote_sdk.schemas.pagination import PaginationInfo
from remote_sdk.schemas.record import Record
from .state import FetchResult, LoadStatus, SaveResult, StateCallback, error_details

logger = logging.getLogger("remote_sdk.services.records_service")


class RecordsService:
    """
    Записи одной таблицы выбранной компании.

    Каждая операция возвращает явный результат (FetchResult / SaveResult) и
    передает его в on_change. Коллекция records меняется только после
    успешного ответа сервера: обновление - на месте, удаление - удаляет запись.
    """

    def __init__(
        self,
        client: RemoteDataClient,
        table: str,
        on_change: Optional[StateCallback] = None,
    ):
        self.client = client
        self.table = table
        self.on_change = on_change
        self.records: List[Record] = []
        self.pagination: Optional[PaginationInfo] = None

    def _emit(self, result):
        if self.on_change is not None:
            self.on_change(result)
        return result

    def _index_of(self, record: Record) -> Optional[int]:
        for index, existing in enumerate(self.records):
            if existing.local_id == record.local_id:
                return index
        return None

    async def fetch(self, page: int = 1, limit: Optional[int] = None) -> FetchResult:
        """Первая страница заменяет коллекцию, следующие дописываются в конец."""
        self._emit(FetchResult(table=self.table, status=LoadStatus.LOADING, records=list(self.records)))
        try:
            response = await self.client.list_records(self.table, page=page, limit=limit)
        except RemoteSDKError as e:
            logger.warning(f"Fetching '{self.table}' page {page} failed: {e}")
            details = error_details(e)
            return self._emit(FetchResult(
                table=self.table,
                status=LoadStatus.FAILED,
                records=list(self.records),
                pagination=self.pagination,
                error=details["error"],
            ))

        if page <= 1:
            self.records = list(response.data)
        else:
            self.records.extend(response.data)
        self.pagination = response.pagination
        logger.info(
            f"Fetched {len(response.data)} '{self.table}' record(s), page {response.pagination.page}/{response.pagination.pages}"
        )
        return self._emit(FetchResult(
            table=self.table,
            status=LoadStatus.LOADED,
            records=list(self.records),
            pagination=self.pagination,
        ))

    async def fetch_next(self, limit: Optional[int] = None) -> Optional[FetchResult]:
        if self.pagination is None or not self.pagination.has_more:
            return None
        return await self.fetch(page=self.pagination.page + 1, limit=limit or self.pagination.limit)

    def _failed(self, record: Record, error: RemoteSDKError) -> SaveResult:
        return self._emit(SaveResult(table=self.table, status=LoadStatus.FAILED, record=record, **error_details(error)))

    async def create(self, record: Record) -> SaveResult:
        try:
            created = await self.client.create_record(self.table, record)
        except RemoteSDKError as e:
            logger.warning(f"Creating '{self.table}' record failed: {e}")
            return self._failed(record, e)
        self.records.append(created)
        return self._emit(SaveResult(table=self.table, status=LoadStatus.LOADED, record=created))

    async def update(self, record: Record) -> SaveResult:
        try:
            updated = await self.client.update_record(self.table, record)
        except RemoteSDKError as e:
            logger.warning(f"Updating '{self.table}' record {record.wire_id} failed: {e}")
            return self._failed(record, e)

        index = self._index_of(record)
        if index is not None:
            target = self.records[index].apply_update(updated)
        else:
            target = record.apply_update(updated)
        return self._emit(SaveResult(table=self.table, status=LoadStatus.LOADED, record=target))

    async def delete(self, record: Record) -> SaveResult:
        try:
            await self.client.delete_record(self.table, record)
        except RemoteSDKError as e:
            logger.warning(f"Deleting '{self.table}' record {record.wire_id} failed: {e}")
            return self._failed(record, e)

        index = self._index_of(record)
        if index is not None:
            del self.records[index]
        return self._emit(SaveResult(table=self.table, status=LoadStatus.LOADED, record=record))
