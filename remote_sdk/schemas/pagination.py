# remote_sdk/schemas/pagination.py
from typing import Any, Callable, Generic, List, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, ValidationError

from remote_sdk.exceptions import DecodeError
from remote_sdk.schemas.values import loads_json

# TypeVar для типа элементов в списке data
DataType = TypeVar("DataType")


class PaginationInfo(BaseModel):
    page: StrictInt
    limit: StrictInt
    total: StrictInt
    # pages == ceil(total / limit) ожидается, но не проверяется: доверяем серверу
    pages: StrictInt
    has_more: StrictBool

    model_config = ConfigDict(frozen=True, extra="ignore")

    @property
    def next_page(self) -> int:
        return self.page + 1 if self.has_more else self.page


class PaginatedResponse(BaseModel, Generic[DataType]):
    """
    Стандартный конверт ответа для постраничных списков:
    {"data": [...], "pagination": {"page", "limit", "total", "pages", "has_more"}}.
    """

    data: List[DataType] = Field(..., description="Список возвращенных элементов.")
    pagination: PaginationInfo

    model_config = {
        "arbitrary_types_allowed": True
    }


def page_from_mapping(payload: Any, item_decoder: Callable[[Any], DataType]) -> PaginatedResponse[DataType]:
    if not isinstance(payload, dict):
        raise DecodeError(f"Paginated response must be a JSON object, got {type(payload).__name__}")
    for key in ("data", "pagination"):
        if key not in payload:
            raise DecodeError(f"Paginated response is missing '{key}'")

    items = payload["data"]
    if not isinstance(items, list):
        raise DecodeError(f"'data' must be a list, got {type(items).__name__}")
    try:
        pagination = PaginationInfo.model_validate(payload["pagination"])
    except ValidationError as e:
        raise DecodeError(f"Malformed pagination block: {e}") from e

    return PaginatedResponse(
        data=[item_decoder(item) for item in items],
        pagination=pagination,
    )


def parse_page(
    raw: Union[bytes, bytearray, str],
    item_decoder: Callable[[Any], DataType],
) -> PaginatedResponse[DataType]:
    """item_decoder вызывается для каждого элемента списка data (обычно это dict записи)."""
    return page_from_mapping(loads_json(raw), item_decoder)
