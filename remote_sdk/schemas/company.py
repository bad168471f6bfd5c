# remote_sdk/schemas/company.py
import logging
import uuid
from typing import List, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from remote_sdk.exceptions import DecodeError

logger = logging.getLogger("remote_sdk.schemas.company")


class Company(BaseModel):
    """Настроенный удаленный источник данных: базовый URL + общий секрет."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    secret: str = ""
    is_active: bool = False

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")


_companies_adapter = TypeAdapter(List[Company])


class CompanyRegistry:
    """
    Список компаний в памяти. Хранится вызывающей стороной как один JSON-блоб
    (dump/load); сам реестр ничего не пишет на диск.
    """

    def __init__(self, companies: Optional[List[Company]] = None):
        self._companies: List[Company] = list(companies or [])

    def list(self) -> List[Company]:
        return list(self._companies)

    def get(self, company_id: uuid.UUID) -> Optional[Company]:
        return next((c for c in self._companies if c.id == company_id), None)

    def add(self, company: Company) -> Company:
        self._companies.append(company)
        logger.info(f"Company '{company.name}' added ({company.url})")
        return company

    def update(self, company: Company) -> bool:
        for index, existing in enumerate(self._companies):
            if existing.id == company.id:
                self._companies[index] = company
                return True
        logger.warning(f"Company {company.id} not found for update")
        return False

    def delete(self, company_id: uuid.UUID) -> bool:
        before = len(self._companies)
        self._companies = [c for c in self._companies if c.id != company_id]
        return len(self._companies) != before

    def set_active(self, company_id: uuid.UUID) -> Optional[Company]:
        """Делает активной ровно одну компанию. Неизвестный id ничего не меняет."""
        if self.get(company_id) is None:
            return None
        self._companies = [
            c.model_copy(update={"is_active": c.id == company_id}) for c in self._companies
        ]
        return self.active

    @property
    def active(self) -> Optional[Company]:
        return next((c for c in self._companies if c.is_active), None)

    def dump(self) -> bytes:
        return _companies_adapter.dump_json(self._companies)

    @classmethod
    def load(cls, blob: Union[bytes, str, None]) -> "CompanyRegistry":
        if not blob:
            return cls()
        try:
            return cls(_companies_adapter.validate_json(blob))
        except ValidationError as e:
            raise DecodeError(f"Stored company list is malformed: {e}") from e
