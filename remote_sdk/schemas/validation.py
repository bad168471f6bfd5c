# remote_sdk/schemas/validation.py
import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from remote_sdk.exceptions import DecodeError
from remote_sdk.schemas.values import loads_json

logger = logging.getLogger("remote_sdk.schemas.validation")


class FieldValidationError(BaseModel):
    field: str
    message: str
    code: Optional[str] = None


class ServerValidationError(BaseModel):
    """Ошибка валидации, которую сервер вернул вместе со статусом 400."""

    message: str
    errors: Optional[Dict[str, List[str]]] = None
    field_errors: Optional[List[FieldValidationError]] = Field(
        default=None,
        validation_alias=AliasChoices("field_errors", "fieldErrors"),
    )

    model_config = ConfigDict(populate_by_name=True)

    @property
    def display_message(self) -> str:
        """Все сообщения одной строкой на каждое: общее, затем по полям."""
        messages: List[str] = []
        if self.message:
            messages.append(self.message)
        for field_error in self.field_errors or []:
            messages.append(f"{field_error.field}: {field_error.message}")
        for field, field_messages in (self.errors or {}).items():
            for field_message in field_messages:
                messages.append(f"{field}: {field_message}")
        return "\n".join(messages)

    def has_error(self, field: str) -> bool:
        if any(fe.field == field for fe in self.field_errors or []):
            return True
        return bool((self.errors or {}).get(field))

    def error_message(self, field: str) -> Optional[str]:
        # field_errors имеют приоритет над errors
        for field_error in self.field_errors or []:
            if field_error.field == field:
                return field_error.message
        field_messages = (self.errors or {}).get(field)
        return field_messages[0] if field_messages else None

    def field_messages(self) -> Dict[str, str]:
        """Карта поле -> первое сообщение, для подсветки полей формы."""
        fields = list((self.errors or {}).keys()) + [fe.field for fe in self.field_errors or []]
        result: Dict[str, str] = {}
        for field in fields:
            message = self.error_message(field)
            if message is not None:
                result[field] = message
        return result


class ValidationErrorEnvelope(BaseModel):
    error: ServerValidationError
    status: Optional[int] = None
    timestamp: Optional[str] = None


def validation_error_from_mapping(payload: Any) -> Optional[ServerValidationError]:
    if not isinstance(payload, dict):
        return None
    try:
        return ValidationErrorEnvelope.model_validate(payload).error
    except ValidationError:
        pass
    try:
        return ServerValidationError.model_validate(payload)
    except ValidationError:
        pass
    message = payload.get("message")
    if isinstance(message, str):
        return ServerValidationError(message=message)
    return None


def parse_validation_error(raw: Union[bytes, bytearray, str]) -> Optional[ServerValidationError]:
    """
    Пытается разобрать тело ответа 400: конверт {"error": {...}}, затем
    прямую форму, затем простое {"message": "..."}. None, если ничего не подошло.
    """
    try:
        payload = loads_json(raw)
    except DecodeError:
        logger.debug("Error body is not JSON; no validation details")
        return None
    return validation_error_from_mapping(payload)
