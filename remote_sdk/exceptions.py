# remote_sdk/exceptions.py
from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from remote_sdk.schemas.validation import ServerValidationError


class RemoteSDKError(Exception):
    """
    Базовый класс для всех исключений remote_sdk.
    Позволяет ловить все ошибки SDK одним блоком except RemoteSDKError.
    """

    user_message: str = "Неизвестная ошибка"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.user_message
        super().__init__(self.message)


class ConfigurationError(RemoteSDKError):
    user_message = "Ошибка конфигурации"

    def __str__(self) -> str:
        return f"Configuration Error: {self.message}"


class InvalidURLError(RemoteSDKError):
    user_message = "Неверный URL"

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid URL: {url!r}")


class InvalidResponseError(RemoteSDKError):
    user_message = "Неверный ответ сервера"


class NetworkError(RemoteSDKError):
    """
    Ошибка транспорта (соединение, таймаут). Исходное исключение доступно
    через `cause` и `__cause__`.
    """

    user_message = "Ошибка сети"

    def __init__(self, message: str, url: Optional[str] = None, cause: Optional[BaseException] = None):
        self.url = url
        self.cause = cause
        super().__init__(message)

    @property
    def display_message(self) -> str:
        return f"{self.user_message}: {self.message}"


class DecodeError(RemoteSDKError):
    """Некорректный JSON или структура ответа (схема, запись, пагинация)."""

    user_message = "Ошибка декодирования"

    @property
    def display_message(self) -> str:
        return f"{self.user_message}: {self.message}"


class SchemaError(DecodeError):
    user_message = "Ошибка схемы данных"


class EncodeError(RemoteSDKError):
    """Значение не может быть закодировано в JSON. Ошибка программиста, а не пользователя."""

    user_message = "Ошибка кодирования"


class ValidationFailure(RemoteSDKError):
    """
    Строка, введенная пользователем, не приводится к объявленному типу поля.
    Используется для подсказок в форме; окончательное решение принимает сервер.
    """

    user_message = "Некорректное значение"

    def __init__(self, field_type: str, raw: str, message: Optional[str] = None):
        self.field_type = field_type
        self.raw = raw
        super().__init__(message or f"Cannot convert {raw!r} to {field_type}")


class FormValidationError(RemoteSDKError):
    """Набор ошибок по полям формы: имя поля -> сообщение."""

    user_message = "Форма содержит ошибки"

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        details = "; ".join(f"{name}: {msg}" for name, msg in self.errors.items())
        super().__init__(f"Form validation failed: {details}")


class HTTPStatusError(RemoteSDKError):
    """
    Сервер ответил статусом вне диапазона 2xx.
    Включает статус-код и URL запроса.
    """

    user_message = "Ошибка HTTP"

    def __init__(self, status_code: int, url: Optional[str] = None, message: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        full_message = "Remote API Error"
        if url:
            full_message += f" accessing {url}"
        full_message += f" (Status Code: {status_code})"
        if message:
            full_message += f": {message}"
        super().__init__(full_message)

    @property
    def display_message(self) -> str:
        return self.user_message


class BadRequestError(HTTPStatusError):
    user_message = "Неверный запрос (400)"


class RemoteValidationError(HTTPStatusError):
    """Ответ 400 с разобранным телом ошибки валидации."""

    def __init__(self, error: "ServerValidationError", url: Optional[str] = None):
        self.error = error
        super().__init__(400, url=url, message=error.message)

    @property
    def display_message(self) -> str:
        return self.error.display_message

    def error_message(self, field: str) -> Optional[str]:
        return self.error.error_message(field)


class UnauthorizedError(HTTPStatusError):
    user_message = "Не авторизован (401)"


class ForbiddenError(HTTPStatusError):
    user_message = "Доступ запрещен (403)"


class NotFoundError(HTTPStatusError):
    user_message = "Ресурс не найден (404)"


class ServerError(HTTPStatusError):
    @property
    def display_message(self) -> str:
        return f"Ошибка сервера ({self.status_code})"


class UnknownStatusError(HTTPStatusError):
    @property
    def display_message(self) -> str:
        return f"Неизвестная ошибка ({self.status_code})"


def display_message_for(error: BaseException) -> str:
    """Сообщение об ошибке для показа пользователю."""
    message = getattr(error, "display_message", None)
    if isinstance(message, str):
        return message
    if isinstance(error, RemoteSDKError):
        return error.user_message
    return str(error)
