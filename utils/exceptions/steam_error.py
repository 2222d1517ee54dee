from typing import Optional


class SteamError(Exception):
    """Базовое исключение для всех ошибок обращения к Steam"""
    def __init__(self, message: str, *, step: Optional[str] = None, url: Optional[str] = None) -> None:
        self.message = message
        self.step = step
        self.url = url
        super().__init__(self.message)

    def at_step(self, step: str) -> "SteamError":
        """
        Копия исключения того же класса с указанием шага, на котором оно возникло.
        Использовать как ``raise ex.at_step(step) from ex``.
        """
        error = self.__class__.__new__(self.__class__)
        SteamError.__init__(error, f"{step}: {self.message}", step=step, url=self.url)
        return error


class TransportError(SteamError):
    """Сеть недоступна, таймаут, ошибка SSL"""


class ProtocolError(SteamError):
    """Неожиданный статус, некорректный курсор, отсутствующее поле ответа"""


class DecodeError(SteamError):
    """Тело ответа не является корректным JSON"""


class CryptoError(SteamError):
    """identity_secret не декодируется из base64"""


class InventoryError(SteamError):
    """Steam вернул success=0 с текстом ошибки"""
