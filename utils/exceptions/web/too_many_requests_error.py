from utils.exceptions.steam_error import ProtocolError


class TooManyRequestsError(ProtocolError):
    """Исключение для ошибок 429 (Too Many Requests)"""
    def __init__(self, message="Too many requests to Steam", **kwargs):
        super().__init__(message, **kwargs)
