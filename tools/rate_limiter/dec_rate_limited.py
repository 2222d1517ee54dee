from functools import wraps

from .service_limit import ServiceLimit


def rate_limited(min_delay: float):
    """
        Декоратор для управления задержкой между вызовами метода, обращающегося к сервису.
        Задержка общая для всех экземпляров класса.
    """
    service_limit = ServiceLimit(min_delay)

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            service_limit.wait()
            return func(*args, **kwargs)
        wrapper.service_limit = service_limit
        return wrapper
    return decorator
