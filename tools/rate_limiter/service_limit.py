import threading
import time


class ServiceLimit:
    def __init__(self, min_delay: float):
        """
        :param min_delay: Минимальная задержка между запросами (в секундах).
        """
        self.min_delay = min_delay
        self.last_request_time = float("-inf")
        self.lock = threading.Lock()

    def wait(self) -> None:
        """Дождаться окончания задержки и отметить новый запрос."""
        with self.lock:
            elapsed_time = time.monotonic() - self.last_request_time
            if elapsed_time < self.min_delay:
                time.sleep(self.min_delay - elapsed_time)
            self.last_request_time = time.monotonic()
