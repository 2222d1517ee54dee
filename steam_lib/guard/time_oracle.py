import requests

from enums import Urls
from tools import BasicLogger
from utils import api_request, decode_json, to_uint
from utils.exceptions import ProtocolError


class SteamTimeOracle(BasicLogger):
    """
        Время сервера Steam. Каждый вызов now() делает новый запрос, без кэша.
    """
    def __init__(self, session: requests.Session) -> None:
        super().__init__(
            logger_name=f"{self.__class__.__name__}",
            dir_specify="guard",
            file_name=f"{self.__class__.__name__}"
        )
        self.session = session

    def now(self) -> int:
        url = Urls.QUERY_TIME
        with api_request(
            self.session,
            "POST",
            url,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            logger=self.logger
        ) as response:
            data = decode_json(response, url)

        wrapper = data.get("response") if isinstance(data, dict) else None
        server_time = wrapper.get("server_time") if isinstance(wrapper, dict) else None
        if server_time is None:
            raise ProtocolError(f"Missing response.server_time in {url}", url=url)

        try:
            return to_uint(server_time)
        except ValueError as ex:
            raise ProtocolError(f"Invalid server_time {server_time!r} from {url}", url=url) from ex
