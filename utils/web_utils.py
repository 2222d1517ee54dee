import logging
from typing import Any

import requests
from requests.exceptions import RequestException

from enums import Config
from utils.exceptions import TransportError, ProtocolError, DecodeError, TooManyRequestsError


base_headers = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:143.0) Gecko/20100101 Firefox/143.0",
    "Accept": "*/*",
    "Accept-Language": "en-US,en;q=0.9"
}

_default_logger = logging.getLogger(__name__)


def api_request(
        session: requests.Session,
        method: str,
        url: str,
        *,
        headers: dict = None,
        params: dict = None,
        data: Any = None,
        check_status: bool = True,
        timeout: float = None,
        logger: logging.Logger = None
) -> requests.Response:
    """
    Единственная точка обращения к Steam. Повторов нет: политику повторов
    определяет вызывающий код.

    :raises TransportError: сетевая ошибка или таймаут
    :raises TooManyRequestsError: ответ 429
    :raises ProtocolError: любой другой статус, кроме 200 (если check_status)
    """
    logger = logger or _default_logger
    final_headers = base_headers.copy()
    if headers:
        final_headers.update(headers)

    try:
        response = session.request(
            method,
            url,
            headers=final_headers,
            params=params,
            data=data,
            timeout=timeout or Config.REQUEST_TIMEOUT
        )
    except RequestException as ex:
        logger.warning(f"Request failed for {url}: {ex}")
        raise TransportError(f"{method} {url} failed: {ex}", url=url) from ex

    if check_status and response.status_code != 200:
        status_code, reason = response.status_code, response.reason
        response.close()
        logger.error(f"Ошибка при обращении к {url}: {status_code} {reason}")
        if status_code == 429:
            raise TooManyRequestsError(url=url)
        raise ProtocolError(f"Unexpected status code {status_code} for {url}", url=url)

    return response


def decode_json(response: requests.Response, url: str = None) -> Any:
    url = url or response.url
    try:
        return response.json()
    except ValueError as ex:
        raise DecodeError(f"Malformed JSON from {url}: {ex}", url=url) from ex
