import enum
from contextlib import contextmanager
from typing import Any, Iterable, NamedTuple, Optional
from urllib.parse import quote

import requests

from enums import Urls
from steam_lib.guard.guard import generate_confirmation_key, generate_device_id
from steam_lib.guard.time_oracle import SteamTimeOracle
from tools import BasicLogger
from utils import api_request, decode_json
from utils.exceptions import SteamError, ProtocolError


class ConfirmationTag:
    CONF = 'conf'
    DETAILS = 'details'
    ACCEPT = 'accept'
    REJECT = 'reject'


class ConfirmationAction(enum.Enum):
    # (тег для ключа, операция op)
    ACCEPT = (ConfirmationTag.ACCEPT, 'allow')
    REJECT = (ConfirmationTag.REJECT, 'cancel')

    def __init__(self, tag: str, operation: str) -> None:
        self.tag = tag
        self.operation = operation


class ConfirmationStep(str, enum.Enum):
    TIME_FETCH = 'time fetch'
    HASH = 'hash derivation'
    REQUEST = 'request'
    DECODE = 'decode'


class ConfirmationType(enum.IntEnum):
    TRADE = 2  # Send offer and accept
    CREATE_LISTING = 3
    CHANGE_PHONE_NUMBER = 5
    CONFIRM = 6  # I saw in the mail change
    REGISTER_API_KEY = 9
    BUY_LISTING = 12


class Confirmation(NamedTuple):
    type: ConfirmationType | int
    type_name: str
    id: str
    creator_id: str
    nonce: str
    creation_time: int
    cancel: str
    accept: str
    icon: str
    multi: bool
    headline: str
    summary: list
    warn: Any

    def __str__(self) -> str:
        if not self.summary or not self.summary[0]:
            if not self.headline:
                type_name = self.type.name if isinstance(self.type, ConfirmationType) else self.type_name
                return f'Unknown {type_name}'
            return self.headline
        return f'Confirmation: {self.summary[0]}'


class ConfirmationResult(NamedTuple):
    success: bool
    message: str = ''


class ConfirmationExecutor(BasicLogger):
    """
        Мобильные подтверждения Steam Guard.
        Каждая операция сама получает свежее время сервера и свой ключ:
        ключ списка (тег conf) не подходит для accept/reject и наоборот.
    """
    CONF_URL = Urls.MOBILECONF

    def __init__(self, identity_secret: str, steam_id: str, session: requests.Session,
                 device_id: Optional[str] = None, time_oracle: Optional[SteamTimeOracle] = None) -> None:
        super().__init__(
            logger_name=f"{self.__class__.__name__}",
            dir_specify="guard",
            file_name=f"{self.__class__.__name__}"
        )
        self.steam_id = str(steam_id)
        self.identity_secret = identity_secret
        self.session = session
        self.device_id = device_id or generate_device_id(self.steam_id)
        self.time_oracle = time_oracle or SteamTimeOracle(session)

    def get_confirmations(self) -> list[Confirmation]:
        tag = ConfirmationTag.CONF
        params = self._create_confirmation_params(tag)
        headers = {'X-Requested-With': 'com.valvesoftware.android.steam.community'}
        data = self._send("GET", "/getlist", params, headers)

        with self._step(ConfirmationStep.DECODE):
            if not data.get('success'):
                reason = data.get('message') or ('needauth' if data.get('needauth') else 'success=false')
                raise ProtocolError(f"Confirmation list rejected: {reason}")
            if not isinstance(data.get('conf'), list):
                raise ProtocolError(f"Missing or malformed 'conf' in confirmation list: {data.get('conf')!r}")
            confirmations = [self._parse_confirmation(conf) for conf in data['conf']]

        self.logger.debug(f"Listed: {len(confirmations)} подтверждений")
        return confirmations

    def respond_to_confirmation(self, confirmation: Confirmation,
                                action: ConfirmationAction = ConfirmationAction.ACCEPT) -> ConfirmationResult:
        params = self._create_confirmation_params(action.tag)
        params['op'] = action.operation
        params['cid'] = confirmation.id
        params['ck'] = confirmation.nonce
        headers = {'X-Requested-With': 'XMLHttpRequest'}
        result = self._parse_result(self._send("GET", "/ajaxop", params, headers))

        self.logger.info(f"{action.name} '{confirmation}' ({confirmation.id}): success={result.success}")
        return result

    def respond_to_confirmations(self, confirmations: Iterable[Confirmation],
                                 action: ConfirmationAction = ConfirmationAction.ACCEPT) -> ConfirmationResult:
        confirmations = list(confirmations)
        params = self._create_confirmation_params(action.tag)
        params['op'] = action.operation
        params['cid[]'] = [i.id for i in confirmations]
        params['ck[]'] = [i.nonce for i in confirmations]
        headers = {
            'X-Requested-With': 'XMLHttpRequest',
            'Content-Type': 'application/x-www-form-urlencoded'
        }
        result = self._parse_result(self._send("POST", "/multiajaxop", params, headers))

        self.logger.info(f"{action.name} {len(confirmations)} подтверждений: success={result.success}")
        return result

    def allow_buy_order_confirmation(self) -> bool:
        types = [ConfirmationType.BUY_LISTING]
        confirmations = self.get_confirmations()
        for confirmation in confirmations:
            if confirmation.type in types:
                return self.respond_to_confirmation(confirmation).success
        return False

    def allow_all_confirmations(self, types: Iterable[ConfirmationType]) -> bool:
        types = set(types)
        confirmations = self.get_confirmations()
        selected_confirmations = [i for i in confirmations if i.type in types]
        if not selected_confirmations:
            return True
        return self.respond_to_confirmations(selected_confirmations).success

    @contextmanager
    def _step(self, step: ConfirmationStep):
        try:
            yield
        except SteamError as ex:
            self.logger.error(f"Ошибка на шаге '{step.value}': {ex}")
            raise ex.at_step(step.value) from ex

    def _create_confirmation_params(self, tag: str) -> dict[str, Any]:
        with self._step(ConfirmationStep.TIME_FETCH):
            timestamp = self.time_oracle.now()
        self.logger.debug(f"TimeFetched: t={timestamp}")

        with self._step(ConfirmationStep.HASH):
            confirmation_key = generate_confirmation_key(self.identity_secret, tag, timestamp)
        self.logger.debug(f"HashDerived: tag={tag}")

        return {
            'p': self.device_id,
            'a': self.steam_id,
            'k': confirmation_key,
            't': timestamp,
            'm': 'react',
            'tag': tag
        }

    def _send(self, method: str, path: str, params: dict[str, Any], headers: dict[str, str]) -> dict:
        url = self.CONF_URL + path
        with self._step(ConfirmationStep.REQUEST):
            if method == "GET":
                response = api_request(self.session, method, f"{url}?{self._encode_query(params)}",
                                       headers=headers, logger=self.logger)
            else:
                response = api_request(self.session, method, url, headers=headers,
                                       data=self._encode_query(params), logger=self.logger)

        with response, self._step(ConfirmationStep.DECODE):
            data = decode_json(response, url)
            if not isinstance(data, dict):
                raise ProtocolError(f"Unexpected response shape from {url}", url=url)
        return data

    @staticmethod
    def _encode_query(params: dict[str, Any]) -> str:
        # k уже экранирован generate_confirmation_key
        parts = []
        for key, value in params.items():
            values = value if isinstance(value, list) else [value]
            for item in values:
                encoded = str(item) if key == 'k' else quote(str(item), safe='')
                parts.append(f"{quote(key, safe='')}={encoded}")
        return "&".join(parts)

    @staticmethod
    def _parse_confirmation(conf: dict) -> Confirmation:
        try:
            try:
                confirmation_type = ConfirmationType(int(conf['type']))
            except ValueError:
                confirmation_type = int(conf['type'])
            return Confirmation(
                type=confirmation_type,
                type_name=conf.get('type_name', ''),
                id=str(conf['id']),
                creator_id=str(conf.get('creator_id', '')),
                nonce=str(conf['nonce']),
                creation_time=int(conf.get('creation_time', 0)),
                cancel=conf.get('cancel', ''),
                accept=conf.get('accept', ''),
                icon=conf.get('icon', ''),
                multi=bool(conf.get('multi', False)),
                headline=conf.get('headline', ''),
                summary=conf.get('summary') or [],
                warn=conf.get('warn')
            )
        except (KeyError, TypeError, ValueError, AttributeError) as ex:
            raise ProtocolError(f"Malformed confirmation entry: {ex!r}") from ex

    @staticmethod
    def _parse_result(data: dict) -> ConfirmationResult:
        return ConfirmationResult(
            success=bool(data.get('success')),
            message=data.get('message') or ''
        )
