import base64
import binascii
import hashlib
import hmac
import struct
from urllib.parse import quote

from utils.exceptions import CryptoError


MAX_TAG_LENGTH = 32


def generate_confirmation_key(identity_secret: str, tag: str, timestamp: int) -> str:
    """
    Ключ подтверждения для mobileconf: HMAC-SHA1 от (время big-endian, 8 байт) + тег.

    :param identity_secret: identity_secret из maFile (стандартный base64)
    :param tag: тег операции (conf, accept, reject, ...), не длиннее 32 символов
    :param timestamp: время сервера Steam в секундах
    :return: base64 от HMAC-SHA1, экранированный для query-строки
    """
    try:
        secret = base64.b64decode(identity_secret, validate=True)
    except (binascii.Error, ValueError) as ex:
        raise CryptoError(f"Failed to decode identity secret: {ex}") from ex

    buffer = struct.pack('>Q', timestamp) + tag[:MAX_TAG_LENGTH].encode('utf-8')
    digest = hmac.new(secret, buffer, digestmod=hashlib.sha1).digest()
    return quote(base64.b64encode(digest).decode('ascii'), safe='')


def generate_device_id(steam_id: str) -> str:
    hexed = hashlib.sha1(str(steam_id).encode('ascii')).hexdigest()
    return 'android:' + '-'.join([hexed[:8], hexed[8:12], hexed[12:16], hexed[16:20], hexed[20:32]])
