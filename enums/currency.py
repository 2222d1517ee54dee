import enum
from types import MappingProxyType


class Currency(enum.IntEnum):
    USD = 1
    GBP = 2
    EUR = 3
    CHF = 4
    RUB = 5
    PLN = 6
    BRL = 7
    JPY = 8
    NOK = 9
    IDR = 10
    MYR = 11
    PHP = 12
    SGD = 13
    THB = 14
    VND = 15
    KRW = 16
    TRY = 17
    UAH = 18
    MXN = 19
    CAD = 20
    AUD = 21
    NZD = 22
    CNY = 23
    INR = 24
    CLP = 25
    PEN = 26
    COP = 27
    ZAR = 28
    HKD = 29
    TWD = 30
    SAR = 31
    AED = 32
    ARS = 34
    ILS = 35
    BYN = 36
    KZT = 37
    KWD = 38
    QAR = 39
    CRC = 40
    UYU = 41
    RMB = 9000

    @classmethod
    def from_setting(cls, value: str) -> "Currency":
        """
        Валюта из настройки CURRENCY: код (EUR) или числовой ID Steam (3).
        :raises ValueError: неизвестная валюта
        """
        value = value.strip()
        try:
            return cls(int(value)) if value.isdigit() else cls[value.upper()]
        except (KeyError, ValueError) as ex:
            raise ValueError(
                f"Unknown CURRENCY {value!r}, expected a code such as USD or EUR or a Steam currency id"
            ) from ex


# Символ валюты в кошельке Steam -> ID валюты
WALLET_CURRENCY = MappingProxyType({
    "$": Currency.USD,
    "£": Currency.GBP,
    "€": Currency.EUR,
    "CHF": Currency.CHF,
    "₽": Currency.RUB,
    "zł": Currency.PLN,
    "R$": Currency.BRL,
    "¥": Currency.JPY,
    "kr": Currency.NOK,
    "Rp": Currency.IDR,
    "RM": Currency.MYR,
    "₱": Currency.PHP,
    "S$": Currency.SGD,
    "฿": Currency.THB,
    "₫": Currency.VND,
    "₩": Currency.KRW,
    "₺": Currency.TRY,
    "₴": Currency.UAH,
    "Mex$": Currency.MXN,
    "CAD": Currency.CAD,
    "AUD": Currency.AUD,
    "NZ$": Currency.NZD,
    "元": Currency.CNY,
    "₹": Currency.INR,
    "CLP$": Currency.CLP,
    "S/": Currency.PEN,
    "COP$": Currency.COP,
    "R": Currency.ZAR,
    "HK$": Currency.HKD,
    "NT$": Currency.TWD,
    "ر.س": Currency.SAR,
    "د.إ": Currency.AED,
    "₪": Currency.ILS,
    "Br": Currency.BYN,
    "₸": Currency.KZT,
    "KWD": Currency.KWD,
    "QAR": Currency.QAR,
    "₡": Currency.CRC,
    "UYU$": Currency.UYU,
    "RMB": Currency.CNY,
})
