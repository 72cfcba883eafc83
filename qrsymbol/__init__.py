from qrsymbol.constants import (
    ERROR_LEVEL_H,
    ERROR_LEVEL_L,
    ERROR_LEVEL_M,
    ERROR_LEVEL_Q,
    FNC1,
)
from qrsymbol.exceptions import (
    InputTooLongError,
    InvalidCharacterError,
    QRCodeError,
    UnsupportedConfigurationError,
)
from qrsymbol.qrcode import QRCode


def make(data, **kwargs):
    return QRCode(data, **kwargs)


__all__ = [
    'QRCode',
    'make',
    'FNC1',
    'ERROR_LEVEL_L',
    'ERROR_LEVEL_M',
    'ERROR_LEVEL_Q',
    'ERROR_LEVEL_H',
    'QRCodeError',
    'InputTooLongError',
    'InvalidCharacterError',
    'UnsupportedConfigurationError',
]
