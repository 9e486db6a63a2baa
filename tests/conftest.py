from typing import List

import pytest
import qrcode
from qrcode.util import MODE_8BIT_BYTE, MODE_ALPHA_NUM, MODE_NUMBER, QRData

from qr_raster.analyzer import Mode
from qr_raster.tables import ErrorCorrection

_REFERENCE_LEVELS = {
    ErrorCorrection.L: qrcode.constants.ERROR_CORRECT_L,
    ErrorCorrection.M: qrcode.constants.ERROR_CORRECT_M,
    ErrorCorrection.Q: qrcode.constants.ERROR_CORRECT_Q,
    ErrorCorrection.H: qrcode.constants.ERROR_CORRECT_H,
}

_REFERENCE_MODES = {
    Mode.NUMERIC: MODE_NUMBER,
    Mode.ALPHANUMERIC: MODE_ALPHA_NUM,
    Mode.BYTE: MODE_8BIT_BYTE,
}


def reference_matrix(text: str, mode: Mode, level: ErrorCorrection, version: int, mask: int) -> List[List[bool]]:
    """Encode with the ``qrcode`` package using a fixed mode, version and mask."""
    qr = qrcode.QRCode(
        version=version,
        error_correction=_REFERENCE_LEVELS[level],
        border=0,
        mask_pattern=mask,
    )
    qr.add_data(QRData(text.encode("utf-8"), mode=_REFERENCE_MODES[mode]))
    qr.make(fit=False)
    return [[bool(cell) for cell in row] for row in qr.get_matrix()]


@pytest.fixture
def reference():
    return reference_matrix
