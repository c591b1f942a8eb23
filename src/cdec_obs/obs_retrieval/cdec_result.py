"""
Typed results and errors for CDEC retrieval.

A retrieval either succeeds with aligned value/date arrays or ends in one
of three failure states, so callers can tell "no data in range" apart from
"service unreachable".
"""

from enum import Enum
from typing import Optional

import numpy as np
import pandas as pd


class CDECError(Exception):
    """Base class for CDEC retrieval errors."""


class CDECRetrievalError(CDECError):
    """The HTTP request to CDEC failed (DNS, connection, timeout, non-2xx)."""


class CDECParseError(CDECError):
    """The CDEC response could not be parsed into sensor readings."""


class CDECStatus(Enum):
    SUCCESS = 'success'
    NO_DATA = 'no_data'
    TRANSPORT_ERROR = 'transport_error'
    MALFORMED_RESPONSE = 'malformed_response'


class CDECResult:
    """
    Outcome of a single CDEC sensor retrieval.

    Attributes:
        status: CDECStatus of the retrieval
        url: Request URL that was (or would have been) contacted
        values: Float array of readings, NaN where missing
        dates: Float array of date serials aligned with values
        datetimes: DatetimeIndex aligned with values
        message: Human readable failure reason, empty on success
    """

    def __init__(
        self,
        status: CDECStatus,
        url: str = '',
        values: Optional[np.ndarray] = None,
        dates: Optional[np.ndarray] = None,
        datetimes: Optional[pd.DatetimeIndex] = None,
        message: str = '',
    ):
        self.status = status
        self.url = url
        self.values = (
            np.array([], dtype=float) if values is None else values)
        self.dates = np.array([], dtype=float) if dates is None else dates
        self.datetimes = (
            pd.DatetimeIndex([]) if datetimes is None else datetimes)
        self.message = message

    @property
    def ok(self) -> bool:
        return self.status is CDECStatus.SUCCESS

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return (
            f'CDECResult(status={self.status.name}, n={len(self)}, '
            f'url={self.url!r})'
        )

    def as_tuple(self) -> tuple:
        """
        Return the ``(values, dates)`` pair, or ``(None, None)`` on failure.
        """
        if not self.ok:
            return None, None
        return self.values, self.dates

    def to_dataframe(self) -> pd.DataFrame:
        """
        Return the readings as a DataFrame.

        Columns:
            - DateTime: Observation timestamps
            - DateSerial: Date serial of each observation
            - OBS: Observation values, NaN where missing
        """
        return pd.DataFrame({
            'DateTime': self.datetimes,
            'DateSerial': self.dates,
            'OBS': self.values,
        })
