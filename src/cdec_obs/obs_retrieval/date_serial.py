"""
Date serial conversion.

Converts timestamps to and from MATLAB-style serial day numbers: days since
0000-01-00 on the proleptic Gregorian calendar, with the fractional part
encoding the time of day. 2000-01-01 00:00 is 730486.0.

The conversion goes through the pandas Julian date, offset so that the
two day counts line up.
"""

import numpy as np
import pandas as pd

# Julian date of serial day 0
JULIAN_OFFSET = 1721058.5


def datetime_to_serial(timestamps) -> np.ndarray:
    """
    Convert timestamps to date serials.

    Parameters
    ----------
    timestamps : array-like of datetime-like
        Anything accepted by ``pd.to_datetime``.

    Returns
    -------
    np.ndarray
        Float array of date serials in the same order as the input.

    Examples
    --------
    >>> datetime_to_serial(['2000-01-01 00:00'])
    array([730486.])
    >>> datetime_to_serial(['2018-10-01 12:00'])
    array([737334.5])
    """
    index = pd.DatetimeIndex(pd.to_datetime(timestamps))
    if len(index) == 0:
        return np.array([], dtype=float)
    julian = index.to_julian_date()
    return np.asarray(julian, dtype=float) - JULIAN_OFFSET


def serial_to_datetime(serials) -> pd.DatetimeIndex:
    """
    Convert date serials back to timestamps, rounded to the nearest second.
    """
    serials = np.asarray(serials, dtype=float)
    return pd.to_datetime(
        serials + JULIAN_OFFSET, unit='D', origin='julian'
    ).round('s')
