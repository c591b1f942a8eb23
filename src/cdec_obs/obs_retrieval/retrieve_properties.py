"""
Properties for retrieve station operations.

This module defines the properties class used to describe a CDEC sensor
query.
"""

from datetime import date
from typing import Union


class RetrieveProperties:
    """
    Query properties for CDEC station data retrieval.

    Attributes:
        station: Station identifier (e.g. 'TUM'); case-insensitive at CDEC
        dur_code: Duration code ('D' daily, 'H' hourly, 'E' event, 'M' monthly)
        sensor_num: Sensor number as text (e.g. '45')
        start_date: Start date for retrieval
        end_date: End date for retrieval, or 'now'
    """

    def __init__(self):
        self.station: str = ''
        self.dur_code: str = ''
        self.sensor_num: str = ''
        self.start_date: Union[date, str, None] = None
        self.end_date: Union[date, str, None] = None
