"""
Properties for CDEC observation retrieval.

This module defines the properties class used by retrieve_cdec_station.py
for managing the state of a single CSVDataServlet request.
"""

from datetime import date
from typing import Optional, Union


class CDECProperties:
    """
    Properties for CDEC CSVDataServlet interactions.

    Attributes:
        base_url: CDEC servlet base URL
        url: Complete request URL with parameters
        end_date: Resolved end date, either a date or 'now'
        min_response_length: Bodies shorter than this are treated as failures
        missing_threshold: Values below this are missing-data sentinels
        timeout: Request timeout in seconds, None to block
        text: Raw response body
    """

    def __init__(self):
        self.base_url: str = ''
        self.url: str = ''
        self.end_date: Union[date, str, None] = None
        self.min_response_length: int = 100
        self.missing_threshold: float = -100.0
        self.timeout: Optional[float] = None
        self.text: str = ''
