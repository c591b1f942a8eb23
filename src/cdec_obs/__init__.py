"""
CDEC Observation Retrieval Package

Provides tools for:
- Building CDEC CSVDataServlet requests
- Retrieving station sensor time series
- Parsing and cleaning the CSV response into aligned value/date arrays
"""

__version__ = '1.0.0'

# Expose commonly used functionality at package level
from cdec_obs.obs_retrieval.cdec_result import CDECResult, CDECStatus
from cdec_obs.obs_retrieval.retrieve_cdec_station import (
    get_cdec,
    retrieve_cdec_station,
)

__all__ = [
    'CDECResult',
    'CDECStatus',
    'get_cdec',
    'retrieve_cdec_station',
]
