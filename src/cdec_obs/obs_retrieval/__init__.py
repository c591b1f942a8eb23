"""
Observation Retrieval Subpackage

Provides functionality for:
- Retrieving sensor data from the California Data Exchange Center (CDEC)
- Parsing the CSV response and replacing missing-data sentinels
- Converting timestamps to date serials
- Configuration and logging setup
"""

# Results and errors
from cdec_obs.obs_retrieval.cdec_properties import CDECProperties
from cdec_obs.obs_retrieval.cdec_result import (
    CDECError,
    CDECParseError,
    CDECResult,
    CDECRetrievalError,
    CDECStatus,
)

# Date serials
from cdec_obs.obs_retrieval.date_serial import (
    datetime_to_serial,
    serial_to_datetime,
)

# Data retrieval functions
from cdec_obs.obs_retrieval.retrieve_cdec_station import (
    build_cdec_url,
    fetch_cdec_text,
    get_cdec,
    parse_cdec_csv,
    resolve_end_date,
    retrieve_cdec_station,
)

# Property classes
from cdec_obs.obs_retrieval.retrieve_properties import RetrieveProperties
from cdec_obs.obs_retrieval.utils import (
    Utils,
    parse_date_argument,
    parse_end_date,
)

__all__ = [
    # Utilities
    'Utils',
    'parse_date_argument',
    'parse_end_date',
    'datetime_to_serial',
    'serial_to_datetime',
    # Properties
    'RetrieveProperties',
    'CDECProperties',
    # Results
    'CDECError',
    'CDECParseError',
    'CDECRetrievalError',
    'CDECResult',
    'CDECStatus',
    # Data retrieval
    'build_cdec_url',
    'fetch_cdec_text',
    'get_cdec',
    'parse_cdec_csv',
    'resolve_end_date',
    'retrieve_cdec_station',
]
