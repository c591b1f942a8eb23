"""
Retrieve sensor time series from the California Data Exchange Center (CDEC).

This module builds a CSVDataServlet request for one station, sensor and
duration code, performs a single HTTP GET, and parses the CSV response into
a value array aligned with a date serial array.

The CSV response has one header line and nine columns:

    STATION_ID, DURATION, SENSOR_NUMBER, SENS_TYPE, DATE TIME,
    OBS DATE, VALUE, DATA_FLAG, UNITS

Only DATE TIME (5th column) and VALUE (7th column) are used. Rows without a
timestamp are dropped and readings below -100 (e.g. -9999) are CDEC
missing-data sentinels, replaced with NaN.

Examples:
    Daily incremental precipitation for Tuolumne Meadows, water year 2011:

    >>> values, dates = get_cdec('TUM', 'd', '45', '10/01/2010', '9/30/2011')

    Event (15-minute) air temperature for Moccasin through the latest entry:

    >>> values, dates = get_cdec('mhh', 'e', '4', '10/01/2017', 'now')
"""

import http.client
import io
import logging
import ssl
import urllib.parse
import urllib.request
from datetime import date, datetime
from logging import Logger
from typing import Optional, Union
from urllib.error import HTTPError

import numpy as np
import pandas as pd

from cdec_obs.obs_retrieval import cdec_properties, date_serial, utils
from cdec_obs.obs_retrieval.cdec_result import (
    CDECParseError,
    CDECResult,
    CDECRetrievalError,
    CDECStatus,
)
from cdec_obs.obs_retrieval.retrieve_properties import RetrieveProperties

CDEC_BASE_URL = 'https://cdec.water.ca.gov/dynamicapp/req/CSVDataServlet'

# Responses shorter than this are CDEC "no data" or error pages
MIN_RESPONSE_LENGTH = 100
# Readings below this are missing-data sentinels
MISSING_THRESHOLD = -100.0

# Zero-based positions of DATE TIME and VALUE in the CSV rows
DATE_COLUMN = 4
VALUE_COLUMN = 6
N_COLUMNS = 9

CATCH_STR = (
    '**cannot find cdec vars with specified parameters**\n'
    '**please check syntax or try again later**'
)


def resolve_end_date(
    end_date: Union[str, date, datetime],
    today: Optional[date] = None
) -> Union[str, date]:
    """
    Resolve the end of the requested range.

    Returns 'now' for the ``now`` token and for any date falling on the
    current day, so the request asks CDEC for everything through the latest
    entry. Any other value is returned as a ``datetime.date``.

    Args:
        end_date: Date, datetime, date string or 'now'
        today: Current day, defaults to ``date.today()``

    Returns:
        'now' or the end date
    """
    resolved = utils.parse_end_date(end_date)
    if resolved == 'now':
        return 'now'
    if today is None:
        today = date.today()
    if resolved == today:
        return 'now'
    return resolved


def build_cdec_url(
    base_url: str,
    station: str,
    dur_code: str,
    sensor_num: Union[str, int],
    start_date: Union[str, date, datetime],
    end_date: Union[str, date],
) -> str:
    """
    Build the CSVDataServlet request URL.

    Args:
        base_url: Servlet endpoint
        station: Station identifier
        dur_code: Duration code
        sensor_num: Sensor number
        start_date: Start of the range
        end_date: End of the range, a date or 'now'

    Returns:
        Request URL. The end date is sent as ``end_date=Now`` when the
        range runs through the present.
    """
    start_str = utils.parse_date_argument(start_date).strftime('%Y-%m-%d')
    if end_date == 'now':
        end_str = 'Now'
    else:
        end_str = utils.parse_date_argument(end_date).strftime('%Y-%m-%d')

    query = urllib.parse.urlencode({
        'Stations': str(station).strip(),
        'SensorNums': str(sensor_num).strip(),
        'dur_code': str(dur_code).strip(),
        'Start': start_str,
        'end_date': end_str,
    })
    return f'{base_url}?{query}'


def get_HTTP_error(ex: HTTPError) -> str:
    """
    Read the body of an HTTP error response for logging.

    Args:
        ex: HTTPError exception from urllib

    Returns:
        Error body text, or a default message if it cannot be read
    """
    try:
        error_msg = ex.read().decode(errors='replace').strip()
    except (OSError, AttributeError):
        error_msg = ''
    return error_msg or 'No additional error message available.'


def fetch_cdec_text(
    url: str,
    logger: Logger,
    timeout: Optional[float] = None
) -> str:
    """
    Perform a single HTTP GET against CDEC and return the response body.

    Certificate verification is disabled for this request. There is no
    retry.

    Args:
        url: Request URL
        logger: Logger instance for logging messages
        timeout: Socket timeout in seconds, None to block

    Returns:
        Decoded response body

    Raises:
        CDECRetrievalError: On DNS, connection, timeout or HTTP errors
    """
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE

    kwargs = {'context': context}
    if timeout is not None:
        kwargs['timeout'] = timeout

    logger.debug('Requesting %s', url)
    try:
        with urllib.request.urlopen(url, **kwargs) as response:
            charset = response.headers.get_content_charset() or 'utf-8'
            body = response.read()
    except HTTPError as ex:
        raise CDECRetrievalError(
            f'HTTP {ex.code} {ex.reason}: {get_HTTP_error(ex)}'
        ) from ex
    except (OSError, http.client.HTTPException) as ex:
        raise CDECRetrievalError(str(ex)) from ex

    try:
        return body.decode(charset, errors='replace')
    except LookupError:
        logger.debug('Unknown charset %s, decoding as utf-8', charset)
        return body.decode('utf-8', errors='replace')


def parse_cdec_csv(
    text: str,
    missing_threshold: float = MISSING_THRESHOLD
) -> tuple[np.ndarray, np.ndarray, pd.DatetimeIndex]:
    """
    Parse a CDEC CSV payload into aligned arrays.

    Args:
        text: Response body including the header line
        missing_threshold: Readings below this become NaN

    Returns:
        Tuple of (values, dates, datetimes):
            - values: float array, NaN where missing or unparseable
            - dates: float array of date serials
            - datetimes: DatetimeIndex of the same timestamps

    Raises:
        CDECParseError: If the rows do not have the expected columns or
            a timestamp is not in YYYYMMDDHHMM form
    """
    try:
        table = pd.read_csv(
            io.StringIO(text),
            header=None,
            names=range(N_COLUMNS),
            index_col=False,
            skiprows=1,
            dtype=str,
            keep_default_na=False,
        )
    except pd.errors.EmptyDataError:
        table = pd.DataFrame(columns=range(N_COLUMNS))
    except pd.errors.ParserError as ex:
        raise CDECParseError(f'Cannot read CDEC CSV: {ex}') from ex

    # Short rows are padded with NaN; none reaching VALUE means no CSV at all
    if len(table) and table.iloc[:, VALUE_COLUMN].isna().all():
        raise CDECParseError(
            f'Expected {N_COLUMNS} columns in CDEC CSV, '
            f'no row reaches column {VALUE_COLUMN + 1}'
        )

    stamps = (
        table.iloc[:, DATE_COLUMN]
        .fillna('')
        .astype(str)
        .str.replace(' ', '', regex=False)
    )
    keep = stamps != ''
    stamps = stamps[keep]

    values = np.array(
        pd.to_numeric(table.iloc[:, VALUE_COLUMN][keep], errors='coerce'),
        dtype=float,
    )
    values[values < missing_threshold] = np.nan

    try:
        datetimes = pd.DatetimeIndex(
            pd.to_datetime(stamps, format='%Y%m%d%H%M'))
    except ValueError as ex:
        raise CDECParseError(f'Bad CDEC timestamp: {ex}') from ex

    return values, date_serial.datetime_to_serial(datetimes), datetimes


def get_cdec_properties(
    logger: Logger,
    config: Optional[utils.Utils] = None
) -> cdec_properties.CDECProperties:
    """
    Load the servlet URL and retrieval constants from conf/cdec.conf.

    Missing or non-numeric options fall back to the module defaults.
    """
    cdec = cdec_properties.CDECProperties()
    if config is None:
        config = utils.Utils()
    url_params = config.read_config_section('urls', logger)
    cdec.base_url = url_params.get('cdec_base_url') or CDEC_BASE_URL

    params = config.read_config_section('retrieval', logger)
    cdec.min_response_length = int(_config_number(
        params, 'min_response_length', MIN_RESPONSE_LENGTH, logger))
    cdec.missing_threshold = _config_number(
        params, 'missing_threshold', MISSING_THRESHOLD, logger)
    cdec.timeout = _config_number(params, 'timeout', None, logger)
    return cdec


def _config_number(
    params: dict[str, str],
    option: str,
    default: Optional[float],
    logger: Logger
) -> Optional[float]:
    value = params.get(option)
    if not value:
        return default
    try:
        number = float(value)
        if not np.isfinite(number):
            raise ValueError(value)
        return number
    except ValueError:
        logger.warning(
            'Invalid %s %r in config, using %s', option, value, default)
        return default


def retrieve_cdec_station(
    retrieve_input: RetrieveProperties,
    logger: Logger,
    verbose: bool = False,
    today: Optional[date] = None
) -> CDECResult:
    """
    Retrieve a CDEC sensor time series.

    Args:
        retrieve_input: Object with attributes:
            - station: Station ID
            - dur_code: Duration code
            - sensor_num: Sensor number
            - start_date: Start date
            - end_date: End date or 'now'
        logger: Logger instance for logging messages
        verbose: Log the fixed diagnostic message when the retrieval fails
        today: Current day used to resolve same-day end dates

    Returns:
        CDECResult. Failures are reported through its status and never
        raised:
            - TRANSPORT_ERROR: the request failed
            - NO_DATA: the response was shorter than 100 characters
            - MALFORMED_RESPONSE: the response could not be parsed

    Raises:
        ValueError: If a date argument cannot be parsed
    """
    cdec = get_cdec_properties(logger)

    cdec.end_date = resolve_end_date(retrieve_input.end_date, today)
    cdec.url = build_cdec_url(
        cdec.base_url,
        retrieve_input.station,
        retrieve_input.dur_code,
        retrieve_input.sensor_num,
        retrieve_input.start_date,
        cdec.end_date,
    )

    try:
        cdec.text = fetch_cdec_text(cdec.url, logger, cdec.timeout)
    except CDECRetrievalError as ex:
        return _failure(
            CDECStatus.TRANSPORT_ERROR, cdec.url, str(ex), logger, verbose)

    if len(cdec.text) < cdec.min_response_length:
        return _failure(
            CDECStatus.NO_DATA, cdec.url,
            f'Response shorter than {cdec.min_response_length} characters',
            logger, verbose)

    logger.info(
        'CDEC station %s contacted for sensor %s retrieval.',
        retrieve_input.station, retrieve_input.sensor_num)

    try:
        values, dates, datetimes = parse_cdec_csv(
            cdec.text, cdec.missing_threshold)
    except CDECParseError as ex:
        return _failure(
            CDECStatus.MALFORMED_RESPONSE, cdec.url, str(ex), logger, verbose)

    return CDECResult(
        CDECStatus.SUCCESS,
        url=cdec.url,
        values=values,
        dates=dates,
        datetimes=datetimes,
    )


def get_cdec(
    station: str,
    dur_code: str,
    sensor_num: Union[str, int],
    start_date: Union[str, date, datetime],
    end_date: Union[str, date, datetime],
    verbose: bool = False,
    logger: Optional[Logger] = None
) -> tuple:
    """
    Retrieve CDEC data as a ``(values, dates)`` pair.

    Args:
        station: Station identification, e.g. 'TUM'
        dur_code: Duration code, e.g. 'd' daily, 'e' event (15-minute)
        sensor_num: One- or two-digit sensor number
        start_date: Beginning date (date, 'YYYY-MM-DD' or 'MM/DD/YYYY')
        end_date: Ending date in the same forms, or 'now'
        verbose: Log the fixed diagnostic message on failure
        logger: Logger instance, defaults to this module's logger

    Returns:
        (values, dates) float arrays of equal length, or (None, None) if
        the retrieval failed.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    retrieve_input = RetrieveProperties()
    retrieve_input.station = station
    retrieve_input.dur_code = dur_code
    retrieve_input.sensor_num = str(sensor_num)
    retrieve_input.start_date = start_date
    retrieve_input.end_date = end_date

    return retrieve_cdec_station(retrieve_input, logger, verbose).as_tuple()


def _failure(
    status: CDECStatus,
    url: str,
    message: str,
    logger: Logger,
    verbose: bool
) -> CDECResult:
    if verbose:
        logger.error(CATCH_STR)
    return CDECResult(status, url=url, message=message)
