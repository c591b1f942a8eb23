"""
Observation Retrieval Utilities

Utility class for configuration management, logger creation and date
argument helpers.
"""

import configparser
import logging
import logging.config
from datetime import date, datetime
from pathlib import Path
from typing import Union


class Utils:
    """
    Utility class for configuration file management.

    Provides methods to read and parse the configuration file that defines
    the CDEC endpoint and the retrieval constants.

    Attributes
    ----------
    config_file : Path
        Path to the main configuration file (conf/cdec.conf)
    log_config_file : Path
        Path to the logging configuration file (conf/logging.conf)

    Examples
    --------
    >>> utils = Utils()
    >>> import logging
    >>> logger = logging.getLogger(__name__)
    >>> url_params = utils.read_config_section('urls', logger)
    >>> print(url_params['cdec_base_url'])
    https://cdec.water.ca.gov/dynamicapp/req/CSVDataServlet

    Notes
    -----
    The configuration file is expected to be in INI format with sections:

    [urls]
    cdec_base_url = https://cdec.water.ca.gov/dynamicapp/req/CSVDataServlet

    [retrieval]
    min_response_length = 100
    missing_threshold = -100
    timeout =
    """

    def __init__(self, config_file: Union[str, Path, None] = None):
        """
        Initialize Utils with path to configuration file.

        The default config file is located relative to the package root:
        <package_root>/conf/cdec.conf
        """
        # Navigate from src/cdec_obs/obs_retrieval/ up to project root
        root = Path(__file__).parent.parent.parent.parent
        if config_file is None:
            config_file = root / 'conf/cdec.conf'
        self.config_file = Path(config_file).resolve()
        self.log_config_file = (root / 'conf/logging.conf').resolve()

    def get_config_file(self) -> Path:
        """Get the path to the configuration file."""
        return self.config_file

    def read_config_section(
        self,
        section: str,
        logger: logging.Logger
    ) -> dict[str, str]:
        """
        Read a configuration file section and return as dictionary.

        Parameters
        ----------
        section : str
            Name of the section to read (e.g., 'urls', 'retrieval')
        logger : logging.Logger
            Logger instance for error reporting

        Returns
        -------
        Dict[str, str]
            Dictionary with configuration parameters from the section.
            Returns empty dict if section not found or file cannot be read.
        """
        params = {}
        config = configparser.ConfigParser()

        try:
            config.read(self.config_file)
            for option in config.options(section):
                params[option] = config.get(section, option)
        except configparser.NoSectionError as nse:
            logger.debug(
                "No section '%s' found reading %s: %s",
                section, self.config_file, nse,
            )
        except (OSError, configparser.Error) as ex:
            logger.error(
                'Config file could not be read: %s: %s',
                self.config_file, ex,
                exc_info=True
            )

        return params

    def validate_config(self, logger: logging.Logger) -> bool:
        """
        Validate that the configuration file exists and is readable.

        Returns
        -------
        bool
            True if configuration file exists and is readable, False otherwise
        """
        if not self.config_file.exists():
            logger.error('Configuration file not found: %s', self.config_file)
            return False

        if not self.config_file.is_file():
            logger.error(
                'Configuration path is not a file: %s', self.config_file)
            return False

        try:
            config = configparser.ConfigParser()
            config.read(self.config_file)
            logger.info('Configuration file validated: %s', self.config_file)
            return True
        except configparser.Error as e:
            logger.error(
                'Error reading configuration file: %s', e, exc_info=True)
            return False

    def get_logger(self) -> logging.Logger:
        """
        Create the root logger from conf/logging.conf.

        Falls back to a basic stderr configuration when the logging
        configuration file is not available (e.g. a non-editable install).
        """
        if self.log_config_file.is_file():
            logging.config.fileConfig(
                self.log_config_file, disable_existing_loggers=False)
        else:
            logging.basicConfig(
                level=logging.INFO,
                format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            )
        logger = logging.getLogger('root')
        logger.debug('Using config %s', self.config_file)
        return logger


def parse_date_argument(argument: Union[str, date, datetime]) -> date:
    """
    Parse a user-supplied date into a ``datetime.date``.

    Accepts date/datetime objects and strings in ``YYYY-MM-DD``,
    ``YYYYMMDD`` or ``MM/DD/YYYY`` format.

    Raises
    ------
    ValueError
        If the string matches none of the accepted formats.

    Examples
    --------
    >>> parse_date_argument('10/01/2010')
    datetime.date(2010, 10, 1)
    >>> parse_date_argument('2011-09-30')
    datetime.date(2011, 9, 30)
    """
    if isinstance(argument, datetime):
        return argument.date()
    if isinstance(argument, date):
        return argument

    text = str(argument).strip()
    for fmt in ('%Y-%m-%d', '%Y%m%d', '%m/%d/%Y'):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(
        f'Cannot parse date {argument!r}! Use YYYY-MM-DD, YYYYMMDD '
        f'or MM/DD/YYYY.'
    )


def parse_end_date(
    argument: Union[str, date, datetime]
) -> Union[str, date]:
    """
    Parse an end date argument, passing the ``now`` token through.

    Only the first three letters are compared, case-insensitively, so
    ``'Now'`` and ``'NOW'`` are both accepted.
    """
    if isinstance(argument, str) and argument.strip()[:3].lower() == 'now':
        return 'now'
    return parse_date_argument(argument)
