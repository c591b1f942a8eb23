"""
-*- coding: utf-8 -*-

Documentation for Scripts get_cdec_station.py

Script Name: get_cdec_station.py

Abstract:

   This script retrieves one sensor time series from the California Data
   Exchange Center (CDEC) for a station, duration code and date range.
   Missing readings (CDEC sentinels below -100) are written as NaN and rows
   without a timestamp are dropped.

Language:  Python 3

Scripts/Programs Called:
 retrieve_cdec_station(retrieve_input, logger, verbose)
 --- This is called to request and parse the CDEC CSV data

Usage: python get_cdec_station.py -s TUM -d d -n 45 -b 10/01/2010 -e 9/30/2011

Arguments:
 -h, --help            show this help message and exit
 -s STATION, --Station STATION
                       CDEC station ID, e.g. 'TUM'
 -d DURCODE, --DurCode DURCODE
                       Duration code: d (daily), h (hourly), e (event)
 -n SENSORNUM, --SensorNum SENSORNUM
                       One- or two-digit sensor number
 -b STARTDATE, --StartDate STARTDATE
                       Start Date: YYYY-MM-DD or MM/DD/YYYY
 -e ENDDATE, --EndDate ENDDATE
                       End Date: YYYY-MM-DD, MM/DD/YYYY or 'now'
 -o OUTPUT, --Output OUTPUT
                       Output .csv file, stdout if omitted
 -v, --Verbose         Report failures on the command line

Output:
Name                 Description
OUTPUT               .csv file with DateTime, DateSerial and OBS columns

Remarks:
      Exits with status 1 when no data could be retrieved.
"""
# Libraries:
import argparse
import sys

from cdec_obs.obs_retrieval.retrieve_cdec_station import retrieve_cdec_station
from cdec_obs.obs_retrieval.retrieve_properties import RetrieveProperties
from cdec_obs.obs_retrieval.utils import (
    Utils,
    parse_date_argument,
    parse_end_date,
)


# Execution:
if __name__ == '__main__':
    # Arguments:
    # Parse (optional and required) command line arguments
    parser = argparse.ArgumentParser(
        prog='python get_cdec_station.py',
        usage='%(prog)s',
        description='CDEC Station Sensor Retrieval',
    )

    parser.add_argument(
        '-s',
        '--Station',
        required=True,
        help="CDEC station ID, e.g. 'TUM'",
    )
    parser.add_argument(
        '-d',
        '--DurCode',
        required=True,
        help="Duration code: 'd' daily, 'h' hourly, 'e' event (15-minute)",
    )
    parser.add_argument(
        '-n',
        '--SensorNum',
        required=True,
        help="One- or two-digit sensor number, e.g. '45'",
    )
    parser.add_argument(
        '-b',
        '--StartDate',
        required=True,
        type=parse_date_argument,
        help="Start Date: YYYY-MM-DD or MM/DD/YYYY e.g. '10/01/2010'",
    )
    parser.add_argument(
        '-e',
        '--EndDate',
        required=False,
        default='now',
        type=parse_end_date,
        help="End Date: YYYY-MM-DD, MM/DD/YYYY or 'now'",
    )
    parser.add_argument(
        '-o',
        '--Output',
        required=False,
        default=None,
        help='Output .csv file path, stdout if omitted',
    )
    parser.add_argument(
        '-v',
        '--Verbose',
        action='store_true',
        help='Report failures on the command line',
    )

    args = parser.parse_args()

    logger = Utils().get_logger()

    retrieve_input = RetrieveProperties()
    retrieve_input.station = args.Station
    retrieve_input.dur_code = args.DurCode
    retrieve_input.sensor_num = args.SensorNum
    retrieve_input.start_date = args.StartDate
    retrieve_input.end_date = args.EndDate

    result = retrieve_cdec_station(retrieve_input, logger, args.Verbose)
    if not result.ok:
        sys.exit(1)

    obs = result.to_dataframe()
    if args.Output is None:
        obs.to_csv(sys.stdout, index=False)
    else:
        obs.to_csv(args.Output, index=False)
        logger.info('%s observations saved to %s', len(obs), args.Output)
