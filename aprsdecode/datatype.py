#!/usr/bin/env python3

"""
APRS information field data types.
"""

from enum import Enum


class APRSDataType(Enum):
    """
    Kinds of APRS information field.  The first group is derived from the
    leading data type indicator (page 17 of the APRS 1.0.1 spec), the
    second group are the outcomes a payload decoder may report instead.
    """
    EMPTY                               = 'empty'
    UNKNOWN                             = 'unknown'
    MESSAGE                             = 'message'
    STATUS                              = 'status'
    POSITION                            = 'position'
    TIMESTAMPED_POSITION                = 'timestamped_position'
    POSITION_WITH_MESSAGE               = 'position_with_message'
    TIMESTAMPED_POSITION_WITH_MESSAGE   = 'timestamped_position_with_message'
    OBJECT                              = 'object'
    MIC_E_OLD                           = 'mic_e_old'
    WEATHER                             = 'weather'
    TELEMETRY                           = 'telemetry'
    RAW_GPS_ULTIMETER                   = 'raw_gps_ultimeter'
    STATION_CAPABILITIES                = 'station_capabilities'
    QUERY                               = 'query'
    USER_DEFINED                        = 'user_defined'
    THIRD_PARTY_TRAFFIC                 = 'third_party_traffic'
    ITEM                                = 'item'
    PEET_LOGGING                        = 'peet_logging'
    INVALID_TEST_DATA                   = 'invalid_test_data'
    PHG_DATA                            = 'phg_data'
    DF_REPORT                           = 'df_report'

    MALFORMED_POSITION                  = 'malformed_position'
    POSITION_ERROR                      = 'position_error'
    TIMESTAMPED_POSITION_ERROR          = 'timestamped_position_error'
    MIC_E_ERROR                         = 'mic_e_error'

    def __str__(self):
        return self.value


# First character of the information field
DATA_TYPE_INDICATORS = {
        ':':    APRSDataType.MESSAGE,
        '>':    APRSDataType.STATUS,
        '!':    APRSDataType.POSITION,
        '/':    APRSDataType.TIMESTAMPED_POSITION,
        '=':    APRSDataType.POSITION_WITH_MESSAGE,
        '@':    APRSDataType.TIMESTAMPED_POSITION_WITH_MESSAGE,
        ';':    APRSDataType.OBJECT,
        '`':    APRSDataType.MIC_E_OLD,
        "'":    APRSDataType.MIC_E_OLD,
        '_':    APRSDataType.WEATHER,
        'T':    APRSDataType.TELEMETRY,
        '$':    APRSDataType.RAW_GPS_ULTIMETER,
        '<':    APRSDataType.STATION_CAPABILITIES,
        '?':    APRSDataType.QUERY,
        '{':    APRSDataType.USER_DEFINED,
        '}':    APRSDataType.THIRD_PARTY_TRAFFIC,
        '%':    APRSDataType.ITEM,
        ')':    APRSDataType.ITEM,
        '*':    APRSDataType.PEET_LOGGING,
        ',':    APRSDataType.INVALID_TEST_DATA,
}

DF_REPORT_PREFIX = '#DFS'
PHG_PREFIX = '#'


def classify(body):
    """
    Identify the kind of information field.  Every input maps to a data
    type; unrecognised indicators give UNKNOWN.
    """
    if not body:
        return APRSDataType.EMPTY
    if body.startswith(DF_REPORT_PREFIX):
        return APRSDataType.DF_REPORT
    if body.startswith(PHG_PREFIX):
        return APRSDataType.PHG_DATA
    return DATA_TYPE_INDICATORS.get(body[0], APRSDataType.UNKNOWN)


# Broad categories reported in the `type` field of a decoded record
LEGACY_TYPES = {
        APRSDataType.POSITION:                          'location',
        APRSDataType.POSITION_WITH_MESSAGE:             'location',
        APRSDataType.TIMESTAMPED_POSITION:              'location',
        APRSDataType.TIMESTAMPED_POSITION_WITH_MESSAGE: 'location',
        APRSDataType.MIC_E_OLD:                         'location',
        APRSDataType.MIC_E_ERROR:                       'location',
        APRSDataType.MALFORMED_POSITION:                'location',
        APRSDataType.POSITION_ERROR:                    'location',
        APRSDataType.WEATHER:                           'wx',
        APRSDataType.STATION_CAPABILITIES:              'capabilities',
}


def legacy_type(data_type):
    return LEGACY_TYPES.get(data_type, data_type.value)
