#!/usr/bin/env python3

"""
Decoded information field contents.  Each payload class lists the fields
it reports in `FIELDS`; `fields()` returns exactly those.
"""

import re

from .datatype import APRSDataType
from .datetime import decode as decode_datetime, DHMUTCTimestamp
from .nmea import parse_nmea


class APRSPayload(object):
    """
    Base class for a decoded information field.
    """
    FIELDS = ('data_type',)

    def __init__(self, data_type):
        self.data_type = data_type

    def fields(self):
        return dict((name, getattr(self, name)) for name in self.FIELDS)

    def __repr__(self): # pragma: no cover
        return '%s(%s)' % (
                self.__class__.__name__,
                ', '.join(
                    '%s=%r' % (name, getattr(self, name))
                    for name in self.FIELDS
                )
        )


class APRSStatusPayload(APRSPayload):
    """
    Status report, optionally time-stamped (DDHHMMz only).
    """
    FIELDS = APRSPayload.FIELDS + ('status_text', 'timestamp')
    TIMESTAMP_RE = re.compile(r'^\d{6}z')

    @classmethod
    def decode(cls, data, log):
        timestamp = None
        if cls.TIMESTAMP_RE.match(data):
            timestamp = decode_datetime(data[0:DHMUTCTimestamp.TS_LENGTH])
            data = data[DHMUTCTimestamp.TS_LENGTH:]
            log.debug('Status report time-stamped %s', timestamp)
        return cls(data, timestamp)

    def __init__(self, status_text, timestamp=None):
        super(APRSStatusPayload, self).__init__(APRSDataType.STATUS)
        self.status_text = status_text
        self.timestamp = timestamp


class APRSCapabilitiesPayload(APRSPayload):
    """
    Station capabilities: a comma separated list of ``TOKEN`` or
    ``TOKEN=VALUE`` entries.
    """
    FIELDS = APRSPayload.FIELDS + ('capabilities', 'capability_tokens')

    @classmethod
    def decode(cls, data, log):
        tokens = {}
        for token in data.split(','):
            token = token.strip()
            if not token:
                continue
            (name, sep, value) = token.partition('=')
            tokens[name] = value if sep else None
        return cls(data, tokens)

    def __init__(self, capabilities, capability_tokens=None):
        super(APRSCapabilitiesPayload, self).__init__(
                APRSDataType.STATION_CAPABILITIES)
        self.capabilities = capabilities
        self.capability_tokens = capability_tokens or {}


class APRSQueryPayload(APRSPayload):
    """
    General query, e.g. ``?APRS?`` or ``?IGATE?``.
    """
    FIELDS = APRSPayload.FIELDS + ('query_type', 'query_data')
    QUERY_RE = re.compile(r'^([A-Za-z0-9]+)\?(.*)$')

    @classmethod
    def decode(cls, data, log):
        match = cls.QUERY_RE.match(data)
        if match:
            return cls(match.group(1), match.group(2))
        return cls(data[0:1], data[1:])

    def __init__(self, query_type, query_data=''):
        super(APRSQueryPayload, self).__init__(APRSDataType.QUERY)
        self.query_type = query_type
        self.query_data = query_data


# User ID of user-defined data to a format name
USER_DEFINED_FORMATS = {
        'A': 'experimental_a',
        'B': 'experimental_b',
        'C': 'custom_c',
}


class APRSUserDefinedPayload(APRSPayload):
    FIELDS = APRSPayload.FIELDS + ('user_id', 'format', 'content')

    @classmethod
    def decode(cls, data, log):
        user_id = data[0:1]
        return cls(
                user_id,
                USER_DEFINED_FORMATS.get(user_id, 'unknown'),
                data[1:]
        )

    def __init__(self, user_id, format, content):
        super(APRSUserDefinedPayload, self).__init__(
                APRSDataType.USER_DEFINED)
        self.user_id = user_id
        self.format = format
        self.content = content


class APRSThirdPartyPayload(APRSPayload):
    """
    Third-party traffic: a complete frame tunnelled inside the information
    field.  `third_party_packet` is the decoded inner frame, or None with
    `error` set if it could not be decoded.
    """
    FIELDS = APRSPayload.FIELDS + ('third_party_packet', 'error', 'raw_data')

    def __init__(self, raw_data, third_party_packet=None, error=None):
        super(APRSThirdPartyPayload, self).__init__(
                APRSDataType.THIRD_PARTY_TRAFFIC)
        self.raw_data = raw_data
        self.third_party_packet = third_party_packet
        self.error = error


class APRSRawGPSPayload(APRSPayload):
    """
    Raw GPS (NMEA) or Ultimeter data.
    """
    FIELDS = APRSPayload.FIELDS + ('nmea_type', 'error', 'raw_data')

    @classmethod
    def decode(cls, data, log):
        try:
            parse_nmea('$' + data)
        except NotImplementedError as e:
            log.debug('Raw GPS data not decoded: %s', e)
            return cls(data, error=str(e))
        # parse_nmea never returns at present
        return cls(data)

    def __init__(self, raw_data, nmea_type=None, error=None):
        super(APRSRawGPSPayload, self).__init__(
                APRSDataType.RAW_GPS_ULTIMETER)
        self.raw_data = raw_data
        self.nmea_type = nmea_type
        self.error = error


class APRSPeetLoggingPayload(APRSPayload):
    FIELDS = APRSPayload.FIELDS + ('peet_data',)

    @classmethod
    def decode(cls, data, log):
        return cls(data)

    def __init__(self, peet_data):
        super(APRSPeetLoggingPayload, self).__init__(
                APRSDataType.PEET_LOGGING)
        self.peet_data = peet_data


class APRSTestDataPayload(APRSPayload):
    FIELDS = APRSPayload.FIELDS + ('test_data',)

    @classmethod
    def decode(cls, data, log):
        return cls(data)

    def __init__(self, test_data):
        super(APRSTestDataPayload, self).__init__(
                APRSDataType.INVALID_TEST_DATA)
        self.test_data = test_data


class APRSRawPayload(APRSPayload):
    """
    Information field we do not decode any further.
    """
    FIELDS = APRSPayload.FIELDS + ('raw_data',)

    def __init__(self, data_type, raw_data):
        super(APRSRawPayload, self).__init__(data_type)
        self.raw_data = raw_data
