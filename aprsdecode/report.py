#!/usr/bin/env python3

"""
The decoded position report, shared by the uncompressed, compressed and
Mic-E decoders.
"""

from .payload import APRSPayload
from .unit import convertvalue, optionalquantity


class APRSPosition(APRSPayload):
    """
    A position report.  `has_position` is False when no co-ordinates
    could be decoded, in which case `data_type` says why.
    """
    FIELDS = APRSPayload.FIELDS + (
            'latitude', 'longitude', 'symbol_table_id', 'symbol_code',
            'timestamp', 'comment', 'compressed', 'position_ambiguity',
            'course', 'speed', 'altitude', 'dao', 'phg', 'radiorange',
            'has_position', 'aprs_messaging', 'compression_info', 'range',
            'telemetry', 'weather', 'posresolution', 'error_message',
    )

    SPEED_UNITS = "knot"
    ALTITUDE_UNITS = "foot"
    RANGE_UNITS = "mile"

    def __init__(self, data_type=None, latitude=None, longitude=None,
            symbol_table_id=None, symbol_code=None, timestamp=None,
            comment='', compressed=False, position_ambiguity=0,
            course=None, speed=None, altitude=None, dao=None, phg=None,
            radiorange=None, has_position=None, aprs_messaging=False,
            compression_info=None, range=None, telemetry=None,
            weather=None, posresolution=None, error_message=None):
        super(APRSPosition, self).__init__(data_type)
        if has_position is None:
            has_position = (latitude is not None) \
                    and (longitude is not None)

        self.latitude = latitude
        self.longitude = longitude
        self.symbol_table_id = symbol_table_id
        self.symbol_code = symbol_code
        self.timestamp = timestamp
        self.comment = comment
        self.compressed = compressed
        self.position_ambiguity = position_ambiguity
        self.course = course
        self.speed = convertvalue("speed", speed, self.SPEED_UNITS)
        self.altitude = convertvalue("altitude", altitude,
                self.ALTITUDE_UNITS)
        self.dao = dao
        self.phg = phg
        self.radiorange = radiorange
        self.has_position = has_position
        self.aprs_messaging = aprs_messaging
        self.compression_info = compression_info
        self.range = convertvalue("range", range, self.RANGE_UNITS)
        self.telemetry = telemetry
        self.weather = weather
        self.posresolution = posresolution
        self.error_message = error_message

    @classmethod
    def failed(cls, data_type, comment='', error_message=None, **kwargs):
        """
        A report that could not be decoded.
        """
        return cls(
                data_type=data_type, comment=comment,
                has_position=False, error_message=error_message, **kwargs
        )

    @property
    def speed_q(self):
        """
        Speed as a Pint quantity.
        """
        return optionalquantity(self.speed, self.SPEED_UNITS)

    @property
    def altitude_q(self):
        """
        Altitude as a Pint quantity.
        """
        return optionalquantity(self.altitude, self.ALTITUDE_UNITS)

    @property
    def range_q(self):
        """
        Radio range as a Pint quantity.
        """
        return optionalquantity(self.range, self.RANGE_UNITS)

    @property
    def symbol(self):
        if (self.symbol_table_id is None) or (self.symbol_code is None):
            return None
        return self.symbol_table_id + self.symbol_code
