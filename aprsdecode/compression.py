#!/usr/bin/env python3

"""
Base91 arithmetic and the fixed-width fields of the APRS compressed
position format.
"""

from enum import Enum

from .unit import optionalquantity

BYTE_VALUE_OFFSET = 33
BYTE_VALUE_RADIX = 91
BYTE_VALUE_MAX = BYTE_VALUE_OFFSET + BYTE_VALUE_RADIX - 1

# Scale factors for the 4-byte coordinate fields
LATITUDE_SCALE = 380926
LONGITUDE_SCALE = 190463


def decompress(value):
    """
    Decode a base91 string into an integer.  Raises ValueError if any
    character falls outside the base91 alphabet.
    """
    length = len(value)
    total = 0
    for (i, char) in enumerate(value):
        b = ord(char)
        if (b < BYTE_VALUE_OFFSET) or (b > BYTE_VALUE_MAX):
            raise ValueError("Not a base91 character: %r" % char)
        total += (b - BYTE_VALUE_OFFSET) \
                * (BYTE_VALUE_RADIX ** (length - i - 1))
    return total


def _clamp(value, limit):
    return max(-limit, min(limit, value))


def decode_latitude(value):
    """
    Decode a 4-byte compressed latitude into decimal degrees.
    """
    if len(value) != 4:
        raise ValueError("Compressed latitude must be 4 bytes: %r" % value)
    return _clamp(90.0 - (decompress(value) / LATITUDE_SCALE), 90.0)


def decode_longitude(value):
    """
    Decode a 4-byte compressed longitude into decimal degrees.
    """
    if len(value) != 4:
        raise ValueError("Compressed longitude must be 4 bytes: %r" % value)
    return _clamp(-180.0 + (decompress(value) / LONGITUDE_SCALE), 180.0)


class GPSFixType(Enum):
    OTHER   = 'other'
    GLL_GGA = 'gll_gga'
    RMC     = 'rmc'


class CompressionInfo(object):
    """
    The compression type byte, reduced to the parts we report.
    """
    FIXTYPE_MASK    = 0b00000011
    RESOLUTION_MASK = 0b00011100
    RESOLUTION_SHIFT = 2
    OLDGPS_MASK     = 0b00100000
    MAX_RESOLUTION  = 4

    FIXTYPES = {
            0: GPSFixType.OTHER,
            1: GPSFixType.GLL_GGA,
            2: GPSFixType.RMC,
            3: GPSFixType.OTHER,
    }

    @classmethod
    def decode(cls, typechar):
        if typechar == " ":
            return cls(GPSFixType.OTHER, 0, False)

        typebyte = ord(typechar) - BYTE_VALUE_OFFSET
        if typebyte < 0:
            raise ValueError("Invalid compression type byte: %r" % typechar)

        resolution = (typebyte & cls.RESOLUTION_MASK) >> cls.RESOLUTION_SHIFT
        if resolution > cls.MAX_RESOLUTION:
            resolution = 0

        return cls(
                cls.FIXTYPES[typebyte & cls.FIXTYPE_MASK],
                resolution,
                bool(typebyte & cls.OLDGPS_MASK)
        )

    def __init__(self, gps_fix_type, position_resolution, old_gps_data,
            aprs_messaging=0):
        self.gps_fix_type = gps_fix_type
        self.position_resolution = position_resolution
        self.old_gps_data = old_gps_data
        self.aprs_messaging = aprs_messaging

    def __eq__(self, other):
        if not isinstance(other, CompressionInfo):
            return NotImplemented
        return self.fields() == other.fields()

    def fields(self):
        return dict(
                gps_fix_type=self.gps_fix_type,
                position_resolution=self.position_resolution,
                old_gps_data=self.old_gps_data,
                aprs_messaging=self.aprs_messaging
        )

    def __repr__(self): # pragma: no cover
        return (
                '%s(gps_fix_type=%r, position_resolution=%r, '
                'old_gps_data=%r)' % (
                    self.__class__.__name__,
                    self.gps_fix_type, self.position_resolution,
                    self.old_gps_data
                )
        )


class CourseSpeedRange(object):
    """
    The two byte course/speed or radio range field.
    """
    LENGTH = 2
    COURSE_SPEED_MAX = 89
    COURSE_SCALE = 4

    # this is in "knots".
    SPEED_UNITS = "knot"
    SPEED_RADIX = 1.08
    SPEED_OFFSET = -1

    # these values compute "miles".
    RANGE_UNITS = "mile"
    RANGE_HEADER = "Z"
    RANGE_SCALE = 2
    RANGE_RADIX = 1.08

    @classmethod
    def decode(cls, csvalue):
        """
        Decode the field, returning None if it carries no information.
        """
        if (len(csvalue) != cls.LENGTH) or (" " in csvalue):
            return None

        (c, s) = [ord(b) - BYTE_VALUE_OFFSET for b in csvalue]

        if csvalue[0] == cls.RANGE_HEADER:
            return cls(rng=cls.RANGE_SCALE * (cls.RANGE_RADIX ** s))
        elif 0 <= c <= cls.COURSE_SPEED_MAX:
            return cls(
                    course=cls.COURSE_SCALE * c,
                    speed=(cls.SPEED_RADIX ** s) + cls.SPEED_OFFSET
            )
        return None

    def __init__(self, course=None, speed=None, rng=None):
        self.course = course
        self.speed = speed
        self.rng = rng

    @property
    def speed_q(self):
        """
        Speed as a Pint quantity.
        """
        return optionalquantity(self.speed, self.SPEED_UNITS)

    @property
    def rng_q(self):
        """
        Range as a Pint quantity.
        """
        return optionalquantity(self.rng, self.RANGE_UNITS)

    def __repr__(self): # pragma: no cover
        return '%s(course=%r, speed=%r, rng=%r)' % (
                self.__class__.__name__, self.course, self.speed, self.rng
        )
