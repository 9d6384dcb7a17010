#!/usr/bin/env python3

"""
Compressed position reports.

The standard layout is::

    0123456789012
    TYYYYXXXXCcst

T = symbol table, Y = latitude, X = longitude, C = symbol code,
cs = course/speed or range, t = compression type.  Real traffic also
carries variations on this: no table byte, a DAO datum marker (``&!``)
where the course/speed and type bytes would be, or an overlay table
without course/speed.  The variations overlap, so they are tried in a
fixed order and the first one whose shape fits is used.
"""

from .compression import decode_latitude, decode_longitude, \
        CompressionInfo, CourseSpeedRange
from .datatype import APRSDataType
from .extension import extract_dao
from .report import APRSPosition
from .telemetry import extract_comment_telemetry

PRIMARY_TABLE = '/'
BANG_TABLE = '!'
OVERLAY_TABLES = ('L', '\\')
DATUM_MARKER = '&!'
NO_COMPRESSION_TYPE = ' '

# Bytes in the full layout
FULL_LENGTH = 13
# Reports this long or longer are only compressed if they are not a valid
# uncompressed position, and only the unambiguous shapes apply.
UNCOMPRESSED_SHORT_LENGTH = 18

# Resolution of a compressed position, in metres
COMPRESSED_RESOLUTION = 0.291


class CompressedShape(object):
    """
    Where each field sits in one variation of the compressed layout.
    """
    def __init__(self, table, lat, lon, code, cs=None, ctype=None,
            comment=''):
        self.table = table
        self.lat = lat
        self.lon = lon
        self.code = code
        self.cs = cs
        self.ctype = ctype
        self.comment = comment

    def __repr__(self): # pragma: no cover
        return '%s(table=%r, lat=%r, lon=%r, code=%r, cs=%r, ctype=%r, ' \
                'comment=%r)' % (
                    self.__class__.__name__, self.table, self.lat,
                    self.lon, self.code, self.cs, self.ctype, self.comment
                )


def _short(data):
    return len(data) < UNCOMPRESSED_SHORT_LENGTH


def _datum_after_course(data):
    # Table, lat, lon, a lone course byte, code, then the datum marker.
    return CompressedShape(
            data[0], data[1:5], data[5:9], data[10],
            ctype=NO_COMPRESSION_TYPE, comment=data[11:]
    )


def _datum_in_place_of_course(data):
    return CompressedShape(
            PRIMARY_TABLE, data[1:5], data[5:9], data[9],
            ctype=NO_COMPRESSION_TYPE, comment=data[10:]
    )


def _primary_table(data):
    return CompressedShape(
            PRIMARY_TABLE, data[1:5], data[5:9], data[9],
            cs=data[10:12], ctype=data[12], comment=data[13:]
    )


def _overlay_table(data):
    return CompressedShape(
            data[0], data[1:5], data[5:9], data[9], comment=data[10:]
    )


def _datum_without_table(data):
    return CompressedShape(
            PRIMARY_TABLE, data[0:4], data[4:8], data[8],
            ctype=NO_COMPRESSION_TYPE, comment=data[9:]
    )


def _without_table(data):
    return CompressedShape(
            PRIMARY_TABLE, data[0:4], data[4:8], data[8],
            cs=data[9:11], ctype=data[11], comment=data[12:]
    )


# (name, predicate, layout), most specific first
COMPRESSED_SHAPES = (
        ('datum_after_course',
            lambda d: (FULL_LENGTH <= len(d)) and _short(d)
                and (d[11:13] == DATUM_MARKER),
            _datum_after_course),
        ('datum_in_place_of_course',
            lambda d: d.startswith(PRIMARY_TABLE)
                and (d[10:12] == DATUM_MARKER),
            _datum_in_place_of_course),
        ('primary_table',
            lambda d: d.startswith(PRIMARY_TABLE)
                and (len(d) >= FULL_LENGTH),
            _primary_table),
        ('bang_table',
            lambda d: d.startswith(BANG_TABLE)
                and (len(d) >= FULL_LENGTH) and _short(d),
            _primary_table),
        ('overlay_table',
            lambda d: d.startswith(OVERLAY_TABLES) and (len(d) >= 10),
            _overlay_table),
        ('datum_without_table',
            lambda d: (len(d) >= 11) and _short(d)
                and (d[9:11] == DATUM_MARKER),
            _datum_without_table),
        ('without_table',
            lambda d: (len(d) >= FULL_LENGTH)
                and not d.startswith(PRIMARY_TABLE),
            _without_table),
)


def match_shape(data):
    """
    Return the name and field layout of the first shape that fits, or
    (None, None).
    """
    for (name, predicate, layout) in COMPRESSED_SHAPES:
        if predicate(data):
            return (name, layout(data))
    return (None, None)


def decode_compressed(data, data_type, log, aprs_messaging=False):
    """
    Decode a compressed position.  Returns None if the data does not have
    the shape of a compressed position, or a POSITION_ERROR report if it
    has the shape but the co-ordinates will not decode.
    """
    (name, shape) = match_shape(data)
    if shape is None:
        return None
    log.debug('Compressed position shape %s: %r', name, shape)

    try:
        latitude = decode_latitude(shape.lat)
        longitude = decode_longitude(shape.lon)
    except ValueError as e:
        log.debug('Compressed co-ordinates did not decode: %s', e)
        return APRSPosition.failed(
                APRSDataType.POSITION_ERROR,
                error_message='Invalid compressed location: %s' % e,
                symbol_table_id=shape.table, symbol_code=shape.code,
                compressed=True, aprs_messaging=aprs_messaging
        )

    csr = CourseSpeedRange.decode(shape.cs) if shape.cs else None

    compression_info = None
    if shape.ctype is not None:
        try:
            compression_info = CompressionInfo.decode(shape.ctype)
        except ValueError:
            log.debug('Ignoring compression type %r', shape.ctype)

    (telemetry, comment) = extract_comment_telemetry(shape.comment)
    (dao, comment) = extract_dao(comment)

    return APRSPosition(
            data_type=data_type,
            latitude=latitude,
            longitude=longitude,
            symbol_table_id=shape.table,
            symbol_code=shape.code,
            comment=comment.strip(),
            compressed=True,
            position_ambiguity=compression_info.position_resolution
                if compression_info else 0,
            course=csr.course if csr else None,
            speed=csr.speed if csr else None,
            range=csr.rng if csr else None,
            dao=dao,
            aprs_messaging=aprs_messaging,
            compression_info=compression_info,
            telemetry=telemetry,
            posresolution=COMPRESSED_RESOLUTION,
    )
