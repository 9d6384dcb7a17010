#!/usr/bin/env python3

"""
Mic-E position reports.

Mic-E splits a position across the frame: the destination "callsign"
carries the latitude digits, the message bits and three flags, while the
first 8 bytes of the information field carry longitude, speed, course
and symbol.
"""

import re

from .compression import decompress
from .datatype import APRSDataType
from .report import APRSPosition
from .unit import Quantity

DESTINATION_LENGTH = 6
INFORMATION_LENGTH = 8
# Offset applied to all information field bytes
BYTE_OFFSET = 28

# Destination characters.  Value is (digit, message bit, message type,
# ambiguous).
CUSTOM = 'custom'
STANDARD = 'standard'


def _destination_table():
    table = {}
    for (i, char) in enumerate('0123456789'):
        table[char] = (i, 0, None, False)
    for (i, char) in enumerate('ABCDEFGHIJ'):
        table[char] = (i, 1, CUSTOM, False)
    table['K'] = (0, 1, CUSTOM, True)
    table['L'] = (0, 0, None, True)
    for (i, char) in enumerate('PQRSTUVWXY'):
        table[char] = (i, 1, STANDARD, False)
    table['Z'] = (0, 1, STANDARD, True)
    return table

DESTINATION_CHARS = _destination_table()

# Characters 4, 5 and 6 set their flag when in this range
FLAG_CHARS = 'PQRSTUVWXYZ'
# Character 4 means south only as a digit or 'L'; A-K read as north
SOUTH_CHARS = '0123456789L'

# Message bits A, B, C to message name
STANDARD_MESSAGES = {
        (1, 1, 1): 'M0 Off Duty',
        (1, 1, 0): 'M1 En Route',
        (1, 0, 1): 'M2 In Service',
        (1, 0, 0): 'M3 Returning',
        (0, 1, 1): 'M4 Committed',
        (0, 1, 0): 'M5 Special',
        (0, 0, 1): 'M6 Priority',
}
CUSTOM_MESSAGES = {
        (1, 1, 1): 'C0 Custom-0',
        (1, 1, 0): 'C1 Custom-1',
        (1, 0, 1): 'C2 Custom-2',
        (1, 0, 0): 'C3 Custom-3',
        (0, 1, 1): 'C4 Custom-4',
        (0, 1, 0): 'C5 Custom-5',
        (0, 0, 1): 'C6 Custom-6',
}
EMERGENCY = 'Emergency'
UNKNOWN_MESSAGE = 'Unknown'

# Mic-E speed figure is converted from these units to knots
SPEED_SOURCE_UNITS = "mile / hour"
# Altitude is base91 metres above -10000m
ALTITUDE_OFFSET = 10000
ALTITUDE_SOURCE_UNITS = "metre"
ALTITUDE_RE = re.compile(r'^([!-{]{3})\}')

# Prefix bytes that precede the comment, and the device suffixes that go
# with them.
YAESU_PREFIXES = ('`', "'")
KENWOOD_PREFIXES = ('>', ']')
YAESU_SUFFIX_RE = re.compile(r'(_.|\(\d|\|\d|\^v|:\d|~v| X)$')
KENWOOD_SUFFIXES = ('=', '^')
NON_PRINTABLE_RE = re.compile(r'[\x00-\x1f\x7f]+$')
TELEMETRY_TAIL_RE = re.compile(r'_%.*$')
# A comment with less than half of these is encoded data, not text
READABLE_RE = re.compile(r'[a-zA-Z0-9 .,!?-]')
DATA_INDICATORS = (']', '=')


class APRSMicEPosition(APRSPosition):
    """
    A Mic-E position report, with the message decoded from the
    destination field.
    """
    FIELDS = APRSPosition.FIELDS + (
            'message_bits', 'message_type', 'message',
    )

    def __init__(self, message_bits=None, message_type=None, message=None,
            **kwargs):
        super(APRSMicEPosition, self).__init__(**kwargs)
        self.message_bits = message_bits
        self.message_type = message_type
        self.message = message


def decode_destination(destination):
    """
    Decode the destination field.  Returns a dict of latitude,
    position_ambiguity, message_bits, message_type, longitude_offset and
    west.  Raises ValueError if the field is not Mic-E encoded.
    """
    # The SSID is used for the digipeat path, not the position
    destination = destination.partition('-')[0]
    if len(destination) != DESTINATION_LENGTH:
        raise ValueError("Mic-E destination must be 6 characters: %r"
                % destination)

    try:
        decoded = [DESTINATION_CHARS[char] for char in destination]
    except KeyError as e:
        raise ValueError("Not a Mic-E destination character: %s" % e)

    digits = [d[0] for d in decoded]
    message_bits = tuple(d[1] for d in decoded[0:3])
    message_type = next(
            (d[2] for d in decoded[0:3] if d[2] is not None), None
    )
    ambiguity = sum(1 for d in decoded if d[3])

    latitude = (digits[0] * 10) + digits[1] + (
            (digits[2] * 10) + digits[3]
            + (((digits[4] * 10) + digits[5]) / 100.0)
    ) / 60.0
    if destination[3] in SOUTH_CHARS:
        latitude = -latitude

    return dict(
            latitude=latitude,
            position_ambiguity=ambiguity if ambiguity <= 4 else 0,
            message_bits=message_bits,
            message_type=message_type,
            longitude_offset=(destination[4] in FLAG_CHARS),
            west=(destination[5] in FLAG_CHARS),
    )


def decode_message(message_bits, types):
    """
    Name the message given by the message bits and the types of the
    destination characters that carried them.
    """
    if message_bits == (0, 0, 0):
        return EMERGENCY
    types = set(t for t in types if t is not None)
    if types == {STANDARD}:
        return STANDARD_MESSAGES[message_bits]
    if types == {CUSTOM}:
        return CUSTOM_MESSAGES[message_bits]
    return UNKNOWN_MESSAGE


def decode_information(data, longitude_offset, west):
    """
    Decode the fixed 8 bytes of information field.  Returns a dict of
    longitude, speed, course, symbol_code and symbol_table_id.
    """
    if len(data) < INFORMATION_LENGTH:
        raise ValueError("Mic-E information field too short: %r" % data)

    values = [ord(c) - BYTE_OFFSET for c in data[0:6]]
    if any(v < 0 for v in values):
        raise ValueError("Mic-E information field out of range: %r" % data)
    (degrees, minutes, hundredths, sp, dc, se) = values

    if longitude_offset:
        degrees += 100
    if 180 <= degrees <= 189:
        degrees -= 80
    elif 190 <= degrees <= 199:
        degrees -= 190

    if minutes >= 60:
        minutes -= 60

    longitude = degrees + ((minutes + (hundredths / 100.0)) / 60.0)
    if longitude > 180:
        raise ValueError("Mic-E longitude out of range: %r" % longitude)
    if west:
        longitude = -longitude

    speed = (sp * 10) + (dc // 10)
    if speed >= 800:
        speed -= 800
    course = ((dc % 10) * 100) + se
    if course >= 400:
        course -= 400

    return dict(
            longitude=longitude,
            speed=Quantity(speed, SPEED_SOURCE_UNITS),
            course=course,
            symbol_code=data[6],
            symbol_table_id=data[7],
    )


def _extract_altitude(comment):
    match = ALTITUDE_RE.match(comment)
    if match is None:
        return (None, comment)
    metres = decompress(match.group(1)) - ALTITUDE_OFFSET
    return (Quantity(metres, ALTITUDE_SOURCE_UNITS), comment[match.end():])


def is_encoded_data(comment):
    """
    Return True if what is left of a comment is encoded data rather than
    readable text.
    """
    if len(comment) <= 1:
        return True
    if comment.startswith(DATA_INDICATORS):
        return True
    return len(READABLE_RE.findall(comment)) < (len(comment) / 2.0)


def decode_comment(comment):
    """
    Separate the altitude and device markers from the human-readable
    comment.  Returns (altitude as a Pint quantity or None, comment).
    """
    comment = NON_PRINTABLE_RE.sub('', comment)
    comment = TELEMETRY_TAIL_RE.sub('', comment)
    (altitude, comment) = _extract_altitude(comment)

    if comment.startswith(YAESU_PREFIXES):
        comment = YAESU_SUFFIX_RE.sub('', comment[1:])
    elif comment.startswith(KENWOOD_PREFIXES):
        comment = comment[1:]
        if comment.endswith(KENWOOD_SUFFIXES):
            comment = comment[:-1]

    if altitude is None:
        # Altitude follows the device prefix
        (altitude, comment) = _extract_altitude(comment)

    if is_encoded_data(comment):
        return (altitude, '')
    return (altitude, comment.strip())


def decode_mice(destination, data, data_type, log):
    """
    Decode a Mic-E report.  Never raises for bad data: failures come back
    as a MIC_E_ERROR report.
    """
    try:
        dest = decode_destination(destination)
        info = decode_information(
                data, dest['longitude_offset'], dest['west']
        )
    except ValueError as e:
        log.debug('Mic-E decode failed: %s', e)
        return APRSMicEPosition.failed(
                APRSDataType.MIC_E_ERROR,
                error_message='Failed to parse Mic-E packet'
        )

    (altitude, comment) = decode_comment(data[INFORMATION_LENGTH:])
    types = [
            DESTINATION_CHARS[char][2]
            for char in destination.partition('-')[0][0:3]
    ]

    return APRSMicEPosition(
            data_type=data_type,
            latitude=dest['latitude'],
            longitude=info['longitude'],
            symbol_table_id=info['symbol_table_id'],
            symbol_code=info['symbol_code'],
            comment=comment,
            position_ambiguity=dest['position_ambiguity'],
            course=info['course'],
            speed=info['speed'],
            altitude=altitude,
            message_bits=dest['message_bits'],
            message_type=dest['message_type'],
            message=decode_message(dest['message_bits'], types),
    )
