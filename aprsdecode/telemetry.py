#!/usr/bin/env python3

"""
APRS telemetry: ``T#`` reports and the base91 telemetry that may follow a
compressed position (``|ss1122|``).
"""

import re

from .compression import decompress
from .datatype import APRSDataType
from .payload import APRSPayload


class APRSTelemetry(object):
    """
    A telemetry sample: sequence, analogue values and (optionally) the
    digital bits as a string of 8 ``0``/``1`` characters.
    """
    def __init__(self, seq, vals, bits=None):
        self.seq = seq
        self.vals = vals
        self.bits = bits

    def fields(self):
        return dict(seq=self.seq, vals=self.vals, bits=self.bits)

    def __eq__(self, other):
        if not isinstance(other, APRSTelemetry):
            return NotImplemented
        return self.fields() == other.fields()

    def __repr__(self): # pragma: no cover
        return '%s(seq=%r, vals=%r, bits=%r)' % (
                self.__class__.__name__, self.seq, self.vals, self.bits
        )


ANALOG_CHANNELS = 5
DIGITAL_CHANNELS = 8
BITS_RE = re.compile(r'^[01]{8}$')


def _analog(value):
    try:
        return float(value)
    except ValueError:
        return None


class APRSTelemetryPayload(APRSPayload):
    """
    Telemetry report: ``T#sss,aaa,aaa,aaa,aaa,aaa,bbbbbbbb``.
    """
    FIELDS = APRSPayload.FIELDS + (
            'sequence_number', 'analog_values', 'digital_values',
            'telemetry', 'comment',
    )

    @classmethod
    def decode(cls, data, log):
        if data.startswith('#'):
            data = data[1:]

        parts = data.split(',')
        seq = parts[0].strip()
        analog = [_analog(v.strip()) for v in parts[1:ANALOG_CHANNELS + 1]]

        bits = None
        comment = ''
        if len(parts) > ANALOG_CHANNELS + 1:
            rest = ','.join(parts[ANALOG_CHANNELS + 1:])
            if BITS_RE.match(rest[0:DIGITAL_CHANNELS]):
                bits = rest[0:DIGITAL_CHANNELS]
                comment = rest[DIGITAL_CHANNELS:].strip()
            else:
                log.debug('Telemetry digital field not understood: %r', rest)
                comment = rest.strip()

        try:
            sequence_number = int(seq)
        except ValueError:
            # e.g. "MIC"
            sequence_number = None

        return cls(
                sequence_number=sequence_number,
                analog_values=analog,
                digital_values=[int(b) for b in bits] if bits else [],
                telemetry=APRSTelemetry(
                    seq,
                    [
                        ('%.2f' % v) if v is not None else None
                        for v in analog
                    ],
                    bits
                ),
                comment=comment
        )

    def __init__(self, sequence_number, analog_values, digital_values,
            telemetry, comment=''):
        super(APRSTelemetryPayload, self).__init__(APRSDataType.TELEMETRY)
        self.sequence_number = sequence_number
        self.analog_values = analog_values
        self.digital_values = digital_values
        self.telemetry = telemetry
        self.comment = comment


# Sequence, one to five analogue channels and an optional digital channel
COMMENT_TELEMETRY_RE = re.compile(
        r'\|([!-{]{2})((?:[!-{]{2}){1,6})\|'
)


def extract_comment_telemetry(comment):
    """
    Extract base91 comment telemetry.  Returns the telemetry (or None) and
    the comment with the telemetry removed.
    """
    match = COMMENT_TELEMETRY_RE.search(comment)
    if match is None:
        return (None, comment)

    seq = decompress(match.group(1))
    pairs = match.group(2)
    values = [decompress(pairs[i:i+2]) for i in range(0, len(pairs), 2)]

    bits = None
    if len(values) > ANALOG_CHANNELS:
        bits = format(values.pop() & 0xff, '08b')[::-1]

    comment = (comment[:match.start()] + comment[match.end():]).strip()
    return (APRSTelemetry(seq, values, bits), comment)
