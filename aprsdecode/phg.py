#!/usr/bin/env python3

"""
Power-Height-Gain and DF (direction finding) reports.

Both are four digits: the first is the transmitter power (PHG) or the
received signal strength (DFS), then antenna height above average
terrain, antenna gain and directivity.
"""

import re

from .datatype import APRSDataType
from .payload import APRSPayload

PHG_RE = re.compile(r'^PHG(\d)(\d)(\d)(\d)(.*)$', re.DOTALL)
DFS_RE = re.compile(r'^DFS(\d)(\d)(\d)(\d)(.*)$', re.DOTALL)

INVALID_FORMAT = 'Invalid PHG/DFS format'

# Directivity digit to the bearing of maximum gain, 0 is omni-directional
DIRECTIVITY_BEARINGS = {
        0: (360, 'Omni'),
        1: (45, '45° NE'),
        2: (90, '90° E'),
        3: (135, '135° SE'),
        4: (180, '180° S'),
        5: (225, '225° SW'),
        6: (270, '270° W'),
        7: (315, '315° NW'),
        8: (360, '360° N'),
        9: (None, 'Undefined'),
}


def _digit(char, what):
    if (len(char) != 1) or not ('0' <= char <= '9'):
        raise ValueError('Unknown %s: %s' % (what, char))
    return int(char)


def decode_power(char):
    """
    Transmitter power: the digit squared, in watts.
    """
    power = _digit(char, 'power') ** 2
    return (power, '%d watt%s' % (power, '' if power == 1 else 's'))


def decode_height(char):
    """
    Antenna height above average terrain: 10 × 2ⁿ feet.
    """
    height = 10 * (2 ** _digit(char, 'height'))
    return (height, '%d feet' % height)


def decode_gain(char):
    """
    Antenna gain in dB.
    """
    gain = _digit(char, 'gain')
    return (gain, '%d dB' % gain)


def decode_directivity(char):
    return DIRECTIVITY_BEARINGS[_digit(char, 'directivity')]


def decode_strength(char):
    """
    DF signal strength, in S-points (3 dB each) above S0.
    """
    strength = _digit(char, 'strength')
    if strength == 0:
        return (0, '0 dB')
    return (strength, '%d dB above S0' % (strength * 3))


class APRSPHGPayload(APRSPayload):
    """
    A stand-alone station PHG report (``#PHGphgd``).
    """
    FIELDS = APRSPayload.FIELDS + (
            'phg', 'power', 'height', 'gain', 'directivity',
            'descriptions', 'comment', 'raw_data', 'error_message',
    )
    DATA_TYPE = APRSDataType.PHG_DATA
    CODE_RE = PHG_RE
    FIRST = ('power', decode_power)

    @classmethod
    def decode(cls, data, log):
        match = cls.CODE_RE.match(data)
        if match is None:
            log.debug('Invalid PHG/DFS report: %r', data)
            return cls(raw_data=data, error_message=INVALID_FORMAT)

        (first, decode_first) = cls.FIRST
        values = {}
        descriptions = {}
        for (name, decoder, digit) in zip(
                (first, 'height', 'gain', 'directivity'),
                (decode_first, decode_height, decode_gain,
                    decode_directivity),
                match.groups()[0:4]):
            (values[name], descriptions[name]) = decoder(digit)

        return cls(
                code=''.join(match.groups()[0:4]),
                descriptions=descriptions,
                comment=match.group(5).strip(),
                raw_data=data,
                **values
        )

    def __init__(self, code=None, power=None, height=None, gain=None,
            directivity=None, descriptions=None, comment='', raw_data='',
            error_message=None):
        super(APRSPHGPayload, self).__init__(self.DATA_TYPE)
        self.phg = code
        self.power = power
        self.height = height
        self.gain = gain
        self.directivity = directivity
        self.descriptions = descriptions or {}
        self.comment = comment
        self.raw_data = raw_data
        self.error_message = error_message


class APRSDFPayload(APRSPHGPayload):
    """
    A DF report (``#DFSshgd``): as PHG, with signal strength in place of
    power.
    """
    FIELDS = APRSPayload.FIELDS + (
            'dfs', 'df_strength', 'height', 'gain', 'directivity',
            'descriptions', 'comment', 'raw_data', 'error_message',
    )
    DATA_TYPE = APRSDataType.DF_REPORT
    CODE_RE = DFS_RE
    FIRST = ('df_strength', decode_strength)

    def __init__(self, code=None, df_strength=None, **kwargs):
        super(APRSDFPayload, self).__init__(code=code, **kwargs)
        self.dfs = self.phg
        self.df_strength = df_strength
