#!/usr/bin/env python3

"""
NMEA sentence decoding.  Raw GPS data is recognised but not decoded.
"""


def parse_nmea(sentence):
    """
    Decode an NMEA sentence.  Not supported: always raises
    NotImplementedError.
    """
    raise NotImplementedError("NMEA parsing not implemented")
