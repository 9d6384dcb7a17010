#!/usr/bin/env python3

"""
Decoder for APRS packets in TNC2 text format.
"""

from .errors import APRSDecodeError, NoSenderDelimiter, NoBodyDelimiter, \
        InvalidCallsign, InvalidUtf8, InvalidPacket
from .datatype import APRSDataType
from .parser import APRSParser, APRSPacket, parse
from .stream import APRSStreamDecoder

__version__ = '0.1.0'
