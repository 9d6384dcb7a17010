#!/usr/bin/env python3

"""
Decode a stream of TNC2 lines, such as an APRS-IS feed or a log file,
announcing each packet on a signal.
"""

import logging

from .errors import APRSDecodeError
from .parser import APRSParser
from .signal import Signal

# APRS-IS server comments and keep-alives start with this
COMMENT_PREFIX = '#'


class APRSStreamDecoder(object):
    """
    Feed lines in, receive `APRSPacket`s out.  Lines that fail to decode
    are announced on `rejected` rather than raised.
    """
    def __init__(self, parser=None, log=None):
        if log is None:
            log = logging.getLogger(self.__class__.__module__)
        if parser is None:
            parser = APRSParser(log=log.getChild('parser'))

        self._log = log
        self._parser = parser

        # Signal fired when a packet is decoded: packet=APRSPacket
        self.received = Signal()

        # Signal fired when a line cannot be decoded: line=, error=
        self.rejected = Signal()

    def feed(self, line):
        """
        Decode a single line.  Returns the packet, or None if the line was
        skipped or rejected.
        """
        if isinstance(line, bytes):
            stripped = line.rstrip(b'\r\n')
            is_comment = stripped.startswith(COMMENT_PREFIX.encode())
        else:
            stripped = line.rstrip('\r\n')
            is_comment = stripped.startswith(COMMENT_PREFIX)

        if (not stripped.strip()) or is_comment:
            self._log.debug('Skipping line %r', line)
            return None

        try:
            packet = self._parser.parse(stripped)
        except APRSDecodeError as e:
            self._log.info('Rejected line %r: %s', stripped, e)
            self.rejected.emit(line=stripped, error=e)
            return None

        self._log.debug('Received %s', packet)
        self.received.emit(packet=packet)
        return packet

    def feed_lines(self, lines):
        """
        Decode every line of an iterable, returning the packets decoded.
        """
        packets = []
        for line in lines:
            packet = self.feed(line)
            if packet is not None:
                packets.append(packet)
        return packets
