#!/usr/bin/env python3

"""
APRS packet parser: turns a TNC2 format line into an `APRSPacket`.
"""

import logging
import secrets
from datetime import datetime, timezone

from .datatype import APRSDataType, classify, legacy_type
from .errors import APRSDecodeError, InvalidPacket, InvalidUtf8
from .frame import split_frame, split_path, tokenize_callsign, \
        decode_digipeaters, SENDER_DELIMITER, BODY_DELIMITER, \
        PATH_DELIMITER
from .message import APRSMessagePayload
from .mice import decode_mice
from .normalise import normalise
from .objects import APRSObjectPayload, APRSItemPayload
from .payload import APRSStatusPayload, APRSCapabilitiesPayload, \
        APRSQueryPayload, APRSUserDefinedPayload, APRSThirdPartyPayload, \
        APRSRawGPSPayload, APRSPeetLoggingPayload, APRSTestDataPayload, \
        APRSRawPayload
from .phg import APRSPHGPayload, APRSDFPayload
from .position import decode_position_report, decode_timestamped_report
from .telemetry import APRSTelemetryPayload
from .weather import APRSWeatherPayload


def default_id_generator():
    """
    16 random bytes as 32 lower-case hex digits.
    """
    return secrets.token_hex(16)


def default_clock():
    return datetime.now(timezone.utc)


class APRSPacket(object):
    """
    A decoded APRS packet: the routing envelope, plus the decoded
    information field in `data_extended`.
    """
    def __init__(self, id, sender, base_callsign, ssid, destination, path,
            digipeaters, information_field, data_type, data_extended,
            received_at):
        self.id = id
        self.sender = sender
        self.base_callsign = base_callsign
        self.ssid = ssid
        self.destination = destination
        self.path = path
        self.digipeaters = digipeaters
        self.information_field = information_field
        self.data_type = data_type
        self.data_extended = data_extended
        self.received_at = received_at

    @property
    def header(self):
        header = self.sender + SENDER_DELIMITER + self.destination
        if self.path:
            header += PATH_DELIMITER + self.path
        return header

    @property
    def origpacket(self):
        return self.header + BODY_DELIMITER + self.information_field

    @property
    def type(self):
        return legacy_type(self.data_type)

    def record(self):
        """
        Return the packet as a flat dictionary.
        """
        return normalise(self)

    def __str__(self):
        return self.origpacket

    def __repr__(self): # pragma: no cover
        return '%s(%r, data_type=%s, data_extended=%r)' % (
                self.__class__.__name__, self.origpacket,
                self.data_type, self.data_extended
        )


def _payload(payload_class):
    """
    Handler for a payload that needs only its own data.
    """
    def _decode(data_type, destination, data, log):
        return payload_class.decode(data, log)
    return _decode


def _position(decoder):
    def _decode(data_type, destination, data, log):
        return decoder(data_type, data, log)
    return _decode


def _mice(data_type, destination, data, log):
    return decode_mice(destination, data, data_type, log)


def _empty(data_type, destination, data, log):
    return None


class APRSParser(object):
    """
    Decode TNC2 format APRS packets.  The parser holds no state between
    packets; the id generator and clock are injectable for repeatable
    output.
    """

    DATA_TYPE_HANDLERS = {
            APRSDataType.EMPTY:
                _empty,
            APRSDataType.POSITION:
                _position(decode_position_report),
            APRSDataType.POSITION_WITH_MESSAGE:
                _position(decode_position_report),
            APRSDataType.TIMESTAMPED_POSITION:
                _position(decode_timestamped_report),
            APRSDataType.TIMESTAMPED_POSITION_WITH_MESSAGE:
                _position(decode_timestamped_report),
            APRSDataType.MIC_E_OLD:
                _mice,
            APRSDataType.MESSAGE:
                _payload(APRSMessagePayload),
            APRSDataType.STATUS:
                _payload(APRSStatusPayload),
            APRSDataType.OBJECT:
                _payload(APRSObjectPayload),
            APRSDataType.ITEM:
                _payload(APRSItemPayload),
            APRSDataType.WEATHER:
                _payload(APRSWeatherPayload),
            APRSDataType.TELEMETRY:
                _payload(APRSTelemetryPayload),
            APRSDataType.RAW_GPS_ULTIMETER:
                _payload(APRSRawGPSPayload),
            APRSDataType.STATION_CAPABILITIES:
                _payload(APRSCapabilitiesPayload),
            APRSDataType.QUERY:
                _payload(APRSQueryPayload),
            APRSDataType.USER_DEFINED:
                _payload(APRSUserDefinedPayload),
            APRSDataType.PEET_LOGGING:
                _payload(APRSPeetLoggingPayload),
            APRSDataType.INVALID_TEST_DATA:
                _payload(APRSTestDataPayload),
            APRSDataType.PHG_DATA:
                _payload(APRSPHGPayload),
            APRSDataType.DF_REPORT:
                _payload(APRSDFPayload),
    }

    def __init__(self, log=None, id_generator=None, clock=None,
            # Maximum nesting of third-party packets
            max_tunnel_depth=3,
            # 'replace' or 'strict' handling of non UTF-8 input
            encoding_errors='replace'):
        if log is None:
            log = logging.getLogger(self.__class__.__module__)

        if encoding_errors not in ('replace', 'strict'):
            raise ValueError('encoding_errors must be "replace" or "strict"')

        self._log = log
        self._id_generator = id_generator or default_id_generator
        self._clock = clock or default_clock
        self._max_tunnel_depth = max_tunnel_depth
        self._encoding_errors = encoding_errors

    def parse(self, packet):
        """
        Parse a TNC2 format packet (`str` or `bytes`).  Raises an
        `APRSDecodeError` subclass if the packet structure is invalid;
        problems in the information field are reported in the payload.
        """
        text = self._decode_text(packet)
        try:
            return self._parse(text, 0)
        except APRSDecodeError:
            raise
        except Exception as e:
            self._log.warning('Failed to parse %r', text, exc_info=1)
            raise InvalidPacket('Parse exception') from e

    def _decode_text(self, packet):
        if isinstance(packet, bytes):
            try:
                return packet.decode('UTF-8')
            except UnicodeDecodeError:
                if self._encoding_errors == 'strict':
                    raise InvalidUtf8('Packet is not valid UTF-8')
                self._log.debug('Replacing non UTF-8 bytes in %r', packet)
                return ''.join(
                        chr(b) if b < 0x80 else '?' for b in packet
                )

        try:
            packet.encode('UTF-8')
        except UnicodeEncodeError:
            if self._encoding_errors == 'strict':
                raise InvalidUtf8('Packet cannot be encoded as UTF-8')
            self._log.debug('Replacing non UTF-8 characters in %r', packet)
            return ''.join(c if ord(c) < 0x80 else '?' for c in packet)
        return packet

    def _parse(self, text, depth):
        (sender, path, body) = split_frame(text)
        (base_callsign, ssid) = tokenize_callsign(sender)
        (destination, digipeater_path) = split_path(path)

        data_type = classify(body)
        if (destination == '') \
                and ((sender == '') or (data_type == APRSDataType.EMPTY)):
            raise InvalidPacket('Packet has no destination')

        information_field = body.strip()
        # The data type indicator is not part of the data
        data = information_field[1:]

        self._log.debug('%s>%s: %s data %r',
                sender, destination, data_type, data)
        data_extended = self._decode_data(data_type, destination, data, depth)

        if data_extended is not None:
            # The decoder may refine the type, e.g. position to weather
            data_type = data_extended.data_type

        return APRSPacket(
                id=self._id_generator(),
                sender=sender,
                base_callsign=base_callsign,
                ssid=ssid,
                destination=destination,
                path=digipeater_path,
                digipeaters=decode_digipeaters(digipeater_path),
                information_field=information_field,
                data_type=data_type,
                data_extended=data_extended,
                received_at=self._clock(),
        )

    def _decode_data(self, data_type, destination, data, depth):
        if data_type == APRSDataType.THIRD_PARTY_TRAFFIC:
            return self._decode_third_party(data, depth)

        handler = self.DATA_TYPE_HANDLERS.get(data_type)
        if handler is None:
            self._log.debug('No decoder for %s', data_type)
            return APRSRawPayload(data_type, data)
        return handler(data_type, destination, data, self._log)

    def _decode_third_party(self, data, depth):
        if depth + 1 > self._max_tunnel_depth:
            self._log.debug('Third-party tunnel too deep: %r', data)
            return APRSThirdPartyPayload(
                    data, error='Maximum tunnel depth exceeded'
            )

        try:
            inner = self._parse(data, depth + 1)
        except APRSDecodeError as e:
            self._log.debug('Invalid third-party packet %r: %s', data, e)
            return APRSThirdPartyPayload(
                    data, error='Invalid header: %s' % e
            )
        return APRSThirdPartyPayload(data, third_party_packet=inner)


def parse(packet, **kwargs):
    """
    Parse a packet with a parser built from the given keyword arguments.
    """
    return APRSParser(**kwargs).parse(packet)
