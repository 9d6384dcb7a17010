#!/usr/bin/env python3

"""
End-to-end packet parser tests.
"""

import re
from datetime import datetime, timezone

from pytest import raises

from aprsdecode import parse
from aprsdecode.datatype import APRSDataType
from aprsdecode.errors import APRSDecodeError, NoSenderDelimiter, \
        NoBodyDelimiter, InvalidCallsign, InvalidPacket, InvalidUtf8
from aprsdecode.frame import APRSDigipeater
from aprsdecode.parser import APRSParser, APRSPacket
from aprsdecode.payload import APRSRawPayload


RECEIVED_AT = datetime(2022, 2, 12, 22, 2, 23, tzinfo=timezone.utc)
POSITION_PACKET = \
        'N0CALL>APRS,TCPIP*,qAC,T2TEST:=1234.56N/12345.67W-Test message'


def make_parser(logger, **kwargs):
    return APRSParser(
            log=logger,
            id_generator=lambda : 'packet-id',
            clock=lambda : RECEIVED_AT,
            **kwargs
    )


def test_parse_position(logger):
    """
    Test a position report decodes fully.
    """
    packet = make_parser(logger).parse(POSITION_PACKET)
    assert isinstance(packet, APRSPacket)
    assert packet.id == 'packet-id'
    assert packet.received_at == RECEIVED_AT
    assert packet.sender == 'N0CALL'
    assert packet.base_callsign == 'N0CALL'
    assert packet.ssid is None
    assert packet.destination == 'APRS'
    assert packet.path == 'TCPIP*,qAC,T2TEST'
    assert packet.digipeaters == [
            APRSDigipeater('TCPIP', True),
            APRSDigipeater('qAC', False),
            APRSDigipeater('T2TEST', False),
    ]
    assert packet.information_field == '=1234.56N/12345.67W-Test message'
    assert packet.data_type == APRSDataType.POSITION_WITH_MESSAGE
    assert packet.type == 'location'

    position = packet.data_extended
    assert abs(position.latitude - 12.576) < 1e-6
    assert abs(position.longitude - -123.761167) < 1e-6
    assert position.symbol_table_id == '/'
    assert position.symbol_code == '-'
    assert position.comment == 'Test message'
    assert position.aprs_messaging


def test_parse_reconstructs_packet(logger):
    """
    Test the original packet can be rebuilt from the decoded envelope.
    """
    packet = make_parser(logger).parse(POSITION_PACKET)
    assert packet.header == 'N0CALL>APRS,TCPIP*,qAC,T2TEST'
    assert packet.origpacket == POSITION_PACKET
    assert str(packet) == POSITION_PACKET


def test_parse_record(logger):
    """
    Test the flattened record of a position report.
    """
    record = make_parser(logger).parse(POSITION_PACKET).record()
    assert record['id'] == 'packet-id'
    assert record['srccallsign'] == 'N0CALL'
    assert record['dstcallsign'] == 'APRS'
    assert record['body'] == '=1234.56N/12345.67W-Test message'
    assert record['origpacket'] == POSITION_PACKET
    assert record['type'] == 'location'
    assert record['data_type'] == 'position_with_message'
    assert record['format'] == 'uncompressed'
    assert record['messaging'] == 1
    assert record['posambiguity'] == 0
    assert record['symboltable'] == '/'
    assert record['symbolcode'] == '-'
    assert record['alive'] == 1
    assert record['digipeaters'][0] == dict(call='TCPIP', wasdigied=1)
    assert record['data_extended']['comment'] == 'Test message'


def test_parse_ssid(logger):
    """
    Test the sender SSID is split from the base callsign.
    """
    packet = make_parser(logger).parse('VK4MSL-10>APRS:>Hello')
    assert packet.base_callsign == 'VK4MSL'
    assert packet.ssid == '10'
    assert packet.path == ''
    assert packet.digipeaters == []


def test_parse_no_sender_delimiter(logger):
    with raises(NoSenderDelimiter):
        make_parser(logger).parse('N0CALL:>Hello')


def test_parse_no_body_delimiter(logger):
    with raises(NoBodyDelimiter):
        make_parser(logger).parse('N0CALL>APRS')


def test_parse_no_sender(logger):
    """
    Test an empty sender is rejected.
    """
    with raises(InvalidCallsign):
        make_parser(logger).parse('>APRS:!x')


def test_parse_no_destination(logger):
    """
    Test a packet with neither destination nor body is rejected.
    """
    with raises(InvalidPacket):
        make_parser(logger).parse('N0CALL>:')


def test_parse_no_destination_with_body(logger):
    """
    Test a missing destination is tolerated when there is a body.
    """
    packet = make_parser(logger).parse('N0CALL>:>status')
    assert packet.destination == ''
    assert packet.data_type == APRSDataType.STATUS
    assert packet.data_extended.status_text == 'status'


def test_parse_empty_body(logger):
    """
    Test an empty information field has no payload.
    """
    packet = make_parser(logger).parse('N0CALL>APRS:')
    assert packet.data_type == APRSDataType.EMPTY
    assert packet.data_extended is None
    assert packet.record()['type'] == 'empty'


def test_parse_unknown_type(logger):
    """
    Test an unrecognised data type is kept as raw data.
    """
    packet = make_parser(logger).parse('N0CALL>APRS:xhello')
    assert packet.data_type == APRSDataType.UNKNOWN
    assert isinstance(packet.data_extended, APRSRawPayload)
    assert packet.data_extended.raw_data == 'hello'


def test_parse_bytes(logger):
    """
    Test UTF-8 bytes are decoded.
    """
    packet = make_parser(logger).parse('N0CALL>APRS:>café'.encode('UTF-8'))
    assert packet.data_extended.status_text == 'café'


def test_parse_bad_utf8(logger):
    """
    Test invalid UTF-8 is replaced by default.
    """
    packet = make_parser(logger).parse(b'N0CALL>APRS:>caf\xe9')
    assert packet.data_extended.status_text == 'caf?'


def test_parse_bad_utf8_strict(logger):
    """
    Test invalid UTF-8 raises in strict mode.
    """
    with raises(InvalidUtf8):
        make_parser(logger, encoding_errors='strict').parse(
                b'N0CALL>APRS:>caf\xe9')


def test_parse_surrogates(logger):
    """
    Test text that cannot be encoded as UTF-8 is replaced.
    """
    packet = make_parser(logger).parse('N0CALL>APRS:>a\udcff')
    assert packet.data_extended.status_text == 'a?'

    with raises(InvalidUtf8):
        make_parser(logger, encoding_errors='strict').parse(
                'N0CALL>APRS:>a\udcff')


def test_parser_bad_encoding_errors():
    with raises(ValueError):
        APRSParser(encoding_errors='ignore')


def test_parse_third_party(logger):
    """
    Test third-party traffic decodes the inner packet.
    """
    packet = make_parser(logger).parse(
            'N0CALL>APRS:}W1AW>APRS,TCPIP,N0CALL*:>hello')
    assert packet.data_type == APRSDataType.THIRD_PARTY_TRAFFIC
    payload = packet.data_extended
    assert payload.error is None
    inner = payload.third_party_packet
    assert inner.sender == 'W1AW'
    assert inner.data_type == APRSDataType.STATUS
    assert inner.data_extended.status_text == 'hello'

    record = packet.record()
    assert record['third_party_packet']['srccallsign'] == 'W1AW'


def test_parse_third_party_depth(logger):
    """
    Test nesting beyond the tunnel depth is reported, not decoded.
    """
    packet = make_parser(logger, max_tunnel_depth=1).parse(
            'N0CALL>APRS:}W1AW>APRS:}W2AW>APRS:>hello')
    inner = packet.data_extended.third_party_packet
    assert inner.sender == 'W1AW'
    assert inner.data_extended.third_party_packet is None
    assert inner.data_extended.error == 'Maximum tunnel depth exceeded'


def test_parse_third_party_invalid(logger):
    """
    Test an undecodable inner packet is reported.
    """
    packet = make_parser(logger).parse('N0CALL>APRS:}garbage')
    assert packet.data_extended.third_party_packet is None
    assert packet.data_extended.error.startswith('Invalid header: ')
    assert packet.data_extended.raw_data == 'garbage'


class FailingParser(APRSParser):
    """
    Parser whose status decoder fails unexpectedly.
    """
    DATA_TYPE_HANDLERS = dict(APRSParser.DATA_TYPE_HANDLERS)

    @staticmethod
    def _fail(data_type, destination, data, log):
        raise RuntimeError('decoder bug')

FailingParser.DATA_TYPE_HANDLERS[APRSDataType.STATUS] = FailingParser._fail


def test_parse_unexpected_exception(logger):
    """
    Test unexpected exceptions are logged and wrapped.
    """
    parser = FailingParser(log=logger)
    with raises(InvalidPacket) as e:
        parser.parse('N0CALL>APRS:>Hello')

    assert str(e.value) == 'Parse exception'
    assert isinstance(e.value.__cause__, RuntimeError)
    assert isinstance(e.value, APRSDecodeError)

    warnings = logger.records('warning')
    assert len(warnings) == 1
    assert warnings[0]['ex_type'] is RuntimeError


def test_parse_weather(logger):
    """
    Test a positionless weather report flattens its observations.
    """
    packet = make_parser(logger).parse(
            'N0CALL>APRS:_10090556c220s004g005t077r000p000P000h50b09900wRSW')
    assert packet.data_type == APRSDataType.WEATHER
    record = packet.record()
    assert record['type'] == 'wx'
    assert record['wind_direction'] == 220
    assert record['temperature'] == 77
    assert record['wx']['humidity'] == 50
    assert 'timestamp' not in record['wx']


def test_parse_position_weather(logger):
    """
    Test a position carrying weather becomes a weather report.
    """
    packet = make_parser(logger).parse(
            'N0CALL>APRS:!4903.50N/07201.75W_220/004g005t077r000p000'
            'P000h50b09900')
    assert packet.data_type == APRSDataType.WEATHER
    assert packet.data_extended.has_position
    record = packet.record()
    assert record['type'] == 'wx'
    assert record['wx']['wind_speed'] == 4
    assert record['pressure'] == 990.0


def test_parse_mice(logger):
    """
    Test a Mic-E packet decodes using the destination field.
    """
    packet = make_parser(logger).parse(
            'KG5EIU-9>S3PS2V,WIDE1-1:`|>Fp wj/`"5c}442.425MHz Toff +500 '
            'kg5eiu@w5fc.org _4')
    assert packet.data_type == APRSDataType.MIC_E_OLD
    assert packet.type == 'location'
    position = packet.data_extended
    assert abs(position.latitude - 33.054333) < 1e-5
    assert abs(position.longitude - -96.573667) < 1e-5
    assert position.course == 91


def test_parse_compressed_record(logger):
    """
    Test a compressed position is flagged in the record.
    """
    record = make_parser(logger).parse('N0CALL>APRS:=/5L!!<*e7>7P[').record()
    assert record['format'] == 'compressed'
    assert record['messaging'] == 1
    assert abs(record['latitude'] - 49.5) < 1e-4


def test_module_parse():
    """
    Test the module-level parse() with defaults.
    """
    packet = parse(POSITION_PACKET)
    assert re.match(r'^[0-9a-f]{32}$', packet.id)
    assert packet.received_at.tzinfo is not None
    assert packet.data_type == APRSDataType.POSITION_WITH_MESSAGE


def test_default_ids_unique():
    assert parse(POSITION_PACKET).id != parse(POSITION_PACKET).id


def test_parse_malformed_position(logger):
    """
    Test an undecodable position is reported in the payload, not raised.
    """
    packet = make_parser(logger).parse('N0CALL>APRS:!badinput')
    assert packet.data_type == APRSDataType.MALFORMED_POSITION
    assert packet.type == 'location'
    assert packet.data_extended.latitude is None
    assert not packet.data_extended.has_position
    assert packet.data_extended.comment == 'badinput'
