#!/usr/bin/env python3

"""
Mic-E decoding tests.
"""

from aprsdecode.datatype import APRSDataType
from aprsdecode.mice import decode_mice, decode_destination, \
        decode_comment, decode_message, is_encoded_data, APRSMicEPosition, \
        STANDARD, CUSTOM

INFORMATION = '|>Fp wj/'
COMMENT = '`"5c}442.425MHz Toff +500 kg5eiu@w5fc.org _4'


def test_decode_mice(logger):
    """
    Test decoding a Mic-E report.
    """
    pos = decode_mice('S3PS2V', INFORMATION + COMMENT,
            APRSDataType.MIC_E_OLD, logger)
    assert isinstance(pos, APRSMicEPosition)
    assert pos.data_type == APRSDataType.MIC_E_OLD
    assert pos.has_position
    assert abs(pos.latitude - 33.054333) < 1e-6
    assert abs(pos.longitude - -96.573667) < 1e-6
    assert pos.course == 91
    assert abs(pos.speed - 34.759) < 0.001
    assert pos.symbol_table_id == '/'
    assert pos.symbol_code == 'j'
    assert pos.message_bits == (1, 0, 1)
    assert pos.message_type == STANDARD
    assert pos.message == 'M2 In Service'
    assert pos.position_ambiguity == 0


def test_decode_mice_comment(logger):
    """
    Test the altitude and device markers are removed from the comment.
    """
    pos = decode_mice('S3PS2V', INFORMATION + COMMENT,
            APRSDataType.MIC_E_OLD, logger)
    assert abs(pos.altitude_q.to('metre').magnitude - 167) < 0.001
    assert abs(pos.altitude - 547.9) < 0.1
    assert pos.comment == '442.425MHz Toff +500 kg5eiu@w5fc.org'


def test_decode_mice_ssid(logger):
    """
    Test the destination SSID is ignored.
    """
    pos = decode_mice('S3PS2V-1', INFORMATION,
            APRSDataType.MIC_E_OLD, logger)
    assert abs(pos.latitude - 33.054333) < 1e-6
    assert pos.comment == ''


def test_decode_mice_short(logger):
    """
    Test a short information field is an error.
    """
    pos = decode_mice('S3PS2V', '|>F', APRSDataType.MIC_E_OLD, logger)
    assert pos.data_type == APRSDataType.MIC_E_ERROR
    assert pos.latitude is None
    assert pos.longitude is None
    assert pos.error_message == 'Failed to parse Mic-E packet'


def test_decode_mice_bad_destination(logger):
    """
    Test a destination that is not Mic-E encoded is an error.
    """
    pos = decode_mice('APRS', INFORMATION, APRSDataType.MIC_E_OLD, logger)
    assert pos.data_type == APRSDataType.MIC_E_ERROR

    pos = decode_mice('S3PM2V', INFORMATION, APRSDataType.MIC_E_OLD, logger)
    assert pos.data_type == APRSDataType.MIC_E_ERROR


def test_decode_destination_ambiguity():
    """
    Test ambiguous destination digits.
    """
    dest = decode_destination('S3PS2Z')
    assert dest['position_ambiguity'] == 1
    assert abs(dest['latitude'] - 33.053333) < 1e-6
    assert dest['west'] is True


def test_decode_destination_south_east():
    """
    Test digits in characters 4 to 6 mean south, no offset and east.
    """
    dest = decode_destination('333000')
    assert dest['latitude'] == -33.5
    assert dest['longitude_offset'] is False
    assert dest['west'] is False
    assert dest['message_bits'] == (0, 0, 0)
    assert dest['message_type'] is None


def test_decode_mice_emergency(logger):
    """
    Test all-zero message bits are an emergency.
    """
    pos = decode_mice('333000', INFORMATION, APRSDataType.MIC_E_OLD, logger)
    assert pos.message == 'Emergency'
    assert abs(pos.longitude - 96.573667) < 1e-6


def test_decode_message_custom():
    """
    Test custom message names.
    """
    assert decode_message((1, 1, 0), [CUSTOM, CUSTOM, None]) \
            == 'C1 Custom-1'


def test_decode_message_mixed():
    """
    Test mixing standard and custom bits gives an unknown message.
    """
    assert decode_message((1, 1, 1), [CUSTOM, STANDARD, STANDARD]) \
            == 'Unknown'


def test_decode_comment_kenwood():
    """
    Test the Kenwood prefix and suffix are removed.
    """
    assert decode_comment(']Hello=') == (None, 'Hello')
    assert decode_comment('>Hi^') == (None, 'Hi')


def test_decode_comment_altitude():
    """
    Test an altitude at the start of the comment.
    """
    (altitude, comment) = decode_comment('"5c}Hello')
    assert altitude.to('metre').magnitude == 167
    assert comment == 'Hello'


def test_decode_comment_telemetry_tail():
    """
    Test non-printable bytes and the telemetry tail are removed.
    """
    assert decode_comment('Test\x1f') == (None, 'Test')
    assert decode_comment('Test_%xyz') == (None, 'Test')


def test_decode_comment_empty():
    """
    Test a comment that is only encoded data becomes empty.
    """
    assert decode_comment('`"5c}_4') \
            == (decode_comment('"5c}')[0], '')
    assert decode_comment('') == (None, '')


def test_is_encoded_data():
    """
    Test short, data-led and mostly symbolic comments are not text.
    """
    assert is_encoded_data('x')
    assert is_encoded_data('')
    assert is_encoded_data(']abc def')
    assert is_encoded_data('=abc def')
    assert is_encoded_data('#$%&*ab')
    assert not is_encoded_data('Hi')
    assert not is_encoded_data('kg5eiu@w5fc.org')


def test_decode_comment_encoded_only():
    """
    Test a comment left with only encoded data becomes empty.
    """
    assert decode_comment('x') == (None, '')
    assert decode_comment('`#$%&*ab') == (None, '')
    assert decode_comment(']]Hello') == (None, '')
    assert decode_comment('Hello there') == (None, 'Hello there')


def test_decode_destination_latitude_direction():
    """
    Test only a digit or 'L' in character 4 gives a southern latitude.
    """
    assert decode_destination('333L00')['latitude'] == -33.5
    assert decode_destination('333P00')['latitude'] == 33.5
    assert decode_destination('333A00')['latitude'] == 33.5
    assert decode_destination('333K00')['latitude'] == 33.5
