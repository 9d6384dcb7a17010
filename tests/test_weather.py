#!/usr/bin/env python3

"""
Weather report tests.
"""

from aprsdecode.datatype import APRSDataType
from aprsdecode.datetime import MDHMTimestamp
from aprsdecode.weather import APRSWeatherPayload, APRSWeatherReport, \
        decode_weather, is_weather_comment


def test_positionless_weather(logger):
    """
    Test a positionless weather report.
    """
    wx = APRSWeatherPayload.decode(
            '10090556c220s004g005t077r000p000P000h50b09900wRSW', logger)
    assert wx.data_type == APRSDataType.WEATHER
    assert isinstance(wx.timestamp, MDHMTimestamp)
    assert str(wx.timestamp) == '10090556'
    assert wx.weather.wind_direction == 220
    assert wx.weather.wind_speed == 4
    assert wx.weather.wind_gust == 5
    assert wx.weather.temperature == 77
    assert wx.weather.rain_1h == 0.0
    assert wx.weather.rain_24h == 0.0
    assert wx.weather.rain_since_midnight == 0.0
    assert wx.weather.humidity == 50
    assert wx.weather.pressure == 990.0
    assert wx.weather.timestamp is wx.timestamp
    assert wx.comment == 'wRSW'


def test_positionless_weather_no_timestamp(logger):
    """
    Test a positionless report without a timestamp.
    """
    wx = APRSWeatherPayload.decode('c220s004t077', logger)
    assert wx.timestamp is None
    assert wx.weather.wind_direction == 220
    assert wx.weather.temperature == 77


def test_weather_filler():
    """
    Test missing sensors decode to None, not zero.
    """
    (weather, rest) = decode_weather('c...s...g...t077', positionless=True)
    assert weather.wind_direction is None
    assert weather.wind_speed is None
    assert weather.wind_gust is None
    assert weather.temperature == 77
    assert weather.fields() == dict(temperature=77)


def test_weather_negative_temperature():
    """
    Test temperatures below zero.
    """
    (weather, rest) = decode_weather('t-05h45')
    assert weather.temperature == -5


def test_weather_humidity_hundred():
    """
    Test humidity '00' means 100%.
    """
    (weather, rest) = decode_weather('t077h00')
    assert weather.humidity == 100


def test_weather_snow_luminosity():
    """
    Test snow and luminosity.
    """
    (weather, rest) = decode_weather('220/004t077s010L123')
    assert weather.snow == 1.0
    assert weather.luminosity == 123
    assert weather.wind_direction == 220


def test_weather_comment_timestamp():
    """
    Test a timestamp embedded in a weather comment.
    """
    (weather, rest) = decode_weather('092345z220/004t077')
    assert str(weather.timestamp) == '092345z'
    assert 'timestamp' not in weather.fields(include_timestamp=False)


def test_is_weather_comment():
    """
    Test weather detection needs a weather token.
    """
    assert is_weather_comment('t077')
    assert is_weather_comment('b10150')
    assert not is_weather_comment('090/045')
    assert not is_weather_comment('Hello')


def test_weather_report_eq():
    """
    Test weather reports compare by their observations.
    """
    assert APRSWeatherReport(temperature=77) \
            == APRSWeatherReport(temperature=77)
    assert APRSWeatherReport(temperature=77) \
            != APRSWeatherReport(temperature=78)
