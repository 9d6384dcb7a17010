#!/usr/bin/env python3

"""
Comment extension tests.
"""

from aprsdecode.extension import extract_dao, extract_altitude, \
        extract_phg, extract_range, extract_weather, extract_course_speed, \
        APRSDAOExtension

EXTRACTORS = (
        extract_dao, extract_altitude, extract_phg, extract_range,
        extract_weather, extract_course_speed,
)


def test_extract_dao():
    """
    Test the three letter DAO form.
    """
    (dao, comment) = extract_dao('Hello !wXY! there')
    assert dao == APRSDAOExtension('WGS84', 'w', 'X')
    assert comment == 'Hello  there'


def test_extract_dao_letters():
    """
    Test the first two DAO letters are the latitude and longitude digits.
    """
    (dao, comment) = extract_dao('x !WAB! y')
    assert (dao.lat_dao, dao.lon_dao) == ('W', 'A')
    assert dao.datum == 'WGS84'
    assert comment == 'x  y'


def test_extract_dao_datum():
    """
    Test the bare datum marker.
    """
    (dao, comment) = extract_dao('&!W test')
    assert dao == APRSDAOExtension('W')
    assert comment == 'test'


def test_extract_dao_precedence():
    """
    Test the three letter form is preferred over the datum marker.
    """
    (dao, comment) = extract_dao('!wXY! &!Z')
    assert dao.datum == 'WGS84'
    assert comment == '&!Z'


def test_extract_dao_none():
    """
    Test a comment without DAO is unchanged.
    """
    assert extract_dao('Hello') == (None, 'Hello')


def test_extract_altitude():
    """
    Test altitude is extracted in feet.
    """
    assert extract_altitude('/A=001234 x') == (1234.0, 'x')


def test_extract_altitude_negative():
    """
    Test negative altitudes.
    """
    assert extract_altitude('/A=-00123 x') == (-123.0, 'x')


def test_extract_phg():
    """
    Test PHG is found but left in the comment.
    """
    assert extract_phg('PHG5132 test') == ('5132', 'PHG5132 test')


def test_extract_range():
    """
    Test radio range is extracted.
    """
    assert extract_range('RNG0050 x') == ('0050', 'x')


def test_extract_weather():
    """
    Test weather observations are extracted.
    """
    (weather, comment) = extract_weather('g005t077 rest')
    assert weather.wind_gust == 5
    assert weather.temperature == 77
    assert comment == 'rest'


def test_extract_weather_bare_wind():
    """
    Test a bare ddd/sss is not weather.
    """
    assert extract_weather('090/045 x') == (None, '090/045 x')


def test_extract_course_speed():
    """
    Test course and speed are extracted.
    """
    assert extract_course_speed('/090/045 text') == ((90, 45.0), 'text')
    assert extract_course_speed('088/036') == ((88, 36.0), '')


def test_extract_course_speed_repeated():
    """
    Test only the first of two course/speed fields is taken per call.
    """
    (value, comment) = extract_course_speed('/090/045/180/020 text')
    assert value == (90, 45.0)
    assert comment == '/180/020 text'
    assert extract_course_speed(comment) == ((180, 20.0), 'text')


def test_extract_course_speed_invalid():
    """
    Test out of range values are left alone.
    """
    assert extract_course_speed('361/010') == (None, '361/010')
    assert extract_course_speed('090/300') == (None, '090/300')


def test_extract_course_speed_anchored():
    """
    Test course and speed must lead the comment.
    """
    assert extract_course_speed('x090/045') == (None, 'x090/045')


def test_extract_course_speed_phg():
    """
    Test comments starting with PHG are skipped.
    """
    assert extract_course_speed('PHG5132/090') == (None, 'PHG5132/090')


def test_extractors_idempotent():
    """
    Test running each extractor on its own output finds nothing more.
    """
    comments = (
            'Hello !wXY! there',
            '&!W test',
            '/A=001234 x',
            'RNG0050 x',
            'g005t077r000h50 rest',
            '/090/045 text',
            'PHG5132 test',
    )
    for extractor in EXTRACTORS:
        for comment in comments:
            (_, once) = extractor(comment)
            (value, twice) = extractor(once)
            assert twice == once, (extractor, comment)
            if extractor is not extract_phg:
                assert value is None, (extractor, comment)
