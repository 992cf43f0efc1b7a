import pytest

from aprskit.util import AprsError, TruncatedPacketError
from aprskit.weather import (
    Humidity,
    Luminosity,
    PositionlessWeather,
    Pressure,
    Rainfall,
    Snowfall,
    Temperature,
    WeatherData,
    WindDirection,
    WindSpeed,
)

FULL = b"220/004g005t077r000p000P000h50b09900"


def test_parse_full_weather():
    wx = WeatherData.parse(FULL)
    assert wx.wind_direction.degrees == 220
    assert wx.wind_speed.mph == 4
    assert wx.wind_gust.mph == 5
    assert wx.temperature.fahrenheit == 77
    assert wx.rain_last_hour.hundredths_inch == 0
    assert wx.humidity.percent == 50
    assert wx.barometric_pressure.tenths_mbar == 9900


def test_temperature_conversion():
    assert Temperature(32).celsius() == pytest.approx(0.0, abs=0.01)
    assert Temperature(212).celsius() == pytest.approx(100.0, abs=0.01)
    assert Temperature(32).kelvin() == pytest.approx(273.15, abs=0.01)


def test_wind_speed_conversion():
    s = WindSpeed(10)
    assert s.knots() == pytest.approx(8.68976, abs=0.001)
    assert s.kph() == pytest.approx(16.09344, abs=0.001)
    assert s.m_per_s() == pytest.approx(4.4704, abs=0.001)


def test_pressure_conversion():
    p = Pressure(10250)
    assert p.hpa() == pytest.approx(1025.0, abs=0.01)
    assert p.mbar() == pytest.approx(1025.0, abs=0.01)


def test_rainfall_conversion():
    r = Rainfall(100)
    assert r.inches() == pytest.approx(1.0, abs=0.001)
    assert r.mm() == pytest.approx(25.4, abs=0.01)


def test_snowfall_conversion():
    s = Snowfall(10.0)
    assert s.inches() == pytest.approx(1.0)
    assert s.cm() == pytest.approx(2.54)


def test_humidity_100_encoded_as_00():
    wx = WeatherData.parse(b"000/000h00")
    assert wx.humidity == Humidity(100)
    assert wx.encode() == b"000/000h00"


def test_negative_temperature():
    wx = WeatherData.parse(b"000/000g000t-10")
    assert wx.temperature.fahrenheit == -10
    assert wx.encode() == b"000/000g000t-10"


def test_luminosity_high():
    wx = WeatherData.parse(b"000/000L042")
    assert wx.luminosity == Luminosity(1042)
    assert wx.encode() == b"000/000L042"


def test_luminosity_low_round_trip():
    wx = WeatherData.parse(b"000/000l500")
    assert wx.luminosity.w_per_m2 == 500
    assert wx.encode() == b"000/000l500"


def test_unknown_fields_stop_parsing():
    wx = WeatherData.parse(b"220/004g005XUNKNOWN")
    assert wx.wind_direction.degrees == 220
    assert wx.wind_gust.mph == 5
    assert wx.temperature is None


def test_encode_round_trip():
    assert WeatherData.parse(FULL).encode() == FULL


def test_blank_fields_are_none():
    wx = WeatherData.parse(b".../...t...")
    assert wx.wind_direction is None
    assert wx.wind_speed is None
    assert wx.temperature is None
    assert wx.encode() == b".../..."


def test_truncated_field_at_end_is_ignored():
    wx = WeatherData.parse(b"220/004g05")
    assert wx.wind_gust is None
    assert wx.wind_speed == WindSpeed(4)


def test_snow_and_rain_counter():
    wx = WeatherData.parse(b"000/000s030#123")
    assert wx.snow_last_24h.tenths_inch == pytest.approx(3.0)
    assert wx.raw_rain_counter == 123
    assert wx.encode() == b"000/000s030#123"


def test_too_short_raises():
    with pytest.raises(TruncatedPacketError) as info:
        WeatherData.parse(b"220/00")
    assert info.value.expected == 7
    assert info.value.got == 6


def test_missing_slash_raises():
    with pytest.raises(AprsError):
        WeatherData.parse(b"2200004")


def test_default_encode():
    assert WeatherData(wind_direction=WindDirection(5)).encode() == b"005/..."


def test_positionless_parse():
    pw = PositionlessWeather.parse(b"_10071820220/004g005t077")
    assert pw.timestamp == b"10071820"
    assert pw.weather.wind_direction.degrees == 220
    assert pw.weather.temperature.fahrenheit == 77
    assert pw.comment == b""


def test_positionless_encode_round_trip():
    raw = b"_10071820220/004g005t077"
    assert PositionlessWeather.parse(raw).encode() == raw


def test_positionless_full_with_conversions():
    raw = b"_10071820220/004g005t077r000p000P000h50b09900"
    pw = PositionlessWeather.parse(raw)
    wx = pw.weather
    assert wx.wind_speed.knots() == pytest.approx(3.476, abs=0.01)
    assert wx.temperature.celsius() == pytest.approx(25.0, abs=0.1)
    assert wx.barometric_pressure.hpa() == pytest.approx(990.0, abs=0.1)
    assert pw.encode() == raw


def test_positionless_too_short_raises():
    with pytest.raises(TruncatedPacketError) as info:
        PositionlessWeather.parse(b"_1007182")
    assert info.value.expected == 9


def test_positionless_bad_weather_raises():
    with pytest.raises(TruncatedPacketError):
        PositionlessWeather.parse(b"_10071820220")