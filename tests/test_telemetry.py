import math

import pytest

from aprskit.telemetry import Telemetry, TelemetryEquation, TelemetryMetadata
from aprskit.util import AprsError, TruncatedPacketError


def test_parse_basic_telemetry():
    t = Telemetry.parse(b"T#001,100,200,300,400,500,10101010")
    assert t.sequence == b"001"
    assert t.analog[0] == 100.0
    assert t.analog[4] == 500.0
    assert t.digital == 0b10101010
    assert t.comment == b""


def test_parse_telemetry_with_comment():
    t = Telemetry.parse(b"T#001,100,200,300,400,500,11110000,Hello World")
    assert t.digital == 0b11110000
    assert t.comment == b"Hello World"


def test_parse_telemetry_station_data():
    t = Telemetry.parse(b"T#015,023,000,255,128,100,11110000,Station data")
    assert t.comment == b"Station data"
    assert t.digital == 0b11110000
    assert t.analog == (23.0, 0.0, 255.0, 128.0, 100.0)


def test_encode_round_trip():
    raw = b"T#001,100,200,300,400,500,10101010,Test"
    assert Telemetry.parse(raw).encode() == raw


def test_encode_round_trip_without_comment():
    raw = b"T#001,100,200,300,400,500,10101010"
    assert Telemetry.parse(raw).encode() == raw


def test_comment_with_commas_is_rejoined():
    t = Telemetry.parse(b"T#001,1,2,3,4,5,00000001,a,b,,c")
    assert t.comment == b"a,b,,c"
    assert t.encode() == b"T#001,1,2,3,4,5,00000001,a,b,,c"


def test_missing_digital_bits_defaults_to_zero():
    t = Telemetry.parse(b"T#001,100,200,300,400,500")
    assert t.digital == 0


def test_non_binary_digital_defaults_to_zero():
    t = Telemetry.parse(b"T#001,1,2,3,4,5,1010201")
    assert t.digital == 0


def test_missing_and_bad_analog_values_are_none():
    t = Telemetry.parse(b"T#9,1.5,abc,,7")
    assert t.analog == (1.5, None, None, 7.0, None)
    assert t.sequence == b"9"


def test_no_hash_raises():
    with pytest.raises(TruncatedPacketError) as info:
        Telemetry.parse(b"Tno hash here")
    assert info.value.expected == 2


def test_too_short_raises_aprs_error():
    with pytest.raises(AprsError):
        Telemetry.parse(b"T")


def test_encode_fractional_and_missing_values():
    t = Telemetry(
        sequence=b"7",
        analog=(1.5, None, 0.1, None, None),
        digital=1,
    )
    assert t.encode() == b"T#7,1.5,,0.1,,,00000001"


def test_encode_small_value_without_exponent():
    t = Telemetry(sequence=b"1", analog=(1e-7, 0.0, 0.0, 0.0, 0.0))
    assert t.encode() == b"T#1,0.0000001,0,0,0,0,00000000"


def test_fractional_round_trip():
    raw = b"T#002,12.25,0.5,3,4.75,-2,00001111,x"
    assert Telemetry.parse(raw).encode() == raw


def test_wrong_number_of_analog_values_rejected():
    with pytest.raises(ValueError):
        Telemetry(sequence=b"1", analog=(1.0, 2.0))


def test_parse_parm_names():
    names = TelemetryMetadata.parse_parm(b"Bat1,Bat2,Temp,Hum,Pres,LED1,LED2")
    assert names[0] == b"Bat1"
    assert names[4] == b"Pres"
    assert names[5] == b"LED1"
    assert len(names) == 7


def test_parse_parm_full_message_text():
    text = b"PARM.Bat1,Bat2,Temp,Hum,Pres,LED1,LED2,LED3,LED4,LED5,LED6,LED7,LED8"
    names = TelemetryMetadata.parse_parm(text[5:])
    assert names[0] == b"Bat1"
    assert names[4] == b"Pres"
    assert names[12] == b"LED8"


def test_parse_parm_limits_to_thirteen_fields():
    text = b",".join(b"N%d" % i for i in range(20))
    names = TelemetryMetadata.parse_parm(text)
    assert len(names) == 13
    assert names[-1] == b"N12"


def test_parse_unit_strips_leading_spaces_and_empty_is_none():
    units = TelemetryMetadata.parse_unit(b" Volts,,   ,deg C")
    assert units == [b"Volts", None, None, b"deg C"]


def test_parse_eqns():
    eqns = TelemetryMetadata.parse_eqns(b"0,0.01,0,0,0.01,0,0,1,0,0,1,0,0,1,0")
    assert len(eqns) == 5
    assert abs(eqns[0].b - 0.01) < 0.001
    assert abs(eqns[0].c) < 0.001


def test_parse_eqns_defaults_for_missing_values():
    eqns = TelemetryMetadata.parse_eqns(b"2,3,4,x")
    assert eqns[0] == TelemetryEquation(2.0, 3.0, 4.0)
    assert eqns[1] == TelemetryEquation(0.0, 1.0, 0.0)
    assert eqns[4] == TelemetryEquation(0.0, 1.0, 0.0)


def test_equation_apply():
    eq = TelemetryEquation(a=0.0, b=0.01, c=0.0)
    assert abs(eq.apply(100.0) - 1.0) < 0.001


def test_equation_apply_quadratic():
    eq = TelemetryEquation(a=1.0, b=2.0, c=3.0)
    assert math.isclose(eq.apply(2.0), 17.0)


def test_parse_bits():
    sense, project = TelemetryMetadata.parse_bits(b"11111111,My Station")
    assert sense == 0xFF
    assert project == b"My Station"


def test_parse_bits_mixed():
    sense, _ = TelemetryMetadata.parse_bits(b"10110100,Test")
    assert sense == 0b10110100


def test_parse_bits_without_project():
    sense, project = TelemetryMetadata.parse_bits(b"1")
    assert sense == 0x80
    assert project == b""


def test_metadata_defaults():
    meta = TelemetryMetadata()
    assert meta.param_names == []
    assert meta.bit_sense == 0
    assert meta.project_name == b""
    assert meta.equations == []