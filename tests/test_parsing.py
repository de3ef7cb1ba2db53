import pytest

from hyperlayer.parsing import ParseError, parse_options, parse_usage, parse_values


def test_parse_values_default_keeps_text():
    result = parse_values(["-e", "edge.h5", "-x"], ["-e"])
    assert result == {"-e": "edge.h5"}


def test_parse_values_with_convertor():
    result = parse_values(["-n", "12", "-eta", "0.5"], ["-n"], int)
    assert result == {"-n": 12}


def test_parse_values_several_flags():
    result = parse_values(["-a", "1.5", "-b", "2.5"], ["-a", "-b"], float)
    assert result == {"-a": 1.5, "-b": 2.5}


def test_parse_values_first_occurrence_wins():
    result = parse_values(["-n", "3", "-n", "4"], ["-n"], int)
    assert result == {"-n": 3}


def test_parse_values_absent_flag_gives_empty():
    assert parse_values(["-z", "1"], ["-n"], int) == {}


def test_parse_values_missing_value():
    with pytest.raises(ParseError, match="value missing"):
        parse_values(["-n"], ["-n"], int)


def test_parse_values_unrecognised_by_none():
    with pytest.raises(ParseError, match="not recognized"):
        parse_values(["-k", "bad"], ["-k"], lambda text: None)


def test_parse_values_unrecognised_by_value_error():
    with pytest.raises(ParseError):
        parse_values(["-n", "abc"], ["-n"], int)


def test_parse_options_found():
    assert parse_options(["-v", "-p", "file"], ["-v", "-q"]) == {"-v"}


def test_parse_usage_help_exits(capsys):
    with pytest.raises(SystemExit) as info:
        parse_usage(["--help"], "USAGE TEXT\n")
    assert info.value.code == 1
    assert "USAGE TEXT" in capsys.readouterr().out


def test_parse_usage_without_help_returns_none():
    assert parse_usage(["-v"], "USAGE TEXT\n") is None