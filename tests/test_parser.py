import pytest

from catflags.logger import LogLevel, default_logger
from catflags.parser import ConfigParser, ParseError
from catflags.user import User


@pytest.fixture
def parser():
    return ConfigParser(default_logger(LogLevel.WARN))


def test_parse_double(parser):
    body = '{ "keyDouble": { "v": 120.121238476, "p": [], "r": [] }}'
    assert parser.parse(body, "keyDouble") == 120.121238476


def test_bad_json(parser):
    with pytest.raises(ParseError):
        parser.parse("", "keyDouble")


def test_bad_json_string(parser):
    with pytest.raises(ParseError) as info:
        parser.parse("", "key")
    assert str(info.value).startswith("JSON parsing failed.")


def test_wrong_key(parser):
    body = (
        '{ "keyDouble": { "Value": 120.121238476, "SettingType": 0, '
        '"RolloutPercentageItems": [], "RolloutRules": [] }}'
    )
    with pytest.raises(ParseError) as info:
        parser.parse(body, "wrongKey")
    assert "wrongKey" in str(info.value)
    assert "keyDouble" in str(info.value)


def test_empty_node(parser):
    with pytest.raises(ParseError) as info:
        parser.parse('{ "keyDouble": { }}', "keyDouble")
    assert str(info.value) == "Null evaluated for key keyDouble."


def test_empty_key_rejected(parser):
    with pytest.raises(ValueError):
        parser.parse('{"a": {"v": 1}}', "")


def test_non_object_root(parser):
    with pytest.raises(ParseError):
        parser.parse("[1, 2]", "a")


def test_parse_with_user_without_rules(parser):
    body = '{ "key": { "v": "value", "p": [], "r": [] }}'
    assert parser.parse(body, "key", User("user-1")) == "value"


def test_get_all_keys(parser):
    body = '{ "first": { "v": 1 }, "second": { "v": true }}'
    assert sorted(parser.get_all_keys(body)) == ["first", "second"]


def test_get_all_keys_bad_json(parser):
    with pytest.raises(ParseError):
        parser.get_all_keys("not json")