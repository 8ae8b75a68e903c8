import pytest

from rpdiceroller.errors import ConflictingLimits, DiceError, MalformedCommand, UnparsableNumber
from rpdiceroller.parser import parse_line, parse_roll


@pytest.mark.parametrize(
    ("text", "error"),
    [
        ("", MalformedCommand),
        ("   ", MalformedCommand),
        ("2d6khkh3", MalformedCommand),
        ("2d6kh1kl1", MalformedCommand),
        ("2d6kx1", MalformedCommand),
        ("d0", MalformedCommand),
        ("0d6", MalformedCommand),
        ("d6d6", MalformedCommand),
        ("5kh1", MalformedCommand),
        ("d6*2", MalformedCommand),
        ("d6r0", MalformedCommand),
        ("d6r2+1", MalformedCommand),
        ("d6r2d", MalformedCommand),
        ("d6+", UnparsableNumber),
        ("dx", UnparsableNumber),
        ("dk", UnparsableNumber),
        ("d+5", UnparsableNumber),
        ("dkh1", UnparsableNumber),
        ("d6rx", UnparsableNumber),
        ("d6r+", UnparsableNumber),
        ("d6+x", UnparsableNumber),
        ("d6-kh1", UnparsableNumber),
        ("4d6khx", UnparsableNumber),
        ("3dabc", UnparsableNumber),
        ("d", UnparsableNumber),
        ("3d", UnparsableNumber),
        ("4d6kh", UnparsableNumber),
        ("d20r", UnparsableNumber),
        ("d4294967296", UnparsableNumber),
        ("4294967296d6", UnparsableNumber),
        ("9223372036854775808", UnparsableNumber),
        ("9223372036854775807+1", UnparsableNumber),
        ("4d6kh3ra", ConflictingLimits),
        ("d20+2d6kl1rd", ConflictingLimits),
        ("d20r3ra", ConflictingLimits),
        ("d20rar2", ConflictingLimits),
    ],
)
def test_parse_rejections(text, error):
    with pytest.raises(error):
        parse_roll(text)


@pytest.mark.parametrize(
    ("error", "message"),
    [
        (MalformedCommand, "Invalid input: malformed command"),
        (UnparsableNumber, "Invalid input: unparsable number"),
        (ConflictingLimits, "Invalid input; conflicting limits"),
    ],
)
def test_user_messages(error, message):
    assert issubclass(error, DiceError)
    assert error.user_message == message


def test_parse_line_reports_roll_errors():
    with pytest.raises(MalformedCommand):
        parse_line("")


def test_most_negative_modifier_is_accepted():
    assert parse_roll("-9223372036854775808").modifier == -(2**63)
