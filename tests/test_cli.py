from typer.testing import CliRunner

from rpdiceroller.cli import app


runner = CliRunner()


def test_play_quit_exits_cleanly():
    result = runner.invoke(app, ["play", "--seed", "1"], input="q\n")
    assert result.exit_code == 0
    assert "Input your roll or q to quit" in result.output


def test_play_end_of_input_exits_cleanly():
    result = runner.invoke(app, ["play", "--seed", "1"], input="")
    assert result.exit_code == 0


def test_play_reports_errors_and_keeps_going():
    result = runner.invoke(
        app,
        ["play", "--seed", "1"],
        input="d0\nd6+\n4d6kh3ra\n3d6\nq\n",
    )
    assert result.exit_code == 0
    assert "Invalid input: malformed command" in result.output
    assert "Invalid input: unparsable number" in result.output
    assert "Invalid input; conflicting limits" in result.output
    assert " = " in result.output


def test_play_is_reproducible_with_seed():
    script = "3d6+2\n4d6kh3\nd20ra\n2d8r2\nq\n"
    a = runner.invoke(app, ["play", "--seed", "2024"], input=script)
    b = runner.invoke(app, ["play", "--seed", "2024"], input=script)
    assert a.exit_code == 0
    assert a.output == b.output
    assert "Rolled with advantage, final result:" in a.output
    assert "Sum of all rolls:" in a.output


def test_play_reseed_replays_rolls():
    result = runner.invoke(app, ["play", "--seed", "3"], input="s77\n10d20\ns77\n10d20\nq\n")
    assert result.exit_code == 0
    rolls = [line for line in result.output.splitlines() if line.lstrip(">").startswith("[")]
    assert len(rolls) == 2
    assert rolls[0].lstrip(">") == rolls[1].lstrip(">")


def test_roll_one_shot():
    result = runner.invoke(app, ["roll", "4d6kh3+1", "--seed", "5"])
    assert result.exit_code == 0
    assert result.output.strip().startswith("[")
    assert result.output.strip().split(" = ")[-1].isdigit()


def test_roll_one_shot_rejects_bad_input():
    result = runner.invoke(app, ["roll", "2d6khkh3"])
    assert result.exit_code == 1
    assert "Invalid input: malformed command" in result.output


def test_negative_seed_rejected():
    result = runner.invoke(app, ["roll", "d6", "--seed", "-4"])
    assert result.exit_code != 0


def test_play_custom_prompt():
    result = runner.invoke(app, ["play", "--seed", "1", "--prompt", "roll? "], input="q\n")
    assert result.exit_code == 0
    assert "roll? " in result.output


def test_unknown_log_level_rejected():
    result = runner.invoke(app, ["roll", "d6", "--log-level", "chatty"])
    assert result.exit_code != 0
