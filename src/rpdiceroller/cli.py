"""Console front-end: interactive session, one-shot roll and the tool server."""

from __future__ import annotations

import typer
from pydantic import ValidationError

from .config import BANNER, RollerSettings
from .dice import evaluate, render_outcome
from .errors import DiceError
from .logger import configure_logging, get_logger
from .models import QuitCommand, ReseedCommand
from .parser import parse_line, parse_roll
from .session import RollSession

logger = get_logger(__name__)

app = typer.Typer(
    name="diceroller",
    help="Tabletop dice-notation roller",
    add_completion=False,
)


def _settings(**options) -> RollerSettings:
    try:
        return RollerSettings(**options)
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from None


def run_session(settings: RollerSettings, session: RollSession) -> None:
    """Read-parse-roll-print until 'q' or end of input."""
    typer.echo(BANNER)

    while True:
        try:
            line = input(settings.prompt)
        except EOFError:
            logger.debug("End of input, closing session")
            return

        try:
            parsed = parse_line(line)
        except DiceError as e:
            logger.debug("Rejected %r: %s", line, e)
            typer.echo(e.user_message, err=True)
            continue

        if isinstance(parsed, QuitCommand):
            return
        if isinstance(parsed, ReseedCommand):
            session.reseed(parsed.seed)
            continue

        logger.debug("Rolling %s", parsed.notation)
        for out in render_outcome(evaluate(parsed, session)):
            typer.echo(out)


@app.command()
def play(
    seed: int = typer.Option(None, "--seed", "-s", help="Seed the generator (default: clock)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level when --debug is off"),
    prompt: str = typer.Option(">", "--prompt", help="Prompt printed before each line"),
) -> None:
    """Interactive session: one roll per line, 'q' to quit, 's<seed>' to reseed."""
    settings = _settings(seed=seed, debug=debug, log_level=log_level, prompt=prompt)
    configure_logging(settings.debug, settings.log_level)
    run_session(settings, RollSession(settings.seed))


@app.command()
def roll(
    expression: str = typer.Argument(..., help="Dice expression, e.g. 4d6kh3+2"),
    seed: int = typer.Option(None, "--seed", "-s", help="Seed the generator (default: clock)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level when --debug is off"),
) -> None:
    """Roll a single expression and exit."""
    settings = _settings(seed=seed, debug=debug, log_level=log_level)
    configure_logging(settings.debug, settings.log_level)

    try:
        cmd = parse_roll(expression)
    except DiceError as e:
        logger.debug("Rejected %r: %s", expression, e)
        typer.echo(e.user_message, err=True)
        raise typer.Exit(code=1)

    for out in render_outcome(evaluate(cmd, RollSession(settings.seed))):
        typer.echo(out)


@app.command()
def serve(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Serve the roll_dice tool over stdio."""
    from .server import run

    configure_logging(debug)
    run()


if __name__ == "__main__":
    app()
