from __future__ import annotations

import threading
from typing import Any

from mcp.server.fastmcp import FastMCP

from .dice import roll_from_text
from .errors import DiceError
from .logger import get_logger
from .session import RollSession


logger = get_logger(__name__)


def create_server(session: RollSession | None = None) -> FastMCP:
    """Build the tool server around a single roll session.

    Draws are stateful and order-sensitive, so every tool call holds the
    session lock for its whole duration.
    """

    session = session or RollSession()
    lock = threading.Lock()
    mcp = FastMCP("rpdiceroller")

    @mcp.tool()
    def roll_dice(text: str) -> dict[str, Any]:
        """Roll dice notation such as '3d6+2', '4d6kh3', 'd20+5ra' or '2d8r3'.

        Output: structured JSON with every die, kept/discarded split,
        per-repetition totals, the rendered breakdown lines and the final total.

        Raises a hard error (exception) on invalid input.
        """

        try:
            with lock:
                return roll_from_text(text, session)
        except DiceError as e:
            logger.debug("Rejected %r: %s", text, e)
            # Fail-fast: surface the same message the console prints.
            raise ValueError(e.user_message) from None

    @mcp.tool()
    def reseed(seed: int) -> dict[str, Any]:
        """Reseed the shared generator. A seed of 0 keeps the current generator.

        Raises a hard error (exception) on a negative seed.
        """

        if seed < 0:
            raise ValueError("Invalid seed: must be non-negative")
        with lock:
            changed = session.reseed(seed)
            return {"reseeded": changed, "seed": session.seed}

    return mcp


def run() -> None:
    # stdio transport; stdout belongs to the protocol, logs go to stderr.
    create_server().run()


if __name__ == "__main__":
    run()
