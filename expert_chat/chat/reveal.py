"""Simulated streaming of an already complete response.

The full text is known before the reveal starts. Words are written out one
at a time with a short pause so the chat page shows the answer growing.
"""

import asyncio
from collections.abc import Callable

DEFAULT_REVEAL_DELAY = 0.05


def split_words(text: str) -> list[str]:
    """Split on single spaces, keeping empty tokens from repeated spaces."""
    return text.split(" ")


async def reveal(
    text: str,
    write: Callable[[str], None],
    delay: float = DEFAULT_REVEAL_DELAY,
) -> None:
    """Write growing prefixes of ``text`` with a pause after each word.

    Args:
        text: Complete response text.
        write: Receives the accumulated content after each word.
        delay: Seconds to wait between words.
    """
    accumulated = ""
    for index, word in enumerate(split_words(text)):
        accumulated += (" " if index > 0 else "") + word
        write(accumulated)
        await asyncio.sleep(delay)
