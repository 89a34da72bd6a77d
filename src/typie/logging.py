# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing status helpers with optional colour and emoji support."""

from __future__ import annotations

import sys
from functools import lru_cache

from rich.console import Console
from rich.text import Text


def _stdout_is_tty() -> bool:
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=8)
def _console(styled: bool, use_emoji: bool) -> Console:
    """Return the shared console for one combination of output flags.

    ``styled`` is only ``True`` when colour was requested and stdout is a
    terminal. The console writes to whatever ``sys.stdout`` is at print time,
    so a cached instance survives stdout being replaced.
    """

    return Console(
        force_terminal=styled,
        no_color=not styled,
        color_system="auto" if styled else None,
        emoji=use_emoji,
        highlight=False,
        soft_wrap=True,
    )


def emoji(symbol: str, enable: bool) -> str:
    """Select an emoji symbol based on the caller's preference.

    Args:
        symbol: Emoji text to include in the output.
        enable: Flag indicating whether emoji output is desired.

    Returns:
        str: Emoji symbol when enabled, otherwise an empty string.
    """

    return symbol if enable else ""


def _print_line(
    msg: str | Text,
    *,
    style: str | None,
    use_emoji: bool,
    use_color: bool | None = None,
) -> None:
    """Render ``msg`` to the console using shared styling helpers.

    Args:
        msg: Message text, or pre-styled rich text, to print.
        style: Rich style applied to the whole line when colour output is active.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    tty = _stdout_is_tty()
    color_enabled = tty if use_color is None else use_color
    console = _console(color_enabled and tty, use_emoji)
    text = msg.copy() if isinstance(msg, Text) else Text(msg)
    if style and color_enabled:
        text.stylize(style, 0, len(text))
    console.print(text)


def _compose(prefix: str, msg: str | Text) -> Text:
    text = Text(prefix)
    text.append(msg if isinstance(msg, Text) else Text(msg))
    return text


def info(msg: str | Text, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an informational message."""

    _print_line(_compose(emoji("ℹ️ ", use_emoji), msg), style="blue", use_emoji=use_emoji, use_color=use_color)


def ok(msg: str | Text, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a success message."""

    _print_line(_compose(emoji("✅ ", use_emoji), msg), style="green", use_emoji=use_emoji, use_color=use_color)


def skip(msg: str | Text, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a message for a dependency that needs no action."""

    _print_line(_compose(emoji("⏭️ ", use_emoji), msg), style="yellow", use_emoji=use_emoji, use_color=use_color)


def warn(msg: str | Text, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a warning message."""

    _print_line(_compose(emoji("⚠️ ", use_emoji), msg), style="yellow", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str | Text, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message."""

    _print_line(_compose(emoji("❌ ", use_emoji), msg), style="red", use_emoji=use_emoji, use_color=use_color)


def bold(value: str) -> Text:
    """Return ``value`` as bold rich text for embedding in status lines."""

    return Text(value, style="bold")


__all__ = ["bold", "emoji", "fail", "info", "ok", "skip", "warn"]
