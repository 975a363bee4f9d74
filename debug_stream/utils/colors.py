"""ANSI color helpers"""

from typing import Iterable, Optional

# name -> (open, close)
STYLES = {
    "reset": ("\033[0m", "\033[0m"),
    "bold": ("\033[1m", "\033[22m"),
    "dim": ("\033[2m", "\033[22m"),
    "italic": ("\033[3m", "\033[23m"),
    "underline": ("\033[4m", "\033[24m"),
    "inverse": ("\033[7m", "\033[27m"),
    "hidden": ("\033[8m", "\033[28m"),
    "strikethrough": ("\033[9m", "\033[29m"),
    "black": ("\033[30m", "\033[39m"),
    "red": ("\033[31m", "\033[39m"),
    "green": ("\033[32m", "\033[39m"),
    "yellow": ("\033[33m", "\033[39m"),
    "blue": ("\033[34m", "\033[39m"),
    "magenta": ("\033[35m", "\033[39m"),
    "cyan": ("\033[36m", "\033[39m"),
    "white": ("\033[37m", "\033[39m"),
    "grey": ("\033[90m", "\033[39m"),
    "gray": ("\033[90m", "\033[39m"),
    "bright_red": ("\033[91m", "\033[39m"),
    "bright_green": ("\033[92m", "\033[39m"),
    "bright_yellow": ("\033[93m", "\033[39m"),
    "bright_blue": ("\033[94m", "\033[39m"),
    "bright_magenta": ("\033[95m", "\033[39m"),
    "bright_cyan": ("\033[96m", "\033[39m"),
    "bright_white": ("\033[97m", "\033[39m"),
    "bg_black": ("\033[40m", "\033[49m"),
    "bg_red": ("\033[41m", "\033[49m"),
    "bg_green": ("\033[42m", "\033[49m"),
    "bg_yellow": ("\033[43m", "\033[49m"),
    "bg_blue": ("\033[44m", "\033[49m"),
    "bg_magenta": ("\033[45m", "\033[49m"),
    "bg_cyan": ("\033[46m", "\033[49m"),
    "bg_white": ("\033[47m", "\033[49m"),
}


def colorize(color: str, text: str) -> str:
    """
    Wrap text in a single named style.

    Raises:
        ValueError: If the color name is unknown
    """
    try:
        start, end = STYLES[color]
    except KeyError:
        raise ValueError(f"Unknown color: {color}") from None
    # Re-open the style after any nested close code so the outer style survives
    return start + text.replace(end, end + start) + end


def apply_colors(message: Optional[str], color_list: Iterable[str]) -> Optional[str]:
    """
    Apply one or more colors to a message, in order.

    Each color wraps the result of the previous one. ``None`` is passed
    through untouched.
    """
    if message is None:
        return message

    for color in color_list:
        message = colorize(color, message)

    return message


def is_color_name(name: str) -> bool:
    return name in STYLES
