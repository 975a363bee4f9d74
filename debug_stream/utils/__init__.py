"""Small rendering helpers shared by the formatters"""

from debug_stream.utils.colors import apply_colors, colorize
from debug_stream.utils.dates import date_to_string
from debug_stream.utils.exceptions import format_exception
from debug_stream.utils.paths import src_to_string, to_short_filename

__all__ = [
    "apply_colors",
    "colorize",
    "date_to_string",
    "format_exception",
    "src_to_string",
    "to_short_filename",
]
