import os
import sys


try:
    IS_INTERACTIVE = os.isatty(sys.stdout.fileno())
except (OSError, ValueError):
    IS_INTERACTIVE = False


ESCAPE_CODES = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "red": "\033[31m",
    "green": "\033[32m",
}


def colorize(text, color):
    """
    Colorize `text` if the `color` is specified and we're running in an interactive terminal.
    """
    if not IS_INTERACTIVE or not color or not text:
        return text

    result = ""
    for i in color.split(","):
        result += ESCAPE_CODES[i]
    result += text
    result += ESCAPE_CODES["reset"]
    return result
