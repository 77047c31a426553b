import sys
from typing import Optional

from . import tty


def print_msg(*args, print_to: Optional[str] = "debug"):
    """
    Print ``*args`` to the ``print_to`` target:
      - None: print nothing
      - debug: print() to stderr with "DEBUG:" prefix if config["debug"] is set
      - verbose: print() to stdout if config["verbose"] or config["debug"] is set
    """
    from .. import conf

    if print_to is None:
        return
    elif print_to == "debug":
        if conf.config["debug"]:
            print("DEBUG:", *args, file=sys.stderr)
    elif print_to == "verbose":
        if conf.config["verbose"] or conf.config["debug"]:
            print(*args)
    else:
        raise ValueError(f"Invalid value of the 'print_to' option: {print_to}")


def log(message):
    """
    Print a progress message prefixed with ``>``.
    """
    print(f"> {message}")


def log_step(message):
    """
    Announce a step whose outcome is reported later on the same line by ``log_result()``.
    """
    print(f"> {message}...", end="")
    sys.stdout.flush()


def log_result(returncode: int):
    if returncode == 0:
        print(" " + tty.colorize("success", "green"))
    else:
        print(" " + tty.colorize("failed", "red,bold") + f" (retcode: {returncode})")


def indent_lines(text: str, prefix: str = "     | ") -> str:
    """
    Strip ``text`` and prefix each of its lines with ``prefix``.
    An empty text results in a single prefix.
    """
    lines = text.strip().splitlines() or [""]
    return "\n".join(prefix + line for line in lines)
