"""
Utilities module for Dungeon Fighter.

Provides console printing with rich formatting, HP bar rendering and the
numeric coercion shared by the combatant model.
"""

from typing import Any

from rich.console import Console
from rich.rule import Rule

# Initialize the rich console.
_console = Console(markup=True, width=100, highlight=False)


def cprint(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output.

    Args:
        *args: Arguments to pass to the console print function.
        **kwargs: Keyword arguments to pass to the console print function.

    """
    _console.print(*args, **kwargs)


def crule(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output with a rule.

    Args:
        *args: Arguments to pass to the Rule constructor.
        **kwargs: Keyword arguments to pass to the Rule constructor.

    """
    _console.print(Rule(*args, **kwargs))


def ccapture(content: Any) -> str:
    """
    Captures console output as a string.

    Args:
        content (Any): The content to capture.

    Returns:
        str: The captured output as a string.

    """
    with _console.capture() as capture:
        _console.print(content, markup=True, end="")
    return capture.get()


def coerce_int(value: Any, default: int = 1) -> int:
    """
    Converts loosely typed numeric input to an int.

    Numbers and numeric strings are truncated to int; anything else
    (None, empty strings, garbage) yields the default.

    Args:
        value (Any): The value to convert.
        default (int): The fallback value. Defaults to 1.

    Returns:
        int: The converted value.

    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def hp_percent(current: int, maximum: int) -> float:
    """
    Computes the fill ratio of an HP bar, clamped to [0, 100].

    Args:
        current (int): The current hit points.
        maximum (int): The maximum hit points.

    Returns:
        float: The percentage, 0 when the maximum is not positive.

    """
    if maximum <= 0:
        return 0.0
    return max(0.0, min(100.0, current / maximum * 100))


def make_bar(current: int, maximum: int, length: int = 20, color: str = "white") -> str:
    """
    Creates a visual progress bar representation.

    Args:
        current (int): The current value.
        maximum (int): The maximum value.
        length (int): The length of the bar in characters. Defaults to 20.
        color (str): The color for the filled portion. Defaults to "white".

    Returns:
        str: A formatted progress bar string.

    """
    # Compute the filled part of the bar.
    filled = int(hp_percent(current, maximum) / 100 * length)
    # Compute the empty part of the bar.
    empty = length - filled
    # Start by creating the bar with the filled part.
    bar = f"[{color}]" + "▮" * filled
    # If there is an empty part, add it to the bar.
    if empty > 0:
        bar += "[dim white]" + "▯" * empty + "[/]"
    bar += "[/]"
    return bar
