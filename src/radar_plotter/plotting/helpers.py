import math

from matplotlib.ticker import FuncFormatter


def format_tick(value, integer_mode: bool) -> str:
    """
    Render a scale value for an axis label.

    Integer mode rounds half-up and drops decimals. Otherwise precision
    depends on magnitude: two decimals below 1, one below 10, whole numbers
    from 10 up.
    """
    try:
        v = float(value)
    except (TypeError, ValueError):
        return ""
    if not math.isfinite(v):
        return ""

    if integer_mode or abs(v) >= 10:
        text = f"{math.floor(v + 0.5):d}"
    elif abs(v) < 1:
        text = f"{v:.2f}"
    else:
        text = f"{v:.1f}"

    # "-0.00" and friends read as noise on an axis
    if text.startswith("-") and float(text) == 0:
        text = text[1:]
    return text


def tick_formatter(integer_mode: bool) -> FuncFormatter:
    return FuncFormatter(lambda v, pos: format_tick(v, integer_mode))
