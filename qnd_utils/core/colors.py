"""Colour Helpers: tricolor gradients and hex conversion for CSS colour strings."""

from qnd_utils.core.domain_types import RGB, Tricolor
from qnd_utils.core.numbers import normalise, round_half_up


RED_BLUE_TRICOLOR: Tricolor = (
    (248, 105, 107),  # red
    (255, 255, 255),  # white
    (90, 138, 198),   # blue
)

RED_GREEN_TRICOLOR: Tricolor = (
    (180, 30, 30),    # red
    (160, 160, 70),   # yellow
    (30, 180, 30),    # green
)


def get_tricolor(percent: float, colors: Tricolor = RED_BLUE_TRICOLOR) -> str:
    """Interpolate a CSS rgb() colour for percent in [0, 1].

    0.0 maps to the low anchor, 0.5 to the mid anchor and 1.0 to the high anchor.
    """
    if percent <= 0.5:
        weight = normalise(percent, 0, 0.5)
        upper, lower = colors[1], colors[0]
    else:
        weight = normalise(percent, 0.5, 1)
        upper, lower = colors[2], colors[1]

    rgb = _blend(upper, lower, weight)
    return f"rgb({','.join(str(channel) for channel in rgb)})"


def _blend(upper: RGB, lower: RGB, weight: float) -> RGB:
    return tuple(
        round_half_up(u * weight + low * (1 - weight))
        for u, low in zip(upper, lower)
    )


def hex_to_rgb(hex_value: str, alpha: float | None = None) -> str:
    """Translate "#abc" / "aabbcc" into "rgb(r, g, b)", or "rgba(...)" when alpha is given."""
    hex_digits = hex_value.replace("#", "")
    if len(hex_digits) == 3:
        hex_digits = "".join(digit * 2 for digit in hex_digits)
    r = int(hex_digits[0:2], 16)
    g = int(hex_digits[2:4], 16)
    b = int(hex_digits[4:6], 16)
    if alpha is not None:
        return f"rgba({r}, {g}, {b}, {alpha})"
    return f"rgb({r}, {g}, {b})"
