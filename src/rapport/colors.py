"""Display colours for reports."""

from __future__ import annotations

RGB = tuple[int, int, int]

# Warm, friendly tones
PALETTE: tuple[RGB, ...] = (
    (100, 149, 237),  # cornflower blue
    (143, 188, 143),  # sage green
    (205, 133, 63),  # terracotta
    (147, 112, 219),  # medium purple
    (240, 128, 128),  # light coral
    (72, 61, 139),  # dark slate blue
    (189, 183, 107),  # khaki
    (178, 102, 102),  # dusty rose
    (70, 130, 180),  # steel blue
    (102, 178, 102),  # soft green
)


def color_from_name(name: str) -> RGB:
    h = 0
    for b in name.encode("utf-8"):
        h = (h * 31 + b) & 0xFFFFFFFF
    return PALETTE[h % len(PALETTE)]


def parse_hex_color(value: str) -> RGB | None:
    """Parse "#RRGGBB" (leading '#' optional)."""
    value = value.strip().lstrip("#")
    if len(value) != 6:
        return None
    try:
        return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))
    except ValueError:
        return None


def report_color(explicit: str | None, name: str) -> RGB:
    if explicit:
        parsed = parse_hex_color(explicit)
        if parsed is not None:
            return parsed
    return color_from_name(name)


# The eight standard terminal colours, in curses numbering.
BASIC_COLORS: tuple[RGB, ...] = (
    (0, 0, 0),  # black
    (205, 0, 0),  # red
    (0, 205, 0),  # green
    (205, 205, 0),  # yellow
    (0, 0, 238),  # blue
    (205, 0, 205),  # magenta
    (0, 205, 205),  # cyan
    (229, 229, 229),  # white
)


def nearest_basic_color(rgb: RGB) -> int:
    """Index of the closest standard terminal colour other than black."""
    def distance(candidate: RGB) -> int:
        return sum((a - b) ** 2 for a, b in zip(rgb, candidate))

    return min(range(1, len(BASIC_COLORS)), key=lambda i: distance(BASIC_COLORS[i]))
