"""Board rendering for chat replies."""

from typing import Optional

from ..models.game import Grid, Marker

CELL_EMOJI = {
    Marker.RED: "🔴",
    Marker.BLUE: "🔵",
    None: "⚪",
}

MARKER_NAMES = {
    Marker.RED: "Rouge",
    Marker.BLUE: "Bleu",
}


def marker_emoji(marker: Optional[Marker]) -> str:
    """Emoji for a marker, or for an empty cell."""
    return CELL_EMOJI[marker]


def marker_name(marker: Marker) -> str:
    return MARKER_NAMES[marker]


def marker_label(marker: Marker) -> str:
    """Emoji and name, e.g. '🔴 Rouge'."""
    return f"{CELL_EMOJI[marker]} {MARKER_NAMES[marker]}"


def plural(count: int, word: str) -> str:
    return f"{word}s" if count > 1 else word


def render_board(grid: Grid) -> str:
    """Render the grid as a monospace block with coordinates."""
    size = len(grid)
    lines = ["```"]
    lines.append("   " + "".join(f" {i}" for i in range(size)))
    lines.append("  ┌" + "──" * size + "┐")
    for y, row in enumerate(grid):
        cells = "".join(f"{CELL_EMOJI[cell]} " for cell in row)
        lines.append(f"{y} │{cells}│")
    lines.append("  └" + "──" * size + "┘")
    lines.append("```")
    return "\n".join(lines)
