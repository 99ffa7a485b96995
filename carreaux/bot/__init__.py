"""Chat command front-end."""

from .commands import CommandHandler
from .render import render_board

__all__ = ["CommandHandler", "render_board"]
