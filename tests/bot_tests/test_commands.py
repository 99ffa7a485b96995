"""Tests for the chat command dispatcher."""

# Add project root to path for imports BEFORE other imports
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from unittest.mock import AsyncMock, patch

import pytest

from carreaux.bot.commands import CommandHandler, parse_coordinate
from carreaux.game.session import SessionStore
from carreaux.models.game import GameConfig, Marker
from conftest import RED_SQUARE_SEQUENCE


CHAT = "chat-1"


@pytest.fixture
def handler(store) -> CommandHandler:
    """Dispatcher over a default store."""
    return CommandHandler(store, prefix=".")


# =============================================================================
# Coordinate Parsing
# =============================================================================


class TestParseCoordinate:
    """Tests for parse_coordinate."""

    @pytest.mark.parametrize(
        "text,expected",
        [("0", 0), ("4", 4), (" 2 ", 2), ("-1", -1), ("12", 12), ("a", None), ("2.5", None), ("", None)],
    )
    def test_parse(self, text, expected):
        """Test integer parsing of user input."""
        assert parse_coordinate(text) == expected


# =============================================================================
# Sub-commands
# =============================================================================


class TestSubcommands:
    """Tests for the non-move sub-commands."""

    def test_command_name_uses_prefix(self, store):
        """Test the displayed command follows the prefix."""
        assert CommandHandler(store, prefix="!").command == "!c"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("alias", ["start", "nouveau", "new", "START"])
    async def test_new_game(self, handler, store, alias):
        """Test the new-game aliases reset the game."""
        await handler.handle(CHAT, ["0", "0"])

        reply = await handler.handle(CHAT, [alias])

        assert "Nouvelle partie de carreaux" in reply
        assert "Tour du joueur Rouge" in reply
        assert "5 points pour gagner" in reply
        assert (await store.get_session(CHAT)).move_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("alias", ["plateau", "board", "show"])
    async def test_show_board(self, handler, alias):
        """Test the board view shows counters."""
        await handler.handle(CHAT, ["1", "1"])

        reply = await handler.handle(CHAT, [alias])

        assert "Plateau actuel" in reply
        assert "Coups joués:* 1" in reply
        assert "Cases libres:* 24" in reply
        assert "Tour:* 🔵" in reply

    @pytest.mark.asyncio
    @pytest.mark.parametrize("alias", ["score", "stats"])
    async def test_show_stats(self, handler, alias):
        """Test the stats view."""
        reply = await handler.handle(CHAT, [alias])

        assert "Statistiques de la partie" in reply
        assert "🔴 Rouge: 0" in reply
        assert "🔵 Bleu: 0" in reply

    @pytest.mark.asyncio
    @pytest.mark.parametrize("alias", ["aide", "help"])
    async def test_help(self, handler, alias):
        """Test the help text lists the commands and rules."""
        reply = await handler.handle(CHAT, [alias])

        assert "Aide - Jeu des Carreaux" in reply
        assert "`.c x y`" in reply
        assert "Grille 5x5" in reply
        assert "x=colonne (0-4)" in reply

    @pytest.mark.asyncio
    async def test_hints_none(self, handler):
        """Test the hint reply when nothing scores."""
        reply = await handler.handle(CHAT, ["hint"])

        assert "Aucun coup gagnant immédiat" in reply

    @pytest.mark.asyncio
    async def test_hints_listed(self, handler):
        """Test hints are listed for the player to move."""
        for x, y in RED_SQUARE_SEQUENCE[:-1]:
            await handler.handle(CHAT, [str(x), str(y)])

        reply = await handler.handle(CHAT, ["indice"])

        assert "Indices pour 🔴" in reply
        assert "1. Position (1,1) - 1 carré" in reply

    @pytest.mark.asyncio
    @pytest.mark.parametrize("alias", ["quit", "quitter", "stop"])
    async def test_quit(self, handler, store, alias):
        """Test quitting ends the game with final stats."""
        await handler.handle(CHAT, ["0", "0"])

        reply = await handler.handle(CHAT, [alias])

        assert "Partie terminée" in reply
        assert "Coups joués: 1" in reply
        assert await store.has_session(CHAT) is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("args", [[], ["foo"], ["2"], ["a", "b"]])
    async def test_unknown_command(self, handler, args):
        """Test unrecognised input shows the command list."""
        reply = await handler.handle(CHAT, args)

        assert "Commande non reconnue" in reply
        assert "`.c 2 3`" in reply

    @pytest.mark.asyncio
    async def test_first_interaction_creates_game(self, handler, store):
        """Test any command starts a game when none exists."""
        await handler.handle(CHAT, ["help"])

        assert await store.has_session(CHAT) is True

    @pytest.mark.asyncio
    async def test_handle_text(self, handler, store):
        """Test raw argument text is split into words."""
        await handler.handle_text(CHAT, "  3   4 ")

        assert (await store.get_session(CHAT)).grid[4][3] == Marker.RED


# =============================================================================
# Moves
# =============================================================================


class TestMoves:
    """Tests for move replies."""

    @pytest.mark.asyncio
    async def test_accepted_move(self, handler):
        """Test a normal move shows the board and next player."""
        reply = await handler.handle(CHAT, ["2", "3"])

        assert "Tour:* 🔵" in reply
        assert "Score:* 🔴 0 - 🔵 0" in reply
        assert "`.c hint`" in reply

    @pytest.mark.asyncio
    @pytest.mark.parametrize("args", [["9", "9"], ["-1", "0"], ["0", "5"]])
    async def test_out_of_bounds(self, handler, store, args):
        """Test out-of-range moves are rejected without a state change."""
        reply = await handler.handle(CHAT, args)

        assert "Coup invalide" in reply
        assert "entre 0 et 4" in reply
        session = await store.get_session(CHAT)
        assert session.move_count == 0
        assert session.turn == Marker.RED

    @pytest.mark.asyncio
    async def test_occupied_cell(self, handler, store):
        """Test playing an occupied cell is rejected."""
        await handler.handle(CHAT, ["1", "1"])

        reply = await handler.handle(CHAT, ["1", "1"])

        assert "Position (1,1) non valide ou déjà occupée" in reply
        assert (await store.get_session(CHAT)).turn == Marker.BLUE

    @pytest.mark.asyncio
    async def test_square_formed(self, handler, store):
        """Test completing a square announces the point."""
        for x, y in RED_SQUARE_SEQUENCE[:-1]:
            await handler.handle(CHAT, [str(x), str(y)])

        reply = await handler.handle(CHAT, ["1", "1"])

        assert "1 carré formé !* +1 point pour 🔴" in reply
        assert "Score:* 🔴 1 - 🔵 0" in reply
        assert (await store.get_session(CHAT)).score[Marker.RED] == 1

    @pytest.mark.asyncio
    async def test_win(self):
        """Test a winning move announces the winner and ends the game."""
        store = SessionStore(config=GameConfig(win_score=1))
        handler = CommandHandler(store)
        for x, y in RED_SQUARE_SEQUENCE[:-1]:
            await handler.handle(CHAT, [str(x), str(y)])

        reply = await handler.handle(CHAT, ["1", "1"])

        assert "🔴 Rouge remporte la partie" in reply
        assert "Score final:* 🔴 1 - 🔵 0" in reply
        assert "Coups joués:* 7" in reply
        assert await store.has_session(CHAT) is False

    @pytest.mark.asyncio
    async def test_draw(self):
        """Test a full grid without a winner announces a draw."""
        store = SessionStore(config=GameConfig(grid_size=2))
        handler = CommandHandler(store)

        for move in (["0", "0"], ["1", "0"], ["1", "1"]):
            await handler.handle(CHAT, move)
        reply = await handler.handle(CHAT, ["0", "1"])

        assert "Match nul" in reply
        assert "Score final:* 🔴 0 - 🔵 0" in reply
        assert await store.has_session(CHAT) is False


# =============================================================================
# Error Boundary
# =============================================================================


class TestErrorBoundary:
    """Tests for unexpected failures."""

    @pytest.mark.asyncio
    async def test_internal_error_reported(self, handler, store, caplog):
        """Test an unexpected fault becomes a generic reply."""
        with patch.object(
            store,
            "validate_and_apply_move",
            AsyncMock(side_effect=RuntimeError("boom")),
        ):
            reply = await handler.handle(CHAT, ["0", "0"])

        assert "Erreur inattendue" in reply
        assert "`.c start`" in reply
        assert "Carreaux command failed" in caplog.text

    @pytest.mark.asyncio
    async def test_game_usable_after_error(self, handler, store):
        """Test the session is untouched after a fault."""
        with patch.object(store, "get_hints", AsyncMock(side_effect=KeyError("x"))):
            await handler.handle(CHAT, ["hint"])

        reply = await handler.handle(CHAT, ["0", "0"])

        assert "Coup invalide" not in reply
        assert (await store.get_session(CHAT)).move_count == 1
