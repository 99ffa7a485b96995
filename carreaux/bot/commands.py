"""Chat command dispatcher for the carreaux game."""

import logging
from typing import Optional

from ..game.session import SessionStore
from ..models.game import Hint, Marker, MoveResult, Session
from .render import marker_emoji, marker_label, marker_name, plural, render_board

logger = logging.getLogger(__name__)

COMMAND_NAME = "c"


def parse_coordinate(text: str) -> Optional[int]:
    """Parse a board coordinate typed by a user."""
    try:
        return int(text.strip())
    except ValueError:
        return None


class CommandHandler:
    """Turns `c ...` chat commands into game operations and reply text.

    All rules live in the session store and engine; this class only picks
    the operation and formats the reply.
    """

    def __init__(self, store: SessionStore, prefix: str = "."):
        self.store = store
        self.prefix = prefix
        self._subcommands = {
            "start": self._new_game,
            "nouveau": self._new_game,
            "new": self._new_game,
            "plateau": self._show_board,
            "board": self._show_board,
            "show": self._show_board,
            "score": self._show_stats,
            "stats": self._show_stats,
            "aide": self._show_help,
            "help": self._show_help,
            "hint": self._show_hints,
            "indice": self._show_hints,
            "quit": self._quit,
            "quitter": self._quit,
            "stop": self._quit,
        }

    @property
    def command(self) -> str:
        return f"{self.prefix}{COMMAND_NAME}"

    async def handle_text(self, conversation_id: str, text: str) -> str:
        """Handle the argument part of a message, e.g. '2 3' or 'hint'."""
        return await self.handle(conversation_id, text.split())

    async def handle(self, conversation_id: str, args: list[str]) -> str:
        """Handle one command and return the reply. Never raises."""
        try:
            session = await self.store.ensure_session(conversation_id)

            sub = args[0].lower() if args else None
            handler = self._subcommands.get(sub)
            if handler is not None:
                return await handler(conversation_id, session)

            if len(args) >= 2:
                x = parse_coordinate(args[0])
                y = parse_coordinate(args[1])
                if x is not None and y is not None:
                    return await self._play(conversation_id, session, x, y)

            return self._unknown_command()

        except Exception:
            logger.exception("Carreaux command failed for %s", conversation_id)
            return (
                "❌ *Erreur inattendue*\n\n"
                f"Une erreur s'est produite. Utilisez `{self.command} start` pour recommencer."
            )

    async def _new_game(self, conversation_id: str, session: Session) -> str:
        session = await self.store.new_session(conversation_id)
        return (
            "🎮 *Nouvelle partie de carreaux !*\n\n"
            f"{render_board(session.grid)}\n\n"
            f"{marker_emoji(session.turn)} *Tour du joueur {marker_name(session.turn)}*\n\n"
            f"📝 *Utilise:* `{self.command} x y` pour jouer\n"
            f"💡 *Objectif:* Former des carrés 2x2 ({self.store.config.win_score} points pour gagner)"
        )

    async def _show_board(self, conversation_id: str, session: Session) -> str:
        stats = await self.store.get_stats(conversation_id)
        return (
            "🎮 *Plateau actuel*\n\n"
            f"{render_board(session.grid)}\n\n"
            f"📊 *Score:* 🔴 {stats.score_r} - 🔵 {stats.score_b}\n"
            f"🎯 *Tour:* {marker_emoji(stats.current_player)}\n"
            f"📈 *Coups joués:* {stats.total_moves}\n"
            f"⚪ *Cases libres:* {stats.empty_cells}\n"
            f"⏱️ *Temps:* {stats.elapsed}"
        )

    async def _show_stats(self, conversation_id: str, session: Session) -> str:
        stats = await self.store.get_stats(conversation_id)
        return (
            "📊 *Statistiques de la partie*\n\n"
            "🏆 *Score:*\n"
            f"🔴 Rouge: {stats.score_r}\n"
            f"🔵 Bleu: {stats.score_b}\n\n"
            f"🎯 *Tour:* {marker_emoji(stats.current_player)}\n"
            f"📈 *Coups joués:* {stats.total_moves}\n"
            f"⏱️ *Temps de jeu:* {stats.elapsed}\n"
            f"🎲 *Objectif:* {self.store.config.win_score} carrés pour gagner"
        )

    async def _show_help(self, conversation_id: str, session: Session) -> str:
        size = self.store.config.grid_size
        cmd = self.command
        return (
            "🎮 *Aide - Jeu des Carreaux*\n\n"
            "🎯 *Objectif:* Former des carrés 2x2 avec vos pions\n\n"
            "📝 *Commandes:*\n"
            f"• `{cmd} x y` - Placer un pion\n"
            f"• `{cmd} plateau` - Voir le plateau\n"
            f"• `{cmd} score` - Voir les stats\n"
            f"• `{cmd} hint` - Obtenir des indices\n"
            f"• `{cmd} start` - Nouvelle partie\n"
            f"• `{cmd} quit` - Quitter\n\n"
            "🎲 *Règles:*\n"
            f"• Grille {size}x{size}, 2 joueurs alternent\n"
            "• +1 point par carré 2x2 formé\n"
            f"• Premier à {self.store.config.win_score} points gagne\n"
            f"• Coordonnées: x=colonne (0-{size - 1}), y=ligne (0-{size - 1})"
        )

    async def _show_hints(self, conversation_id: str, session: Session) -> str:
        hints = await self.store.get_hints(conversation_id)
        board = render_board(session.grid)
        if not hints:
            return (
                "🤔 *Aucun coup gagnant immédiat*\n\n"
                f"{board}\n\n"
                "💭 Cherchez des positions qui complètent des carrés !"
            )

        lines = [f"💡 *Indices pour {marker_emoji(session.turn)}:*", ""]
        lines.extend(self._format_hint(i, hint) for i, hint in enumerate(hints, start=1))
        return "\n".join(lines) + f"\n\n{board}"

    @staticmethod
    def _format_hint(rank: int, hint: Hint) -> str:
        return f"{rank}. Position ({hint.x},{hint.y}) - {hint.squares} {plural(hint.squares, 'carré')}"

    async def _quit(self, conversation_id: str, session: Session) -> str:
        stats = await self.store.end_session(conversation_id)
        return (
            "🏁 *Partie terminée !*\n\n"
            "📊 *Statistiques finales:*\n"
            f"🔴 Rouge: {stats.score_r} - 🔵 Bleu: {stats.score_b}\n"
            f"⏱️ Temps total: {stats.elapsed}\n"
            f"📈 Coups joués: {stats.total_moves}\n\n"
            "Merci d'avoir joué ! 🎮"
        )

    async def _play(self, conversation_id: str, session: Session, x: int, y: int) -> str:
        result = await self.store.validate_and_apply_move(conversation_id, x, y)

        if not result.accepted:
            return (
                "⛔ *Coup invalide !*\n\n"
                f"❌ Position ({x},{y}) non valide ou déjà occupée\n"
                f"💡 Utilisez des coordonnées entre 0 et {session.size - 1}\n\n"
                f"{render_board(session.grid)}"
            )

        return self._squares_line(result) + self._outcome(result)

    @staticmethod
    def _squares_line(result: MoveResult) -> str:
        n = result.squares_formed
        if n == 0:
            return ""
        return (
            f"🎉 *{n} {plural(n, 'carré')} {plural(n, 'formé')} !* "
            f"+{n} {plural(n, 'point')} pour {marker_emoji(result.player)}\n\n"
        )

    def _outcome(self, result: MoveResult) -> str:
        board = render_board(result.grid)
        score = f"🔴 {result.score[Marker.RED]} - 🔵 {result.score[Marker.BLUE]}"

        if result.winner is not None:
            return (
                f"🏆 *{marker_label(result.winner)} remporte la partie !*\n\n"
                f"{board}\n\n"
                f"📊 *Score final:* {score}\n"
                f"⏱️ *Temps total:* {result.stats.elapsed}\n"
                f"📈 *Coups joués:* {result.stats.total_moves}\n\n"
                "🎉 Félicitations ! 🎉"
            )

        if result.draw:
            return (
                "🤝 *Match nul !*\n\n"
                f"{board}\n\n"
                f"📊 *Score final:* {score}\n"
                f"⏱️ *Temps total:* {result.stats.elapsed}\n\n"
                "🎲 Bonne partie !"
            )

        return (
            f"{board}\n\n"
            f"📊 *Score:* {score}\n"
            f"🎯 *Tour:* {marker_emoji(result.turn)}\n\n"
            f"💡 *Astuce:* Utilisez `{self.command} hint` pour des indices"
        )

    def _unknown_command(self) -> str:
        cmd = self.command
        return (
            "❓ *Commande non reconnue*\n\n"
            "📝 *Commandes disponibles:*\n"
            f"• `{cmd} aide` - Voir l'aide complète\n"
            f"• `{cmd} plateau` - Voir le plateau\n"
            f"• `{cmd} x y` - Placer un pion\n"
            f"• `{cmd} hint` - Obtenir des indices\n"
            f"• `{cmd} start` - Nouvelle partie\n\n"
            f"💡 *Exemple:* `{cmd} 2 3` pour placer un pion en colonne 2, ligne 3"
        )
