"""
Historique undo/redo linéaire sur le Document complet (blocs + settings).

  - set_state identique à l'état courant → no-op (jitter de drag, écritures redondantes)
  - nouvel état → les états « futurs » sont abandonnés, puis ajout
  - pas de limite de taille, pas de persistance
"""
import logging
from typing import List

from .core.schemas import Document

log = logging.getLogger(__name__)


class HistoryManager:
    """
    Usage:
        >>> history = HistoryManager(Document())
        >>> history.set_state(new_doc)
        >>> history.undo()
    """

    def __init__(self, initial: Document | None = None):
        self._states: List[Document] = [(initial or Document()).model_copy(deep=True)]
        self._cursor = 0

    @property
    def state(self) -> Document:
        return self._states[self._cursor]

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._states) - 1

    def __len__(self) -> int:
        return len(self._states)

    def set_state(self, state: Document) -> bool:
        """Ajoute un snapshot. Retourne False si l'état est identique au courant."""
        if state.model_dump() == self.state.model_dump():
            return False
        del self._states[self._cursor + 1:]
        # copie profonde : aucun snapshot ne peut être modifié après coup
        self._states.append(state.model_copy(deep=True))
        self._cursor += 1
        return True

    def undo(self) -> Document:
        if self.can_undo:
            self._cursor -= 1
        return self.state

    def redo(self) -> Document:
        if self.can_redo:
            self._cursor += 1
        return self.state

    def reset(self, state: Document) -> None:
        """Repart d'un historique vierge (ex : import de sauvegarde)."""
        self._states = [state.model_copy(deep=True)]
        self._cursor = 0
        log.info("Historique réinitialisé")
