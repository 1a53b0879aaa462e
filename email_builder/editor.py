"""
API publique de l'éditeur email.

EmailEditor relie les briques : résolution du dépôt → mutation pure de
l'arbre → commit dans l'historique → rendu HTML à la demande.

Verrous : toute mutation d'un bloc verrouillé (ou d'un bloc situé dans un
layout verrouillé) lève LockedBlockError avant le moindre changement.
Cible disparue (course avec une suppression) : no-op journalisé.
"""
import logging
from typing import Any, Dict, List, Optional

from .blocks import BaseBlock, LayoutBlock, check_column_widths, create_block
from .core.schemas import ColumnLocation, Document, DropLocation, Favorite, Settings, Template
from .errors import LockedBlockError, TargetNotFoundError
from .history import HistoryManager
from .renderer.base import Renderer
from .renderer.html import EmailHtmlRenderer
from .tree import mutations as tree
from .tree.drop import BlockSource, HoverTarget, apply_drop, resolve_drop

log = logging.getLogger(__name__)


class EmailEditor:
    """
    Éditeur d'email (état courant + historique + sélection).

    Usage:
        >>> editor = EmailEditor()
        >>> block = editor.add_block("text", RootLocation(index=0))
        >>> editor.update_block(block.id, {"content": "Bonjour"})
        >>> editor.undo()
        >>> html = editor.render()
    """

    def __init__(self, document: Document | None = None, renderer: Renderer | None = None):
        self.history = HistoryManager(document or Document())
        self.renderer = renderer or EmailHtmlRenderer()
        self.selected_id: Optional[str] = None

    # ── État ────────────────────────────────────────────────────────────────

    @property
    def document(self) -> Document:
        return self.history.state

    @property
    def blocks(self) -> List[BaseBlock]:
        return list(self.document.blocks)

    @property
    def settings(self) -> Settings:
        return self.document.settings

    def find(self, block_id: str) -> Optional[BaseBlock]:
        return tree.find_block(block_id, self.document.blocks)

    # ── Historique ──────────────────────────────────────────────────────────

    def commit(self, document: Document) -> bool:
        return self.history.set_state(document)

    def undo(self) -> Document:
        return self.history.undo()

    def redo(self) -> Document:
        return self.history.redo()

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def _commit_blocks(self, blocks: List[BaseBlock]) -> bool:
        return self.commit(Document(blocks=blocks, settings=self.document.settings))

    # ── Verrous ─────────────────────────────────────────────────────────────

    def is_locked(self, block_id: str) -> bool:
        """Verrouillé lui-même, ou contenu dans un layout verrouillé."""
        block = self.find(block_id)
        if block is None:
            return False
        parent = tree.find_parent(block_id, self.document.blocks)
        return block.locked or (parent is not None and parent.locked)

    def _ensure_mutable(self, block_id: str) -> BaseBlock:
        block = tree.require_block(block_id, self.document.blocks)
        if self.is_locked(block_id):
            log.warning("Mutation refusée : bloc %s verrouillé", block_id)
            raise LockedBlockError(block_id)
        return block

    def _ensure_target_unlocked(self, location: DropLocation) -> None:
        if isinstance(location, ColumnLocation):
            layout = self.find(location.layout_id)
            if layout is not None and layout.locked:
                log.warning("Dépôt refusé : layout %s verrouillé", layout.id)
                raise LockedBlockError(layout.id)

    def lock_block(self, block_id: str) -> bool:
        return self._set_locked(block_id, True)

    def unlock_block(self, block_id: str) -> bool:
        return self._set_locked(block_id, False)

    def _set_locked(self, block_id: str, locked: bool) -> bool:
        if self.find(block_id) is None:
            log.warning("Verrou ignoré : bloc %s introuvable", block_id)
            return False
        blocks = tree.map_block(
            self.document.blocks, block_id, lambda b: b.model_copy(update={"locked": locked}),
        )
        return self._commit_blocks(blocks)

    # ── Mutations ───────────────────────────────────────────────────────────

    def add_block(self, kind: str, location: DropLocation, **params: Any) -> Optional[BaseBlock]:
        """Crée un bloc (palette) et l'insère ; None si la cible a disparu."""
        self._ensure_target_unlocked(location)
        block = create_block(kind, **params)
        return self._insert(block, location)

    def insert_snapshot(self, snapshot: BaseBlock, location: DropLocation) -> Optional[BaseBlock]:
        """Insère un clone (ids neufs) d'un favori."""
        self._ensure_target_unlocked(location)
        return self._insert(tree.clone_with_fresh_identities(snapshot), location)

    def _insert(self, block: BaseBlock, location: DropLocation) -> Optional[BaseBlock]:
        blocks = tree.insert_at(self.document.blocks, location, block)
        if tree.find_block(block.id, blocks) is None:
            return None
        self._commit_blocks(blocks)
        self.selected_id = block.id
        return block

    def update_block(self, block_id: str, changes: Dict[str, Any]) -> bool:
        """Mise à jour partielle (merge). False si rien n'a changé."""
        try:
            self._ensure_mutable(block_id)
        except TargetNotFoundError:
            log.warning("update_block ignoré : bloc %s introuvable", block_id)
            return False
        if "locked" in changes:
            raise ValueError("utiliser lock_block / unlock_block pour le verrou")
        return self._commit_blocks(tree.update_block(self.document.blocks, block_id, changes))

    def set_column_widths(self, layout_id: str, widths: Optional[List[float]]) -> bool:
        layout = self.find(layout_id)
        if not isinstance(layout, LayoutBlock):
            log.warning("set_column_widths ignoré : layout %s introuvable", layout_id)
            return False
        if widths is not None:
            check_column_widths(widths, layout.column_count)
        return self.update_block(layout_id, {"column_widths": widths})

    def delete_block(self, block_id: str) -> bool:
        try:
            block = self._ensure_mutable(block_id)
        except TargetNotFoundError:
            log.warning("delete_block ignoré : bloc %s introuvable", block_id)
            return False
        if self.selected_id is not None and tree.find_block(self.selected_id, [block]) is not None:
            self.selected_id = None
        return self._commit_blocks(tree.remove_block(self.document.blocks, block_id))

    def move_block(self, block_id: str, location: DropLocation) -> bool:
        try:
            self._ensure_mutable(block_id)
        except TargetNotFoundError:
            log.warning("move_block ignoré : bloc %s introuvable", block_id)
            return False
        self._ensure_target_unlocked(location)
        changed = self._commit_blocks(tree.move_block(self.document.blocks, block_id, location))
        self.selected_id = block_id
        return changed

    def duplicate_block(self, block_id: str) -> BaseBlock:
        """Clone inséré juste après l'original, dans la même liste."""
        source = tree.require_block(block_id, self.document.blocks)
        location = tree.locate(block_id, self.document.blocks)
        location = location.model_copy(update={"index": location.index + 1})
        self._ensure_target_unlocked(location)
        clone = tree.duplicate_block(source)
        self._commit_blocks(tree.insert_at(self.document.blocks, location, clone))
        self.selected_id = clone.id
        return clone

    def favorite_block(self, block_id: str) -> BaseBlock:
        """Snapshot à ids neufs, destiné à la persistance externe."""
        return tree.clone_with_fresh_identities(tree.require_block(block_id, self.document.blocks))

    def save_favorite(self, block_id: str, name: str) -> Favorite:
        return Favorite(name=name, block=self.favorite_block(block_id))

    def update_settings(self, changes: Dict[str, Any]) -> bool:
        settings = Settings.model_validate({**self.document.settings.model_dump(), **changes})
        return self.commit(Document(blocks=self.document.blocks, settings=settings))

    # ── Drag & drop ─────────────────────────────────────────────────────────

    def resolve(self, source, hover: HoverTarget) -> Optional[DropLocation]:
        return resolve_drop(self.document.blocks, source, hover)

    def drop(self, source, hover: HoverTarget) -> Optional[DropLocation]:
        """Résout puis valide le dépôt ; le bloc déposé devient la sélection."""
        location = self.resolve(source, hover)
        if location is None:
            return None
        if isinstance(source, BlockSource):
            try:
                self._ensure_mutable(source.block_id)
            except TargetNotFoundError:
                log.warning("Dépôt ignoré : bloc %s introuvable", source.block_id)
                return None
        self._ensure_target_unlocked(location)
        blocks, selected = apply_drop(self.document.blocks, source, location)
        if selected is None:
            return None
        self._commit_blocks(blocks)
        self.selected_id = selected
        return location

    # ── Templates ───────────────────────────────────────────────────────────

    def save_template(self, name: str) -> Template:
        return Template(name=name, document=self.document.model_copy(deep=True))

    def apply_template(self, template: Template | Document) -> bool:
        """Remplace le document courant par une copie à ids neufs du template."""
        document = template.document if isinstance(template, Template) else template
        self.selected_id = None
        return self.commit(Document(
            blocks=tree.clone_blocks(document.blocks),
            settings=document.settings.model_copy(),
        ))

    # ── Rendu ───────────────────────────────────────────────────────────────

    def render(self) -> str:
        return self.renderer.render_document(self.document)
