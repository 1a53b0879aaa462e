"""Algorithmes sur l'arbre de blocs : mutations pures + résolution du drag & drop."""
from .mutations import (
    accepts,
    clone_blocks,
    clone_with_fresh_identities,
    duplicate_block,
    find_block,
    find_parent,
    insert_at,
    locate,
    map_block,
    merge_fields,
    move_block,
    remove_block,
    require_block,
    update_block,
)
from .drop import (
    BlockSource,
    ColumnContainer,
    DragSource,
    HoverTarget,
    PaletteSource,
    RootContainer,
    SnapshotSource,
    apply_drop,
    half_from_pointer,
    resolve_drop,
)

__all__ = [
    "accepts", "clone_blocks", "clone_with_fresh_identities", "duplicate_block",
    "find_block", "find_parent", "insert_at", "locate", "map_block", "merge_fields",
    "move_block", "remove_block", "require_block", "update_block",
    "BlockSource", "ColumnContainer", "DragSource", "HoverTarget", "PaletteSource",
    "RootContainer", "SnapshotSource", "apply_drop", "half_from_pointer", "resolve_drop",
]
