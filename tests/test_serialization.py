"""Tests import / export JSON + palette."""
import sys, os, json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from email_builder.blocks import Column, LayoutBlock, SocialBlock, TextBlock, create_block
from email_builder.core.schemas import Document, Favorite, Settings, Template
from email_builder.errors import InvalidImportError
from email_builder.palette import (
    PALETTE, default_palette_order, get_item, move_palette_item, normalize_palette_order,
    ordered_items,
)
from email_builder.serialization import (
    Backup, export_backup, export_block, export_document, import_backup, import_block,
    import_document,
)


def _document():
    layout = LayoutBlock(
        column_widths=[40, 60],
        columns=[Column(components=[SocialBlock()]), Column(components=[create_block("calendar")])],
    )
    return Document(blocks=[TextBlock(content="Hé <b>ho</b>"), layout], settings=Settings(font_family="Georgia"))


# ── Document / bloc ─────────────────────────────────────────────────────────

def test_document_round_trip():
    doc = _document()
    restored = import_document(export_document(doc))
    assert restored.model_dump() == doc.model_dump()
    assert isinstance(restored.blocks[1], LayoutBlock)


def test_import_accepts_dict():
    doc = _document()
    assert import_document(json.loads(export_document(doc))).model_dump() == doc.model_dump()


def test_block_round_trip():
    b = create_block("button-group")
    restored = import_block(export_block(b))
    assert type(restored) is type(b)
    assert restored.model_dump() == b.model_dump()


@pytest.mark.parametrize("blob", [
    "{pas du json",
    "[1, 2, 3]",
    json.dumps({"blocks": [{"block_type": "marquee"}]}),
    json.dumps({"blocks": [{"block_type": "layout", "column_count": 4}]}),
])
def test_invalid_document_rejected(blob):
    with pytest.raises(InvalidImportError):
        import_document(blob)


def test_duplicate_ids_rejected():
    blob = json.dumps({"blocks": [
        {"block_type": "text", "id": "same"},
        {"block_type": "spacer", "id": "same"},
    ]})
    with pytest.raises(InvalidImportError):
        import_document(blob)


def test_invalid_block_rejected():
    with pytest.raises(InvalidImportError):
        import_block(json.dumps({"block_type": "image", "width": 500}))


# ── Sauvegarde ──────────────────────────────────────────────────────────────

def test_backup_round_trip():
    backup = Backup(
        document=_document(),
        favorites=[Favorite(name="Texte", block=TextBlock())],
        templates=[Template(name="Newsletter", document=_document())],
        palette_order=["image", "text"],
    )
    restored = import_backup(export_backup(backup))
    assert restored.model_dump() == backup.model_dump()


def test_backup_wrong_version_rejected():
    with pytest.raises(InvalidImportError):
        import_backup({"version": 99})


def test_backup_missing_parts_default_empty():
    backup = import_backup({"version": 1})
    assert backup.document.blocks == []
    assert backup.favorites == []


# ── Palette ─────────────────────────────────────────────────────────────────

def test_palette_kinds_are_creatable():
    for item in PALETTE:
        assert create_block(item.kind) is not None


def test_palette_layout_entries():
    assert get_item("two-column").is_layout
    assert not get_item("text").is_layout
    assert get_item("unknown") is None


def test_normalize_palette_order():
    order = normalize_palette_order(["emoji", "bogus", "text", "emoji"])
    assert order[:2] == ["emoji", "text"]
    assert sorted(order) == sorted(default_palette_order())


def test_normalize_none_gives_default():
    assert normalize_palette_order(None) == default_palette_order()


def test_move_palette_item():
    assert move_palette_item(["a", "b", "c"], 0, 2) == ["b", "c", "a"]
    assert move_palette_item(["a", "b", "c"], 5, 0) == ["a", "b", "c"]


def test_ordered_items_follow_order():
    assert ordered_items(["logo"])[0].kind == "logo"
