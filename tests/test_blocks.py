"""Tests blocs — valeurs par défaut, factory, invariants de layout, union discriminée."""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime, timedelta

import pytest
from pydantic import TypeAdapter, ValidationError

from email_builder.blocks import (
    BLOCK_TYPES, BlockUnion, ButtonGroupBlock, CalendarBlock, Column, FooterBlock,
    ImageBlock, LayoutBlock, LogoBlock, SocialBlock, TextBlock, create_block,
)
from email_builder.core.schemas import Document, iter_identifiers
from email_builder.errors import UnsupportedKindError


# ── Valeurs par défaut ──────────────────────────────────────────────────────

def test_text_defaults():
    b = TextBlock()
    assert b.block_type == "text"
    assert b.font_size == 16
    assert b.use_global_font is True
    assert b.use_global_color is True
    assert b.locked is False
    assert b.id.startswith("comp_")


def test_footer_does_not_follow_global_color():
    b = FooterBlock()
    assert b.font_size == 12
    assert b.color == "#888888"
    assert b.text_align == "center"
    assert b.use_global_color is False
    assert "Unsubscribe" in b.content


def test_image_defaults_have_natural_size():
    b = ImageBlock()
    assert b.src == ""
    assert (b.natural_width, b.natural_height) == (600, 300)
    assert b.width == 100


def test_logo_width_in_pixels():
    b = LogoBlock()
    assert b.width == 150
    assert b.alt == "Company Logo"


def test_social_links_have_own_ids():
    b = SocialBlock()
    assert [l.platform for l in b.links] == ["facebook", "twitter", "instagram"]
    assert all(l.id.startswith("social_") for l in b.links)
    assert len({l.id for l in b.links}) == 3


def test_button_group_sub_buttons_have_ids():
    b = ButtonGroupBlock()
    assert len(b.buttons) == 2
    assert all(btn.id.startswith("btn_") for btn in b.buttons)


def test_ids_unique_between_instances():
    assert TextBlock().id != TextBlock().id


# ── Calendar ────────────────────────────────────────────────────────────────

def test_calendar_end_defaults_to_one_hour_after_start():
    b = CalendarBlock(start=datetime(2024, 1, 1, 10, 0))
    assert b.end == datetime(2024, 1, 1, 11, 0)


def test_calendar_rejects_end_before_start():
    with pytest.raises(ValidationError):
        CalendarBlock(start=datetime(2024, 1, 1, 10, 0), end=datetime(2024, 1, 1, 9, 0))


def test_calendar_default_start_is_future_hour():
    b = CalendarBlock()
    assert b.start.minute == 0
    assert b.end - b.start == timedelta(hours=1)


# ── Factory ─────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("kind", BLOCK_TYPES)
def test_create_every_kind(kind):
    b = create_block(kind)
    assert b.block_type == kind


def test_create_block_with_params():
    b = create_block("text", content="Bonjour", font_size=20)
    assert b.content == "Bonjour"
    assert b.font_size == 20


def test_create_two_and_three_column_aliases():
    two = create_block("two-column")
    three = create_block("three-column")
    assert isinstance(two, LayoutBlock) and two.column_count == 2
    assert len(three.columns) == 3
    assert all(c.components == [] for c in three.columns)


def test_unsupported_kind_raises():
    with pytest.raises(UnsupportedKindError) as exc:
        create_block("carousel")
    assert exc.value.kind == "carousel"


# ── Layout ──────────────────────────────────────────────────────────────────

def test_layout_columns_match_count():
    with pytest.raises(ValidationError):
        LayoutBlock(column_count=3, columns=[Column(), Column()])


@pytest.mark.parametrize("widths", [
    [50, 40],          # somme ≠ 100
    [95, 5],           # < 10 %
    [30, 30, 40],      # mauvais nombre
])
def test_layout_rejects_invalid_widths(widths):
    with pytest.raises(ValidationError):
        LayoutBlock(column_count=2, column_widths=widths)


def test_layout_accepts_widths_within_tolerance():
    b = LayoutBlock(column_count=3, column_widths=[33.33, 33.33, 33.34])
    assert b.effective_widths() == [33.33, 33.33, 33.34]


def test_layout_equal_widths_when_absent():
    assert LayoutBlock(column_count=2).effective_widths() == [50, 50]


def test_column_refuses_nested_layout():
    with pytest.raises(ValidationError):
        LayoutBlock(columns=[
            Column(components=[{"block_type": "layout"}]),
            Column(),
        ])


# ── Union discriminée / Document ────────────────────────────────────────────

def test_union_parses_by_block_type():
    adapter = TypeAdapter(BlockUnion)
    b = adapter.validate_python({"block_type": "button", "text": "Go"})
    assert b.text == "Go"
    with pytest.raises(ValidationError):
        adapter.validate_python({"block_type": "marquee"})


def test_document_rejects_duplicate_ids():
    a = TextBlock()
    with pytest.raises(ValidationError):
        Document(blocks=[a, a.model_copy()])


def test_iter_identifiers_covers_nested_items():
    social = SocialBlock()
    layout = LayoutBlock(columns=[Column(components=[social]), Column()])
    ids = iter_identifiers([layout])
    assert layout.id in ids
    assert all(c.id in ids for c in layout.columns)
    assert all(l.id in ids for l in social.links)
    assert len(ids) == 1 + 2 + 1 + 3
