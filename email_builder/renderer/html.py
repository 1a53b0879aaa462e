"""
Renderer HTML email — génère un document HTML autonome à base de tables.

Contraintes clients mail : pas de flex / grid, styles inline, structure
table / tr / td uniquement. Un seul <style> : colonnes empilées sous 600px.

Dispatch par block_type, vérifié exhaustif à l'import.
"""
from typing import Callable, Dict

from ..blocks import (
    BLOCK_TYPES, BaseBlock, ButtonBlock, ButtonGroupBlock, CalendarBlock, CardBlock,
    DividerBlock, EmojiBlock, ImageBlock, LayoutBlock, LogoBlock, RichTextBlock,
    SOCIAL_ICONS, SocialBlock, SpacerBlock, VideoBlock,
)
from ..calendar_invite import calendar_data_uri
from ..core.schemas import Document, Settings
from .styles import (
    attr, container_style, format_percent, media_src, percent_to_px, placeholder_src,
    resolve_accent, resolve_color, resolve_font, usable_source,
)

EMAIL_WIDTH    = 600
BODY_PADDING   = 20
COLUMN_PADDING = 5
BODY_WIDTH     = EMAIL_WIDTH - 2 * BODY_PADDING

TABLE = 'border="0" cellpadding="0" cellspacing="0" role="presentation"'

RESPONSIVE_CSS = """@media screen and (max-width: 600px) {
    .column-wrapper {
        display: block !important;
        width: 100% !important;
    }
}"""


# ── Point d'entrée public ───────────────────────────────────────────────────

def render_document(document: Document, title: str = "Your Email") -> str:
    """Génère le HTML complet d'un email. Fonction pure et déterministe."""
    s = document.settings
    body = "\n".join(render_block(b, s, BODY_WIDTH) for b in document.blocks)

    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{attr(title)}</title>
<style>
{RESPONSIVE_CSS}
</style>
</head>
<body style="margin:0; padding:0; background-color:{attr(s.background_color)};">
  <table {TABLE} width="100%" style="background-color:{attr(s.background_color)};">
    <tr>
      <td align="center">
        <table align="center" {TABLE} width="{EMAIL_WIDTH}" style="border-collapse:collapse; width:{EMAIL_WIDTH}px; background-color:{attr(s.content_background_color)};">
          <tr>
            <td style="padding:{BODY_PADDING}px;">
{body}
            </td>
          </tr>
        </table>
      </td>
    </tr>
  </table>
</body>
</html>
"""


def render_block(block: BaseBlock, settings: Settings, available_width: int = BODY_WIDTH) -> str:
    """Rend un bloc dans sa cellule conteneur pleine largeur (fond + bordures)."""
    inner = _RENDERERS[block.block_type](block, settings, available_width)
    style = container_style(block.container)
    style_attr = f' style="{style}"' if style else ""
    return f'<table {TABLE} width="100%"><tr><td{style_attr}>{inner}</td></tr></table>'


class EmailHtmlRenderer:
    """Implémentation du Protocol Renderer pour l'export HTML email."""

    def __init__(self, title: str = "Your Email"):
        self.title = title

    def render_document(self, document: Document) -> str:
        return render_document(document, title=self.title)

    def render_block(self, block: BaseBlock, settings: Settings, available_width: int = BODY_WIDTH) -> str:
        return render_block(block, settings, available_width)


# ── Helpers ─────────────────────────────────────────────────────────────────

def _centered(inner_width: int, inner: str, align: str = "center",
              cell_style: str = "", inner_style: str = "") -> str:
    """Table interne à largeur fixe (px) centrée (ou alignée) dans la cellule pleine largeur."""
    td_style = f' style="{cell_style}"' if cell_style else ""
    inner_td = f' style="{inner_style}"' if inner_style else ""
    return (
        f'<table {TABLE} width="100%"><tr><td align="{align}"{td_style}>'
        f'<table align="{align}" {TABLE} width="{inner_width}" style="width:{inner_width}px; max-width:100%;">'
        f'<tr><td{inner_td}>{inner}</td></tr></table>'
        f'</td></tr></table>'
    )


def _button(text: str, href: str, bg: str, color: str, font: str,
            font_size: int, font_weight: str, radius: int) -> str:
    return (
        f'<table {TABLE}><tr>'
        f'<td align="center" bgcolor="{attr(bg)}" style="padding:10px 20px; border-radius:{radius}px;">'
        f'<a href="{attr(href)}" target="_blank" style="color:{attr(color)}; text-decoration:none; '
        f'font-weight:{font_weight}; font-family:{attr(font)}, sans-serif; font-size:{font_size}px; '
        f'display:inline-block;">{attr(text)}</a>'
        f'</td></tr></table>'
    )


# ── Renderers par type ──────────────────────────────────────────────────────

def render_rich_text(b: RichTextBlock, s: Settings, width: int) -> str:
    font  = resolve_font(b.use_global_font, b.font_family, s)
    color = resolve_color(b.use_global_color, b.color, s)
    style = (
        f"padding:10px; font-family:{attr(font)}, sans-serif; font-size:{b.font_size}px; "
        f"color:{attr(color)}; text-align:{b.text_align}; line-height:1.5;"
    )
    return _centered(percent_to_px(b.width, width), b.content, inner_style=style)


def render_image(b: ImageBlock, s: Settings, width: int) -> str:
    px  = percent_to_px(b.width, width)
    src = media_src(b.src, b.natural_width, b.natural_height, 600, 300, "Image")
    img = (
        f'<img src="{attr(src)}" alt="{attr(b.alt)}" width="{px}" '
        f'style="width:{px}px; max-width:100%; height:auto; display:block; border:0; '
        f'border-radius:{b.border_radius}px;">'
    )
    if b.href:
        img = f'<a href="{attr(b.href)}" target="_blank">{img}</a>'
    return _centered(px, img, align=b.alignment, cell_style="padding:10px 0;")


def render_logo(b: LogoBlock, s: Settings, width: int) -> str:
    # largeur en px appliquée directement à l'image
    if usable_source(b.src):
        src = b.src.strip()
    elif b.natural_width and b.natural_height:
        src = placeholder_src(b.width, round(b.width * b.natural_height / b.natural_width), "Logo")
    else:
        src = placeholder_src(b.width, round(b.width / 3), "Logo")
    img = (
        f'<img src="{attr(src)}" alt="{attr(b.alt)}" width="{b.width}" '
        f'style="display:block; max-width:100%; height:auto; border:0;">'
    )
    if b.href:
        img = f'<a href="{attr(b.href)}" target="_blank">{img}</a>'
    return (
        f'<table {TABLE} width="100%"><tr>'
        f'<td align="{b.alignment}" style="padding:10px;">{img}</td>'
        f'</tr></table>'
    )


def render_button(b: ButtonBlock, s: Settings, width: int, href: str | None = None) -> str:
    bg   = resolve_accent(b.use_global_accent, b.background_color, s)
    font = resolve_font(b.use_global_font, b.font_family, s)
    btn = _button(b.text, href if href is not None else b.href, bg, b.text_color, font,
                  b.font_size, b.font_weight, b.border_radius)
    return (
        f'<table {TABLE} width="100%"><tr>'
        f'<td align="{b.alignment}" style="padding:10px;">{btn}</td>'
        f'</tr></table>'
    )


def render_calendar(b: CalendarBlock, s: Settings, width: int) -> str:
    return render_button(b, s, width, href=calendar_data_uri(b))


def render_button_group(b: ButtonGroupBlock, s: Settings, width: int) -> str:
    font = resolve_font(b.use_global_font, b.font_family, s)
    cells = '<td width="10">&nbsp;</td>'.join(
        f'<td align="center" bgcolor="{attr(btn.background_color)}" style="padding:10px 20px; border-radius:5px;">'
        f'<a href="{attr(btn.href)}" target="_blank" style="color:{attr(btn.text_color)}; '
        f'text-decoration:none; font-family:{attr(font)}, sans-serif;">{attr(btn.text)}</a></td>'
        for btn in b.buttons
    )
    return (
        f'<table {TABLE} width="100%"><tr><td align="{b.alignment}" style="padding:10px;">'
        f'<table {TABLE}><tr>{cells}</tr></table>'
        f'</td></tr></table>'
    )


def render_spacer(b: SpacerBlock, s: Settings, width: int) -> str:
    return (
        f'<table {TABLE} width="100%"><tr>'
        f'<td height="{b.height}" style="height:{b.height}px; line-height:{b.height}px; font-size:1px;">&nbsp;</td>'
        f'</tr></table>'
    )


def render_divider(b: DividerBlock, s: Settings, width: int) -> str:
    line = (
        f'<table {TABLE} width="100%"><tr>'
        f'<td style="border-top:{b.thickness}px solid {attr(b.color)}; font-size:1px; line-height:1px;">&nbsp;</td>'
        f'</tr></table>'
    )
    return _centered(percent_to_px(b.width, width), line, cell_style=f"padding:{b.padding}px 0;")


def render_social(b: SocialBlock, s: Settings, width: int) -> str:
    size = b.icon_size
    cells = "".join(
        f'<td style="padding:0 5px;"><a href="{attr(link.url)}" target="_blank">'
        f'<img src="{SOCIAL_ICONS[link.platform]}" alt="{attr(link.platform)}" width="{size}" height="{size}" '
        f'style="display:block; border:0;"></a></td>'
        for link in b.links
    )
    return (
        f'<table {TABLE} width="100%"><tr><td align="{b.alignment}" style="padding:10px;">'
        f'<table {TABLE}><tr>{cells}</tr></table>'
        f'</td></tr></table>'
    )


def render_video(b: VideoBlock, s: Settings, width: int) -> str:
    px  = percent_to_px(b.width, width)
    src = media_src(b.image_url, b.natural_width, b.natural_height, 600, 300, "Video")
    link = (
        f'<a href="{attr(b.video_url)}" target="_blank" style="display:block;">'
        f'<img src="{attr(src)}" alt="{attr(b.alt)}" width="{px}" '
        f'style="width:{px}px; max-width:100%; height:auto; display:block; border:0;"></a>'
    )
    return _centered(px, link, align=b.alignment, cell_style="padding:10px 0;")


def render_card(b: CardBlock, s: Settings, width: int) -> str:
    src = media_src(b.src, b.natural_width, b.natural_height, 600, 400, "Card")
    font = resolve_font(b.use_global_font, b.font_family, s)
    btn_bg = resolve_accent(b.use_global_accent, b.button_background_color, s)
    btn = _button(b.button_text, b.button_href, btn_bg, b.button_text_color, font, 16, "bold", 5)
    return (
        f'<table {TABLE} width="100%" style="background-color:{attr(b.background_color)}; border-radius:5px;">'
        f'<tr><td><img src="{attr(src)}" alt="{attr(b.alt)}" width="{width}" '
        f'style="width:{width}px; max-width:100%; height:auto; display:block; border:0;"></td></tr>'
        f'<tr><td style="padding:15px; color:{attr(b.text_color)}; font-family:{attr(font)}, sans-serif;">'
        f'<table {TABLE} width="100%">'
        f'<tr><td style="padding:0 0 5px; font-size:18px; font-weight:bold;">{attr(b.title)}</td></tr>'
        f'<tr><td style="padding:0 0 15px; font-size:14px;">{attr(b.content)}</td></tr>'
        f'<tr><td align="center">{btn}</td></tr>'
        f'</table>'
        f'</td></tr>'
        f'</table>'
    )


def render_emoji(b: EmojiBlock, s: Settings, width: int) -> str:
    return (
        f'<table {TABLE} width="100%"><tr>'
        f'<td align="{b.alignment}" style="padding:10px; font-size:{b.size}px; line-height:1.2;">{attr(b.emoji)}</td>'
        f'</tr></table>'
    )


def render_layout(b: LayoutBlock, s: Settings, width: int) -> str:
    """Une seule ligne de table ; pas de récursion au-delà (layouts non imbriqués)."""
    cells = []
    for column, pct in zip(b.columns, b.effective_widths()):
        col_width = max(1, round(width * pct / 100) - 2 * COLUMN_PADDING)
        content = "\n".join(render_block(c, s, col_width) for c in column.components)
        cells.append(
            f'<td valign="top" width="{format_percent(pct)}%" class="column-wrapper" '
            f'style="padding:{COLUMN_PADDING}px;">{content}</td>'
        )
    return f'<table {TABLE} width="100%"><tr>{"".join(cells)}</tr></table>'


_RENDERERS: Dict[str, Callable[[BaseBlock, Settings, int], str]] = {
    "text":         render_rich_text,
    "footer":       render_rich_text,
    "image":        render_image,
    "logo":         render_logo,
    "button":       render_button,
    "calendar":     render_calendar,
    "button-group": render_button_group,
    "spacer":       render_spacer,
    "divider":      render_divider,
    "social":       render_social,
    "video":        render_video,
    "card":         render_card,
    "emoji":        render_emoji,
    "layout":       render_layout,
}

_missing = set(BLOCK_TYPES) - set(_RENDERERS)
if _missing:
    raise RuntimeError(f"Renderer manquant pour : {sorted(_missing)}")
