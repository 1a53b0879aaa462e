"""
Helpers de style pour le rendu email : décoration de conteneur, résolution
des réglages globaux, conversions d'unités, images de substitution.
"""
from html import escape
from typing import Optional

from ..blocks import ContainerStyle
from ..config import PLACEHOLDER_URL
from ..core.schemas import Settings


def attr(value: object) -> str:
    """Échappement pour une valeur d'attribut HTML."""
    return escape(str(value), quote=True)


# ── Décoration ──────────────────────────────────────────────────────────────

def container_style(container: Optional[ContainerStyle]) -> str:
    """
    Style inline de la cellule conteneur :
    fond seulement si ≠ transparent, chaque bordure seulement si width > 0.
    """
    if container is None:
        return ""
    rules = []
    bg = container.background_color
    if bg and bg.lower() != "transparent":
        rules.append(f"background-color:{attr(bg)};")
    for edge in ("top", "right", "bottom", "left"):
        border = getattr(container, f"border_{edge}")
        if border.width > 0:
            rules.append(f"border-{edge}:{border.width}px solid {attr(border.color)};")
    return " ".join(rules)


# ── Réglages globaux (résolus au rendu) ─────────────────────────────────────

def resolve_font(use_global: bool, local: str, settings: Settings) -> str:
    return settings.font_family if use_global else local


def resolve_color(use_global: bool, local: str, settings: Settings) -> str:
    return settings.text_color if use_global else local


def resolve_accent(use_global: bool, local: str, settings: Settings) -> str:
    return settings.accent_color if use_global else local


# ── Unités ──────────────────────────────────────────────────────────────────

def percent_to_px(percent: float, available: int) -> int:
    return max(1, round(available * percent / 100))


def format_percent(value: float) -> str:
    """50.0 → "50", 33.333… → "33.33" """
    return f"{round(value, 2):g}"


# ── Médias ──────────────────────────────────────────────────────────────────

def usable_source(url: Optional[str]) -> bool:
    """Seules les URLs publiques http(s) sont utilisables dans un email."""
    return bool(url) and url.strip().lower().startswith(("http://", "https://"))


def placeholder_src(width: int, height: int, label: str = "Image") -> str:
    return f"{PLACEHOLDER_URL}/{width}x{height}.png?text={label}"


def media_src(
    url: Optional[str],
    natural_width: Optional[int],
    natural_height: Optional[int],
    default_width: int = 600,
    default_height: int = 300,
    label: str = "Image",
) -> str:
    """Source exploitable, sinon placeholder dimensionné (naturel si connu)."""
    if usable_source(url):
        return url.strip()
    if natural_width and natural_height:
        return placeholder_src(round(natural_width), round(natural_height), label)
    return placeholder_src(default_width, default_height, label)
