"""
Probes médias — dimensions d'image (Pillow) et métadonnées vidéo (noembed).

Les résultats se traduisent en simples update_block sur l'éditeur :
dernier écrit gagnant, échec → dimensions effacées (jamais de valeurs périmées).
"""
import base64
import io
import logging
import re
from typing import Optional, Tuple
from urllib.parse import unquote_to_bytes

import requests
from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel

from .config import NOEMBED_URL, PROBE_TIMEOUT
from .errors import LockedBlockError, MediaUnavailableError

log = logging.getLogger(__name__)

_YOUTUBE_ID = re.compile(
    r"(?:youtube\.com/(?:watch\?(?:.*&)?v=|embed/|shorts/|v/)|youtu\.be/)([A-Za-z0-9_-]{11})"
)
_YOUTUBE_THUMB = "https://img.youtube.com/vi/{video_id}/hqdefault.jpg"


class VideoMetadata(BaseModel):
    thumbnail_url: str
    title: Optional[str] = None


# ── Images ──────────────────────────────────────────────────────────────────

def _read_data_url(url: str) -> bytes:
    header, _, payload = url.partition(",")
    if not payload:
        raise MediaUnavailableError(url[:40], "data: URL vide")
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload, validate=False)
        except ValueError as e:
            raise MediaUnavailableError(url[:40], "base64 invalide") from e
    return unquote_to_bytes(payload)


def _fetch_bytes(url: str) -> bytes:
    try:
        resp = requests.get(url, timeout=PROBE_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise MediaUnavailableError(url, str(e)) from e
    return resp.content


def probe_dimensions(url: str) -> Tuple[int, int]:
    """
    Dimensions naturelles (largeur, hauteur) d'une image distante ou data: URL.
    Lève MediaUnavailableError si l'image ne peut être chargée ou décodée.
    """
    if not url:
        raise MediaUnavailableError(url, "URL vide")
    raw = _read_data_url(url) if url.startswith("data:") else _fetch_bytes(url)
    try:
        with Image.open(io.BytesIO(raw)) as img:
            width, height = img.size
    except (UnidentifiedImageError, OSError) as e:
        raise MediaUnavailableError(url[:80], "image illisible") from e
    log.debug("Dimensions %s → %dx%d", url[:80], width, height)
    return width, height


# ── Vidéos ──────────────────────────────────────────────────────────────────

def youtube_id(url: str) -> Optional[str]:
    match = _YOUTUBE_ID.search(url or "")
    return match.group(1) if match else None


def _noembed(url: str) -> Optional[VideoMetadata]:
    try:
        resp = requests.get(NOEMBED_URL, params={"url": url}, timeout=PROBE_TIMEOUT)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        log.warning("noembed indisponible pour %s : %s", url, e)
        return None
    if data.get("error") or not data.get("thumbnail_url"):
        return None
    return VideoMetadata(thumbnail_url=data["thumbnail_url"], title=data.get("title"))


def probe_video(url: str) -> Optional[VideoMetadata]:
    """noembed d'abord, sinon vignette YouTube dérivée de l'id, sinon None."""
    if not url or url == "#":
        return None
    meta = _noembed(url)
    if meta is not None:
        return meta
    video_id = youtube_id(url)
    if video_id:
        return VideoMetadata(thumbnail_url=_YOUTUBE_THUMB.format(video_id=video_id))
    log.info("Aucune vignette trouvée pour %s", url)
    return None


# ── Application à l'éditeur ─────────────────────────────────────────────────

def refresh_dimensions(editor, block_id: str, url: str) -> bool:
    """Sonde l'image et écrit natural_width/natural_height (None en cas d'échec)."""
    block = editor.find(block_id)
    if block is None or "natural_width" not in type(block).model_fields:
        return False
    try:
        width, height = probe_dimensions(url)
    except MediaUnavailableError as e:
        log.warning("Probe image échouée (%s) : %s", block_id, e)
        width = height = None
    try:
        return editor.update_block(block_id, {"natural_width": width, "natural_height": height})
    except LockedBlockError:
        log.info("Dimensions non appliquées : bloc %s verrouillé", block_id)
        return False


def refresh_video(editor, block_id: str) -> bool:
    """Vignette + titre depuis l'URL vidéo du bloc ; rien n'est écrit si la probe échoue."""
    block = editor.find(block_id)
    if block is None or block.block_type != "video":
        return False
    meta = probe_video(block.video_url)
    if meta is None:
        return False
    changes = {"image_url": meta.thumbnail_url}
    if meta.title:
        changes["title"] = meta.title
    try:
        return editor.update_block(block_id, changes)
    except LockedBlockError:
        log.info("Vignette non appliquée : bloc %s verrouillé", block_id)
        return False
