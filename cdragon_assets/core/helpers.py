"""Small pure helpers shared across the crawler."""

from datetime import datetime, timezone


def skin_id_to_champion_id(skin_id: int) -> int:
    """Return the champion id owning an absolute skin id (266000 -> 266)."""
    return skin_id // 1000


def skin_abs_id_to_skin_id(skin_id: int, champion_id: int) -> int:
    """Build an absolute skin id from a relative (or absolute) skin index.

    The wiki keys skins by their position within the champion (0 = base skin);
    the mirror uses ``champion_id * 1000 + index``. Absolute ids map to
    themselves.
    """
    return champion_id * 1000 + (skin_id % 1000)


def wiki_skin_data_url(wiki_url: str) -> str:
    return f"{wiki_url.rstrip('/')}/Module:SkinData/data?action=render"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
