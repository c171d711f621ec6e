"""Data models for CDragon Assets.

This package contains:
- Upstream catalog records (champions, skins, skin-lines, universes)
- Typed auxiliary collections (items, TFT data, icons, ward skins)
- Wiki skin annotations
- The persisted version marker
"""

from .auxiliary import (
    Item,
    SummonerEmote,
    SummonerIcon,
    SummonerIconSet,
    TftChampion,
    TftItem,
    TftMapSkin,
    WardSkin,
    WardSkinSet,
)
from .champion import Champion, Skin, Skinline, SkinlineRef, SkinlineSummary, SkinSummary, Universe
from .resources import RESOURCE_TYPES, parse_resource
from .version import VersionMarker
from .wiki import WikiChampion, WikiChroma, WikiSkin, WikiSkinData

__all__ = [
    # Catalog
    "Champion",
    "Skin",
    "SkinlineRef",
    "Skinline",
    "Universe",
    "SkinSummary",
    "SkinlineSummary",
    # Auxiliary
    "Item",
    "TftItem",
    "SummonerEmote",
    "SummonerIcon",
    "SummonerIconSet",
    "TftChampion",
    "TftMapSkin",
    "WardSkin",
    "WardSkinSet",
    # Wiki
    "WikiChampion",
    "WikiChroma",
    "WikiSkin",
    "WikiSkinData",
    # State
    "VersionMarker",
    "RESOURCE_TYPES",
    "parse_resource",
]
