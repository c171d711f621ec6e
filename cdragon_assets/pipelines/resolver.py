"""Cross-reference resolution between champions, skins, skin-lines and universes."""

import logging
import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..core.constants import ResourcePath
from ..models.auxiliary import (
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
from ..models.base import AssetModel
from ..models.champion import Champion, Skin, Skinline, SkinlineSummary, SkinSummary, Universe
from ..models.wiki import WikiSkin

logger = logging.getLogger(__name__)

_SAFE_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass
class CatalogCollections:
    """Flat upstream collections of one locale."""

    champions: List[Champion] = field(default_factory=list)
    skins: Mapping[str, Skin] = field(default_factory=dict)
    skinlines: List[Skinline] = field(default_factory=list)
    universes: List[Universe] = field(default_factory=list)
    items: List[Item] = field(default_factory=list)
    tft_items: List[TftItem] = field(default_factory=list)
    summoner_emotes: List[SummonerEmote] = field(default_factory=list)
    summoner_icons: List[SummonerIcon] = field(default_factory=list)
    summoner_icon_sets: List[SummonerIconSet] = field(default_factory=list)
    tft_champions: List[TftChampion] = field(default_factory=list)
    tft_map_skins: List[TftMapSkin] = field(default_factory=list)
    ward_skins: List[WardSkin] = field(default_factory=list)
    ward_skin_sets: List[WardSkinSet] = field(default_factory=list)


# resource path -> CatalogCollections attribute
COLLECTION_FIELDS: Dict[ResourcePath, str] = {
    ResourcePath.CHAMPION_SUMMARY: "champions",
    ResourcePath.SKINS: "skins",
    ResourcePath.SKINLINES: "skinlines",
    ResourcePath.UNIVERSES: "universes",
    ResourcePath.ITEMS: "items",
    ResourcePath.TFT_ITEMS: "tft_items",
    ResourcePath.SUMMONER_EMOTES: "summoner_emotes",
    ResourcePath.SUMMONER_ICONS: "summoner_icons",
    ResourcePath.SUMMONER_ICON_SETS: "summoner_icon_sets",
    ResourcePath.TFT_CHAMPIONS: "tft_champions",
    ResourcePath.TFT_MAP_SKINS: "tft_map_skins",
    ResourcePath.WARD_SKINS: "ward_skins",
    ResourcePath.WARD_SKIN_SETS: "ward_skin_sets",
}

# (CatalogCollections attribute, category name, summary list key)
AUXILIARY_CATEGORIES: Sequence[Tuple[str, str, str]] = (
    ("items", "item", "items"),
    ("tft_items", "tftitem", "tftItems"),
    ("summoner_emotes", "summoner-emote", "summonerEmotes"),
    ("summoner_icons", "summoner-icon", "summonerIcons"),
    ("summoner_icon_sets", "summoner-icon-set", "summonerIconSets"),
    ("tft_champions", "tftchampion", "tftChampions"),
    ("tft_map_skins", "tftmapskin", "tftMapSkins"),
    ("ward_skins", "ward-skin", "wardSkins"),
    ("ward_skin_sets", "ward-skin-set", "wardSkinSets"),
)

AUXILIARY_CATEGORY_NAMES: Dict[str, str] = {attr: name for attr, name, _ in AUXILIARY_CATEGORIES}


@dataclass
class CategoryOutput:
    """Everything one category writes: detail records plus the summary index."""

    name: str
    summary: Dict[str, Any]
    records: List[Tuple[str, Dict[str, Any]]] = field(default_factory=list)

    @property
    def summary_path(self) -> str:
        return f"{self.name}.json"

    def record_path(self, key: str) -> str:
        return f"{self.name}/{key}.json"


@dataclass
class ResolvedLocale:
    categories: List[CategoryOutput] = field(default_factory=list)
    dangling_references: int = 0

    def category(self, name: str) -> Optional[CategoryOutput]:
        for output in self.categories:
            if output.name == name:
                return output
        return None


def _summary(key: str, records: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"total": len(records), key: records}


class RelationalResolver:
    """Derives champion, skin-line and universe associations and merges wiki data.

    The resolver is pure: it never mutates its inputs and produces identical
    output (including list order) for identical input.
    """

    def __init__(
        self,
        collections: CatalogCollections,
        wiki_skins: Optional[Mapping[int, WikiSkin]] = None,
    ):
        self.collections = collections
        self.wiki_skins = wiki_skins or {}
        self.dangling_references = 0

        self.skins: List[Skin] = sorted(collections.skins.values(), key=lambda s: s.id)
        self.universes: List[Universe] = [
            universe for universe in collections.universes if universe.skin_sets is not None
        ]
        self.skinlines_by_id: Dict[int, Skinline] = {s.id: s for s in collections.skinlines}

        self.skins_by_champion: Dict[int, List[Skin]] = defaultdict(list)
        self.skins_by_skinline: Dict[int, List[Skin]] = defaultdict(list)
        for skin in self.skins:
            self.skins_by_champion[skin.champion_id].append(skin)
            for skinline_id in dict.fromkeys(skin.skinline_ids):
                self.skins_by_skinline[skinline_id].append(skin)

    def resolve(self) -> ResolvedLocale:
        self.dangling_references = 0
        categories = [
            self.resolve_champions(),
            self.resolve_universes(),
            self.resolve_skinlines(),
            self.resolve_skins(),
        ]
        categories.extend(self.resolve_auxiliary())
        if self.dangling_references:
            logger.debug(f"Dropped {self.dangling_references} dangling skin-line references")
        return ResolvedLocale(categories=categories, dangling_references=self.dangling_references)

    def project_skins(self, skins: List[Skin]) -> List[Dict[str, Any]]:
        ordered = sorted(skins, key=lambda s: s.id)
        return [SkinSummary.from_skin(s, self.wiki_skins.get(s.id)).to_json() for s in ordered]

    def champion_key(self, champion: Champion) -> str:
        if _SAFE_KEY_RE.match(champion.alias):
            return champion.alias
        logger.warning(f"Champion alias {champion.alias!r} is not path-safe; using id")
        return str(champion.id)

    def resolve_champions(self) -> CategoryOutput:
        records = []
        for champion in self.collections.champions:
            detail = {
                **champion.to_json(),
                "skins": self.project_skins(self.skins_by_champion.get(champion.id, [])),
            }
            records.append((self.champion_key(champion), detail))

        index = [
            {"id": c.id, "name": c.name, "alias": c.alias}
            for c in sorted(self.collections.champions, key=lambda c: c.id)
        ]
        return CategoryOutput("champion", _summary("champions", index), records)

    def resolve_universes(self) -> CategoryOutput:
        records = []
        for universe in self.universes:
            skinlines = []
            for skinline_id in universe.skin_sets or []:
                skinline = self.skinlines_by_id.get(skinline_id)
                if skinline is None:
                    self.dangling_references += 1
                    continue
                skinlines.append(skinline)
            skinlines.sort(key=lambda s: s.name)
            detail = {
                **universe.to_json(),
                "skinlines": [SkinlineSummary.from_skinline(s).to_json() for s in skinlines],
            }
            records.append((str(universe.id), detail))

        index = [{"id": u.id, "name": u.name} for u in sorted(self.universes, key=lambda u: u.id)]
        return CategoryOutput("universe", _summary("universes", index), records)

    def resolve_skinlines(self) -> CategoryOutput:
        records = []
        for skinline in self.collections.skinlines:
            detail = {
                **skinline.to_json(),
                "skins": self.project_skins(self.skins_by_skinline.get(skinline.id, [])),
            }
            records.append((str(skinline.id), detail))

        index = [
            {"id": s.id, "name": s.name}
            for s in sorted(self.collections.skinlines, key=lambda s: s.id)
        ]
        return CategoryOutput("skinline", _summary("skinlines", index), records)

    def resolve_skins(self) -> CategoryOutput:
        records = []
        for skin in self.skins:
            detail = skin.to_json()
            wiki_skin = self.wiki_skins.get(skin.id)
            if wiki_skin is not None:
                detail["wikiSkinData"] = wiki_skin.to_json()
            records.append((str(skin.id), detail))

        index = [
            {"id": s.id, "name": s.name, "rarity": s.rarity, "isBase": s.is_base}
            for s in self.skins
        ]
        return CategoryOutput("skin", _summary("skins", index), records)

    def resolve_auxiliary(self) -> List[CategoryOutput]:
        outputs = []
        for attribute, name, key in AUXILIARY_CATEGORIES:
            collection: List[AssetModel] = getattr(self.collections, attribute)
            outputs.append(CategoryOutput(name, _summary(key, [r.to_json() for r in collection])))
        return outputs
