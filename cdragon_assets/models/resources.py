"""Static mapping from catalog resource paths to their record types."""

from typing import Any, Dict, List

from pydantic import TypeAdapter

from ..core.constants import ResourcePath
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
from .champion import Champion, Skin, Skinline, Universe

RESOURCE_TYPES: Dict[ResourcePath, TypeAdapter[Any]] = {
    ResourcePath.CHAMPION_SUMMARY: TypeAdapter(List[Champion]),
    ResourcePath.UNIVERSES: TypeAdapter(List[Universe]),
    ResourcePath.SKINLINES: TypeAdapter(List[Skinline]),
    # Skins are served as an object keyed by the stringified skin id.
    ResourcePath.SKINS: TypeAdapter(Dict[str, Skin]),
    ResourcePath.ITEMS: TypeAdapter(List[Item]),
    ResourcePath.TFT_ITEMS: TypeAdapter(List[TftItem]),
    ResourcePath.SUMMONER_EMOTES: TypeAdapter(List[SummonerEmote]),
    ResourcePath.SUMMONER_ICONS: TypeAdapter(List[SummonerIcon]),
    ResourcePath.SUMMONER_ICON_SETS: TypeAdapter(List[SummonerIconSet]),
    ResourcePath.TFT_CHAMPIONS: TypeAdapter(List[TftChampion]),
    ResourcePath.TFT_MAP_SKINS: TypeAdapter(List[TftMapSkin]),
    ResourcePath.WARD_SKINS: TypeAdapter(List[WardSkin]),
    ResourcePath.WARD_SKIN_SETS: TypeAdapter(List[WardSkinSet]),
}


def parse_resource(path: ResourcePath, payload: Any) -> Any:
    """Validate a decoded JSON body against the record type of ``path``."""
    return RESOURCE_TYPES[path].validate_python(payload)
