"""Typed records for the pass-through catalog collections.

These collections are not cross-referenced; they are summarised per locale.
Only the fields the mirror is known to serve are declared, everything else
passes through as extra data.
"""

from typing import List, Optional

from pydantic import ConfigDict, Field

from .base import AssetModel


class RegionalDescription(AssetModel):
    region: str
    description: Optional[str] = None


class RarityElement(AssetModel):
    region: str
    rarity: int


class Item(AssetModel):
    id: int
    name: str
    description: Optional[str] = None
    active: Optional[bool] = None
    in_store: Optional[bool] = None
    from_: List[int] = Field(default_factory=list, alias="from")
    to: List[int] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    max_stacks: Optional[int] = None
    required_champion: Optional[str] = None
    required_ally: Optional[str] = None
    price: Optional[int] = None
    price_total: Optional[int] = None
    icon_path: Optional[str] = None


class Color(AssetModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, alias_generator=None)

    R: int
    G: int
    B: int
    A: int


class TftItem(AssetModel):
    guid: Optional[str] = None
    name: str
    name_id: Optional[str] = None
    id: int
    color: Optional[Color] = None
    square_icon_path: Optional[str] = None


class SummonerEmote(AssetModel):
    id: int
    name: str
    inventory_icon: Optional[str] = None
    description: Optional[str] = None


class SummonerIcon(AssetModel):
    id: int
    content_id: Optional[str] = None
    title: str
    year_released: Optional[int] = None
    is_legacy: Optional[bool] = None
    image_path: Optional[str] = None
    descriptions: List[RegionalDescription] = Field(default_factory=list)
    rarities: List[RarityElement] = Field(default_factory=list)
    disabled_regions: List[str] = Field(default_factory=list)
    esports_team: Optional[str] = None
    esports_region: Optional[str] = None
    esports_event: Optional[str] = None


class SummonerIconSet(AssetModel):
    id: int
    hidden: Optional[bool] = None
    display_name: str
    description: Optional[str] = None
    icons: List[int] = Field(default_factory=list)


class TftTrait(AssetModel):
    name: str
    id: str


class CharacterRecord(AssetModel):
    # Upstream uses snake_case here, so only the camelCase leaves need aliases.
    model_config = ConfigDict(extra="allow", populate_by_name=True, alias_generator=None)

    path: Optional[str] = None
    character_id: str
    rarity: Optional[int] = None
    display_name: Optional[str] = None
    traits: List[TftTrait] = Field(default_factory=list)
    square_icon_path: Optional[str] = Field(default=None, alias="squareIconPath")


class TftChampion(AssetModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, alias_generator=None)

    name: str
    character_record: CharacterRecord


class TftMapSkin(AssetModel):
    content_id: Optional[str] = None
    item_id: int
    name: str
    description: Optional[str] = None
    loadouts_icon: Optional[str] = None
    group_id: Optional[int] = None
    group_name: Optional[str] = None
    rarity: Optional[str] = None
    rarity_value: Optional[int] = None
    tft_rarity: Optional[str] = None


class WardSkin(AssetModel):
    id: int
    name: str
    description: Optional[str] = None
    ward_image_path: Optional[str] = None
    ward_shadow_image_path: Optional[str] = None
    content_id: Optional[str] = None
    is_legacy: Optional[bool] = None
    regional_descriptions: List[RegionalDescription] = Field(default_factory=list)
    rarities: List[RarityElement] = Field(default_factory=list)


class WardSkinSet(AssetModel):
    id: int
    hidden: Optional[bool] = None
    display_name: Optional[str] = None
    description: Optional[str] = None
    wards: List[int] = Field(default_factory=list)
