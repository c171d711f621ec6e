"""Champion, skin, skin-line and universe records."""

from typing import Any, Dict, List, Optional

from pydantic import Field

from ..core.helpers import skin_id_to_champion_id
from .base import AssetModel
from .wiki import WikiSkin


class Champion(AssetModel):
    id: int
    name: str
    alias: str
    roles: List[str] = Field(default_factory=list)


class SkinlineRef(AssetModel):
    id: int


class Skin(AssetModel):
    id: int
    is_base: bool = False
    name: str
    rarity: Optional[str] = None
    skin_lines: Optional[List[SkinlineRef]] = None

    @property
    def champion_id(self) -> int:
        return skin_id_to_champion_id(self.id)

    @property
    def skinline_ids(self) -> List[int]:
        return [ref.id for ref in self.skin_lines or []]


class Skinline(AssetModel):
    id: int
    name: str
    description: Optional[str] = None


class Universe(AssetModel):
    id: int
    name: str
    description: Optional[str] = None
    skin_sets: Optional[List[int]] = None


class SkinSummary(AssetModel):
    """Projection of a skin embedded in champion, skin-line and index records."""

    id: int
    name: str
    rarity: Optional[str] = None
    is_base: bool = False
    wiki_skin_data: Optional[WikiSkin] = None

    @classmethod
    def from_skin(cls, skin: Skin, wiki_skin: Optional[WikiSkin] = None) -> "SkinSummary":
        return cls(
            id=skin.id,
            name=skin.name,
            rarity=skin.rarity,
            is_base=skin.is_base,
            wiki_skin_data=wiki_skin,
        )

    def to_json(self) -> Dict[str, Any]:
        data = self.model_dump(by_alias=True, mode="json", exclude={"wiki_skin_data"})
        if self.wiki_skin_data is not None:
            data["wikiSkinData"] = self.wiki_skin_data.to_json()
        return data


class SkinlineSummary(AssetModel):
    """Projection of a skin-line embedded in universe records."""

    id: int
    name: str
    description: Optional[str] = None

    @classmethod
    def from_skinline(cls, skinline: Skinline) -> "SkinlineSummary":
        return cls(id=skinline.id, name=skinline.name, description=skinline.description)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
