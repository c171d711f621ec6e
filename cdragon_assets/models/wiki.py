"""Records extracted from the wiki's ``Module:SkinData/data`` table."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WikiModel(BaseModel):
    """Wiki fields are lower-case Lua keys, so no aliasing is applied."""

    model_config = ConfigDict(extra="allow")

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class WikiChroma(WikiModel):
    id: int
    availability: Optional[str] = None
    source: Optional[str] = None


class WikiSkin(WikiModel):
    """Annotations for one skin; ``id`` is the relative index within the champion."""

    id: int
    variant: Optional[int] = None
    formatname: Optional[str] = None
    availability: Optional[str] = None
    looteligible: Optional[bool] = None
    distribution: Optional[str] = None
    cost: Optional[Union[int, float, str]] = None
    release: Optional[str] = None
    earlysale: Optional[str] = None
    set: Optional[List[str]] = None
    neweffects: Optional[bool] = None
    newanimations: Optional[bool] = None
    newrecall: Optional[bool] = None
    transforming: Optional[bool] = None
    newvoice: Optional[bool] = None
    newquotes: Optional[bool] = None
    filter: Optional[bool] = None
    chromas: Optional[Dict[str, WikiChroma]] = None
    voiceactor: Optional[List[str]] = None
    splashartist: Optional[List[str]] = None
    lore: Optional[str] = None

    @field_validator("set", "voiceactor", "splashartist", mode="before")
    @classmethod
    def _empty_table_as_list(cls, value: Any) -> Any:
        # An empty Lua table parses as {} regardless of intent.
        return [] if value == {} else value

    @field_validator("chromas", mode="before")
    @classmethod
    def _empty_table_as_dict(cls, value: Any) -> Any:
        return {} if value == [] else value


class WikiChampion(WikiModel):
    id: int
    skins: Dict[str, WikiSkin] = Field(default_factory=dict)


WikiSkinData = Dict[str, WikiChampion]
