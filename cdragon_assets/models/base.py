"""Shared base model for records mirrored from upstream JSON."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AssetModel(BaseModel):
    """Upstream record with camelCase wire names.

    Unknown upstream fields are kept so detail files pass them through verbatim.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, alias_generator=to_camel)

    def to_json(self) -> Dict[str, Any]:
        """Dump with upstream key names, omitting fields absent from the source."""
        return self.model_dump(by_alias=True, mode="json", exclude_unset=True)
