from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Any, TypeVar

M = TypeVar("M", bound="BaseLeagueModel")


class BaseLeagueModel(BaseModel):
    """Shared configuration and methods.

    Accepts camelCase keys (as stored by the web client) as well as snake_case.
    """
    model_config = ConfigDict(
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def with_updates(self: M, **fields: Any) -> M:
        """Return a validated copy with the given fields replaced."""
        return type(self).model_validate({**self.model_dump(), **fields})
