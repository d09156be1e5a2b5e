"""Entity base."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Frozen entity. Repositories persist new versions made with ``model_copy``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
