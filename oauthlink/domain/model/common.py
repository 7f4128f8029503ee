"""Shared base for persisted entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Entity loaded from or written to a repository.

    Instances are frozen; changes are made with ``model_copy(update=...)``
    and handed back to the repository.
    """

    model_config = ConfigDict(frozen=True)
