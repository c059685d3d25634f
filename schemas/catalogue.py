"""
Pydantic schemas for the dataset catalogue (repos.yaml)
"""

import enum
from typing import List
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ScaleBand(str, enum.Enum):
    """Chart scale bands a dataset can be published at"""
    HARBOR = "harbor"
    APPROACH = "approach"
    COASTAL = "coastal"
    GENERAL = "general"
    OVERVIEW = "overview"


class DatasetDescriptor(BaseModel):
    """
    One catalogued Kart repository.

    `key` doubles as the PostgreSQL schema the repository is materialized
    into, so it must be a plain lowercase identifier.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    key: str = Field(
        ...,
        min_length=1,
        pattern=r"^[a-z][a-z0-9_]*$",
        description="PostgreSQL schema name (lowercase, starts with a letter, a-z, 0-9, _)",
    )
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    scale: ScaleBand
    url: str = Field(..., min_length=1)


class Catalogue(BaseModel):
    """Top-level layout of repos.yaml"""

    repositories: List[DatasetDescriptor] = Field(..., min_length=1)

    @field_validator("repositories")
    @classmethod
    def keys_must_be_unique(cls, v):
        keys = [repo.key for repo in v]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            raise ValueError(f"Repository keys must be unique (duplicated: {', '.join(duplicates)})")
        return v
