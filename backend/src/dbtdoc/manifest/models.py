"""dbt manifest schema.

Only the fields needed to document models are declared; everything else in
``target/manifest.json`` is ignored.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from dbtdoc.constants import MODEL_RESOURCE_TYPE, STAGING_SEGMENT


class ColumnMetadata(BaseModel):
    """A documented (or undocumented) column of a node."""

    model_config = ConfigDict(extra="ignore")

    name: str
    description: str = Field("", description="Empty means the column needs generation")

    @field_validator("description", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class Depends(BaseModel):
    """Forward dependencies declared by a node."""

    model_config = ConfigDict(extra="ignore")

    nodes: list[str] = Field(default_factory=list)
    macros: list[str] = Field(default_factory=list)


class NodeMetadata(BaseModel):
    """One node of the dbt graph (model, seed, test, snapshot...)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    unique_id: str
    name: str
    original_file_path: str
    patch_path: str | None = Field(
        None, description="Schema file owning the description, e.g. 'proj://models/schema.yml'"
    )
    raw_code: str = Field("", validation_alias=AliasChoices("raw_code", "raw_sql"))
    compiled_code: str = Field("", validation_alias=AliasChoices("compiled_code", "compiled_sql"))
    description: str = ""
    fqn: list[str] = Field(default_factory=list)
    refs: list[Any] = Field(default_factory=list)
    columns: dict[str, ColumnMetadata] = Field(default_factory=dict)
    depends_on: Depends = Field(default_factory=Depends)

    @field_validator("description", "raw_code", "compiled_code", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def resource_type(self) -> str:
        """Leading segment of the unique id ("model", "seed", "test"...)."""
        return resource_type_of(self.unique_id)

    @property
    def is_model(self) -> bool:
        return is_model(self.unique_id)

    @property
    def is_staging(self) -> bool:
        return STAGING_SEGMENT in self.fqn

    def undocumented_columns(self) -> dict[str, ColumnMetadata]:
        """Columns whose description is empty, keyed by manifest column key."""
        return {key: col for key, col in self.columns.items() if col.description == ""}


class Manifest(BaseModel):
    """The subset of manifest.json this tool reads."""

    model_config = ConfigDict(extra="ignore")

    nodes: dict[str, NodeMetadata] = Field(default_factory=dict)


def resource_type_of(unique_id: str) -> str:
    return unique_id.split(".")[0]


def is_model(unique_id: str) -> bool:
    """True if the unique id belongs to a model node."""
    return resource_type_of(unique_id) == MODEL_RESOURCE_TYPE
