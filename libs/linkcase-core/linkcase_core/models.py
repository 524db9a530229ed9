"""Core data models for Link Casing."""

from pydantic import BaseModel, ConfigDict, Field


class LinkCasingSettings(BaseModel):
    """Persisted user settings (in <LINKCASE_HOME>/data.json)."""

    # Accept both the stored key ("lowercaseFirstWordOnly") and the field name
    model_config = ConfigDict(populate_by_name=True)

    lowercase_first_word_only: bool = Field(
        default=False,
        description="\\l lowercases only the first word instead of the whole alias",
        alias="lowercaseFirstWordOnly",
    )


DEFAULT_SETTINGS = LinkCasingSettings()
