"""
Options accepted by the permalink builder.

The option names mirror the ones exposed in the host options panel
(``titleField``, ``parentField``, ``urlPrefix``, ``placeholder``). Legacy
spellings from earlier revisions of the interface are accepted as aliases.
"""

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_TITLE_FIELD = "title"
DEFAULT_PARENT_FIELD = "parent"
DEFAULT_URL_PREFIX = "/"
DEFAULT_PLACEHOLDER = "Click Generate URL to create permalink"


class PathOptions(BaseModel):
    """
    Configuration for building a permalink.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title_field: str = Field(
        default=DEFAULT_TITLE_FIELD,
        validation_alias=AliasChoices("titleField", "title_field"),
        description="Record attribute holding the title used for a segment"
    )

    parent_field: str = Field(
        default=DEFAULT_PARENT_FIELD,
        validation_alias=AliasChoices("parentField", "parentRelationField", "parent_field"),
        description="Record attribute holding the parent reference (used by resolvers)"
    )

    url_prefix: str = Field(
        default=DEFAULT_URL_PREFIX,
        validation_alias=AliasChoices("urlPrefix", "url_prefix"),
        description="String prepended to the joined path"
    )

    slash_at_start: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices("slashAtStart", "slash_at_start"),
        description="Legacy toggle, equivalent to urlPrefix '/' (True) or '' (False)"
    )

    placeholder: str = Field(
        default=DEFAULT_PLACEHOLDER,
        description="Returned verbatim when the computed path would be empty"
    )

    @field_validator("title_field", mode="before")
    @classmethod
    def _default_title_field(cls, value: Any) -> Any:
        return value or DEFAULT_TITLE_FIELD

    @field_validator("parent_field", mode="before")
    @classmethod
    def _default_parent_field(cls, value: Any) -> Any:
        return value or DEFAULT_PARENT_FIELD

    @field_validator("url_prefix", mode="before")
    @classmethod
    def _prefix_from_bool(cls, value: Any) -> Any:
        if value is None:
            return DEFAULT_URL_PREFIX
        if isinstance(value, bool):
            return DEFAULT_URL_PREFIX if value else ""
        return value

    @field_validator("placeholder", mode="before")
    @classmethod
    def _default_placeholder(cls, value: Any) -> Any:
        return DEFAULT_PLACEHOLDER if value is None else value

    @model_validator(mode="after")
    def _apply_legacy_slash(self) -> "PathOptions":
        # An explicit urlPrefix always wins over the legacy toggle.
        if self.slash_at_start is not None and "url_prefix" not in self.model_fields_set:
            self.url_prefix = DEFAULT_URL_PREFIX if self.slash_at_start else ""
        return self

    @classmethod
    def coerce(cls, options: Any = None) -> "PathOptions":
        """
        Build options from None, an existing instance or a mapping.

        Args:
            options: Options in any accepted form

        Returns:
            A validated PathOptions instance
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            return cls.model_validate(dict(options))
        raise TypeError(f"Unsupported options type: {type(options).__name__}")

    @classmethod
    def from_config(cls, config: Any) -> "PathOptions":
        """Build options from the ``permalink`` section of a ConfigManager."""
        return cls.coerce(config.get_section("permalink"))
