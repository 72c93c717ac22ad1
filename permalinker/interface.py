"""
Interface registry for Permalinker.

This module describes the "Permalink Generator" field interface to a host
admin UI: its id, label, icon and the option schema shown in the options
panel. Rendering those options is left to the host.
"""

import copy
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from .builder import build_path
from .models import (
    DEFAULT_PARENT_FIELD,
    DEFAULT_PLACEHOLDER,
    DEFAULT_TITLE_FIELD,
    DEFAULT_URL_PREFIX,
    PathOptions,
    Record,
)


@dataclass
class OptionField:
    """
    One entry of an interface's option schema.
    """
    field: str
    name: str
    type: str
    default: Any = None
    interface: str = "input"
    width: str = "full"
    placeholder: Optional[str] = None


@dataclass
class InterfaceDefinition:
    """
    Registration metadata for a field interface.
    """
    id: str
    name: str
    description: str
    icon: str
    types: List[str] = field(default_factory=lambda: ["string"])
    options: List[OptionField] = field(default_factory=list)

    def defaults(self) -> Dict[str, Any]:
        """Return the default value of every option keyed by option field."""
        return {option.field: option.default for option in self.options}

    def get_option(self, field_name: str) -> Optional[OptionField]:
        """Return the option with the given field name, if any."""
        for option in self.options:
            if option.field == field_name:
                return option
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready representation."""
        return asdict(self)


PERMALINK_GENERATOR = InterfaceDefinition(
    id="permalink-generator",
    name="Permalink Generator",
    description="Auto-generate permalink based on page hierarchy",
    icon="link",
    types=["string"],
    options=[
        OptionField(
            field="titleField",
            name="Title Field Name",
            type="string",
            default=DEFAULT_TITLE_FIELD,
            placeholder=DEFAULT_TITLE_FIELD
        ),
        OptionField(
            field="parentField",
            name="Parent Page Relation Field",
            type="string",
            default=DEFAULT_PARENT_FIELD,
            placeholder=DEFAULT_PARENT_FIELD
        ),
        OptionField(
            field="urlPrefix",
            name="URL Prefix",
            type="string",
            default=DEFAULT_URL_PREFIX,
            width="half",
            placeholder=DEFAULT_URL_PREFIX
        ),
        OptionField(
            field="placeholder",
            name="Placeholder",
            type="string",
            default=DEFAULT_PLACEHOLDER,
            placeholder=DEFAULT_PLACEHOLDER
        ),
    ]
)


class InterfaceRegistry:
    """
    Registry of field interfaces offered to the host.
    """

    def __init__(self):
        """Initialize the registry with the built-in interfaces."""
        self._interfaces: Dict[str, InterfaceDefinition] = {}
        self.register_interface(PERMALINK_GENERATOR)

    def register_interface(self, definition: InterfaceDefinition) -> None:
        """
        Register an interface definition, replacing any with the same id.

        Args:
            definition: The interface to register
        """
        self._interfaces[definition.id] = definition

    def get_interface(self, interface_id: str) -> Optional[InterfaceDefinition]:
        """
        Get an interface definition by id.

        Args:
            interface_id: The id of the interface

        Returns:
            The definition, or None if not found
        """
        return self._interfaces.get(interface_id)

    def list_interfaces(self) -> List[str]:
        """Return the ids of all registered interfaces."""
        return list(self._interfaces.keys())


def generate_permalink(
    record: Any,
    resolve_parent: Any,
    options: Any = None,
    permalink_field: str = "permalink"
) -> Any:
    """
    Compute a record's permalink and return a copy with it filled in.

    This is the "Generate URL" action of the interface. The record passed
    in is left untouched.

    Args:
        record: The record being edited
        resolve_parent: Resolver for the record's ancestors
        options: Interface option values (defaults used for missing ones)
        permalink_field: Attribute the permalink is written to

    Returns:
        A copy of the record with ``permalink_field`` set
    """
    path = build_path(record, resolve_parent, PathOptions.coerce(options))

    if isinstance(record, Record):
        return type(record).model_validate({**record.model_dump(), permalink_field: path})
    if isinstance(record, Mapping):
        updated = copy.deepcopy(dict(record))
        updated[permalink_field] = path
        return updated

    updated = copy.deepcopy(record)
    setattr(updated, permalink_field, path)
    return updated


# Global interface registry instance
interface_registry = InterfaceRegistry()
