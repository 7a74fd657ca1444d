"""Declarative resource schema and configuration validation."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from mcprovider.core.diagnostics import Diagnostics

# Plan modifiers understood by the host; recorded on the schema only.
USE_STATE_FOR_UNKNOWN = "use_state_for_unknown"
REQUIRES_REPLACE_IF_CONFIGURED = "requires_replace_if_configured"

_PYTHON_TYPES = {
    "string": (str,),
    "int64": (int,),
    "bool": (bool,),
    "object": (dict,),
}


class Attribute(BaseModel):
    """A single schema attribute, possibly nested."""

    type: str
    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False
    default: Optional[Any] = None
    one_of: Optional[List[str]] = None
    plan_modifiers: List[str] = Field(default_factory=list)
    attributes: Optional[Dict[str, "Attribute"]] = None


class Schema(BaseModel):
    """Versioned set of resource attributes."""

    version: int = 0
    attributes: Dict[str, Attribute]

    def validate_config(self, config: Dict[str, Any]) -> Diagnostics:
        """
        Check a raw configuration against the declared attributes.

        Args:
            config: Configuration values keyed by attribute name

        Returns:
            Error diagnostics tagged with the offending attribute path
        """
        diags = Diagnostics()
        _validate_block(self.attributes, config, "", diags)
        return diags


def _validate_block(
    attributes: Dict[str, Attribute], values: Dict[str, Any], prefix: str, diags: Diagnostics
) -> None:
    for name in values:
        if name not in attributes:
            diags.add_error(
                "Unsupported argument",
                f'An argument named "{name}" is not expected here.',
                attribute=prefix + name,
            )

    for name, attribute in attributes.items():
        path = prefix + name
        value = values.get(name)

        if value is None:
            if attribute.required:
                diags.add_error(
                    "Missing required argument",
                    f'The argument "{path}" is required, but no definition was found.',
                    attribute=path,
                )
            continue

        if attribute.computed and not (attribute.required or attribute.optional):
            diags.add_error(
                "Invalid Configuration for Read-Only Attribute",
                f'Cannot set value for "{path}" because it is computed by the provider.',
                attribute=path,
            )
            continue

        expected = _PYTHON_TYPES[attribute.type]
        # bool is an int subclass
        if not isinstance(value, expected) or (attribute.type == "int64" and isinstance(value, bool)):
            diags.add_error(
                "Incorrect attribute value type",
                f'Attribute "{path}" must be of type {attribute.type}.',
                attribute=path,
            )
            continue

        if attribute.one_of is not None and value not in attribute.one_of:
            allowed = ", ".join(f'"{v}"' for v in attribute.one_of)
            diags.add_error(
                "Invalid Attribute Value Match",
                f'Attribute "{path}" value must be one of: [{allowed}], got: "{value}"',
                attribute=path,
            )

        if attribute.attributes is not None:
            _validate_block(attribute.attributes, value, path + ".", diags)
