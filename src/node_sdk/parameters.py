"""
Parameter schema - declarative node parameters and their visibility.

A node declares its parameters as a list of dicts (camelCase keys, as the
UI consumes them). ParameterSchema reads that list to answer the questions
the execution side has:

- which definition of a parameter is active (several definitions may share
  a name, e.g. one 'operation' per resource),
- what its default is when the workflow did not set it,
- whether a field is visible for the current values (displayOptions).

displayOptions.show is a conjunction: every named parameter's current value
must be in its allowed list. displayOptions.hide hides the field as soon as
one named parameter's value is in its list.
"""

from __future__ import annotations

import copy
import re
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import NodeOperationError


NodeParameterType = Literal[
    "string", "number", "boolean", "options", "multiOptions",
    "color", "json", "collection", "fixedCollection", "dateTime",
    "resourceLocator", "notice", "hidden",
]


class DisplayOptions(BaseModel):
    """Conditional visibility of a parameter."""
    model_config = ConfigDict(extra="forbid")

    show: Dict[str, List[Any]] = Field(default_factory=dict)
    hide: Dict[str, List[Any]] = Field(default_factory=dict)

    def is_visible(self, values: Mapping[str, Any]) -> bool:
        for name, allowed in self.show.items():
            if values.get(name) not in allowed:
                return False
        for name, hidden in self.hide.items():
            if name in values and values[name] in hidden:
                return False
        return True


class NodeParameter(BaseModel):
    """
    A single parameter in the node's properties.

    Can be used both as Pydantic model and as dict in properties.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(..., description="Parameter key (internal name)")
    display_name: str = Field(..., alias="displayName", description="Human-readable label")
    type: NodeParameterType = Field(..., description="Parameter type")
    default: Any = Field(None, description="Default value")
    required: bool = Field(False, description="Is parameter required?")
    description: Optional[str] = Field(None, description="Help text")
    placeholder: Optional[str] = Field(None, description="Input placeholder")
    options: Optional[List[Dict[str, Any]]] = Field(
        None,
        description="Options for options/multiOptions/collection types"
    )
    type_options: Optional[Dict[str, Any]] = Field(None, alias="typeOptions")
    display_options: Optional[DisplayOptions] = Field(
        None,
        alias="displayOptions",
        description="Conditional visibility"
    )

    def is_visible(self, values: Mapping[str, Any]) -> bool:
        if self.display_options is None:
            return True
        return self.display_options.is_visible(values)

    @property
    def option_values(self) -> List[Any]:
        """Allowed values of an options/multiOptions parameter."""
        return [option.get("value") for option in self.options or [] if "value" in option]


class ParameterSchema:
    """
    Read-only view over a node's parameter definitions.

    Usage:
        schema = ParameterSchema(JenkinsNode.properties["parameters"])
        values = schema.resolve_values({"resource": "instance"})
        values["operation"]  # -> "safeRestart", the instance default
    """

    def __init__(self, parameters: List[Dict[str, Any]]):
        self.parameters: List[NodeParameter] = [
            NodeParameter.model_validate(parameter) for parameter in parameters
        ]

    def resolve_values(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Fill in defaults for every visible parameter the workflow left unset.

        Parameters are walked in declaration order, so a field whose
        visibility depends on an earlier one (operation on resource)
        sees that earlier value, defaulted or not.
        """
        resolved = dict(values)
        for parameter in self.parameters:
            if parameter.name in resolved:
                continue
            if parameter.is_visible(resolved):
                resolved[parameter.name] = copy.deepcopy(parameter.default)
        return resolved

    def find(self, name: str, values: Mapping[str, Any]) -> Optional[NodeParameter]:
        """Active definition of a parameter: the first visible one with that name."""
        candidates = [p for p in self.parameters if p.name == name]
        for candidate in candidates:
            if candidate.is_visible(values):
                return candidate
        return candidates[0] if candidates else None

    def default_for(self, name: str, values: Mapping[str, Any]) -> Any:
        parameter = self.find(name, values)
        if parameter is None:
            return None
        return copy.deepcopy(parameter.default)

    def visible_parameters(self, values: Mapping[str, Any]) -> List[NodeParameter]:
        resolved = self.resolve_values(values)
        return [p for p in self.parameters if p.is_visible(resolved)]

    def missing_required(self, values: Mapping[str, Any]) -> List[str]:
        """Names of visible required parameters that have no value."""
        resolved = self.resolve_values(values)
        missing = []
        for parameter in self.parameters:
            if not parameter.required or not parameter.is_visible(resolved):
                continue
            if resolved.get(parameter.name) in (None, "", [], {}):
                missing.append(parameter.name)
        return missing


def get_nested_value(params: Any, path: str, fallback_value: Any = None) -> Any:
    """
    Get a value supporting dot notation with array indexing.
    Examples: 'param.params', 'filters.depth', 'updateFields.0.name'
    """
    current = params
    for key in path.split("."):
        if key.isdigit():
            index = int(key)
            if isinstance(current, list) and 0 <= index < len(current):
                current = current[index]
            else:
                return fallback_value
        elif isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return fallback_value
    return current


# ={{ $json.field }} placeholders referencing the item being processed
_EXPRESSION = re.compile(r"\{\{\s*(.*?)\s*\}\}")
_JSON_PATH_SEGMENT = re.compile(
    r"\.([A-Za-z_]\w*)|\[\s*'([^']*)'\s*\]|\[\s*\"([^\"]*)\"\s*\]|\[\s*(\d+)\s*\]"
)


def _evaluate_json_reference(expression: str, item_json: Mapping[str, Any]) -> Any:
    if not expression.startswith("$json"):
        raise NodeOperationError(f"Unsupported expression: {{{{ {expression} }}}}")

    rest = expression[len("$json"):]
    current: Any = item_json
    position = 0
    for match in _JSON_PATH_SEGMENT.finditer(rest):
        if match.start() != position:
            break
        position = match.end()
        attr, single, double, index = match.groups()
        if index is not None:
            offset = int(index)
            current = current[offset] if isinstance(current, list) and offset < len(current) else None
        else:
            key = attr or single or double
            current = current.get(key) if isinstance(current, Mapping) else None
        if current is None:
            return None

    if position != len(rest):
        raise NodeOperationError(f"Unsupported expression: {{{{ {expression} }}}}")
    return current


def resolve_item_expressions(value: Any, item_json: Mapping[str, Any]) -> Any:
    """
    Evaluate '=' expressions against the current item.

    Only strings starting with '=' are expressions; any other value is
    returned unchanged, braces included. Within an expression, a text that
    is exactly one {{ $json... }} placeholder takes the referenced value
    with its type, and placeholders embedded in text are rendered as
    strings. Dicts and lists are resolved recursively.
    """
    if isinstance(value, dict):
        return {k: resolve_item_expressions(v, item_json) for k, v in value.items()}
    if isinstance(value, list):
        return [resolve_item_expressions(v, item_json) for v in value]
    if not isinstance(value, str) or not value.startswith("="):
        return value

    text = value[1:]
    whole = _EXPRESSION.fullmatch(text.strip())
    if whole:
        return _evaluate_json_reference(whole.group(1), item_json)

    def _render(match: re.Match) -> str:
        resolved = _evaluate_json_reference(match.group(1), item_json)
        return "" if resolved is None else str(resolved)

    return _EXPRESSION.sub(_render, text)


__all__ = [
    "DisplayOptions",
    "NodeParameter",
    "NodeParameterType",
    "ParameterSchema",
    "get_nested_value",
    "resolve_item_expressions",
]
