"""Declarative descriptors for Deliverect resources and operations."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

INTERNAL_NAME_SUFFIX = " (Internal)"
INTERNAL_DESCRIPTION_NOTE = "Intended for Deliverect integrations, not standard automations."


class PayloadField(BaseModel):
    """Maps one operation parameter into the request body.

    ``key=None`` makes the parameter the whole body. A ``label`` marks the
    parameter as JSON-typed: string values are decoded and errors name the
    label.
    """

    model_config = ConfigDict(frozen=True)

    param: str
    key: str | None = None
    label: str | None = None
    shape: Literal["any", "array", "object"] = "any"
    optional: bool = False
    required_keys: tuple[str, ...] = ()


class QueryFlag(BaseModel):
    """Query parameter emitted only under a condition on its source parameter.

    ``true_if_set`` sends ``true`` when the parameter is truthy,
    ``false_if_false`` sends ``false`` only for an explicit ``False`` and
    ``value_if_set`` forwards a truthy value unchanged.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    param: str
    mode: Literal["true_if_set", "false_if_false", "value_if_set"]


class OperationSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    resource: str
    value: str
    name: str
    action: str
    description: str = ""
    method: Literal["GET", "POST", "PUT", "PATCH", "DELETE"]
    path: str
    required: tuple[str, ...] = ()
    where: dict[str, str] = Field(default_factory=dict)
    projection: dict[str, Any] | None = None
    query_flags: tuple[QueryFlag, ...] = ()
    body: tuple[PayloadField, ...] = ()
    internal: bool = False
    paginated: bool = False

    @property
    def display_name(self) -> str:
        if not self.internal or INTERNAL_NAME_SUFFIX in self.name:
            return self.name
        return f"{self.name}{INTERNAL_NAME_SUFFIX}"

    @property
    def display_action(self) -> str:
        if not self.internal or INTERNAL_NAME_SUFFIX in self.action:
            return self.action
        return f"{self.action}{INTERNAL_NAME_SUFFIX}"

    @property
    def display_description(self) -> str:
        if not self.internal:
            return self.description
        if not self.description:
            return INTERNAL_DESCRIPTION_NOTE
        return f"{self.description} {INTERNAL_DESCRIPTION_NOTE}"

    def summary(self) -> dict[str, Any]:
        return {
            "resource": self.resource,
            "operation": self.value,
            "name": self.display_name,
            "action": self.display_action,
            "description": self.display_description,
            "method": self.method,
            "path": self.path,
            "required": list(self.required),
            "paginated": self.paginated,
        }
