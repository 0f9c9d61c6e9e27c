"""Validated, named action records and the registry that builds them.

Actions are events triggered by the user (e.g. clicking a button) or by an
async notification (e.g. a peer joining). They are validated once, when
constructed, and handed to a dispatcher unchanged.

Every action class carries its canonical ``name`` as a class constant. A
caller-supplied ``name`` value is an unknown field and is discarded, so the
canonical name always wins. Pass ``reject_name_field=True`` to
``Action.from_values`` (or to ``ActionCatalog``) to make that a construction
error instead.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Annotated, Any, ClassVar, Union

import structlog
from pydantic import BaseModel, ConfigDict, Strict, create_model
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

log = structlog.get_logger()

# Wire numbers are JSON numbers: ints are accepted, numeric strings are not
Number = Annotated[float, Strict()]
Boolean = Annotated[bool, Strict()]

RESERVED_FIELD = "name"


class ActionError(Exception):
    """Base exception for action errors."""


class ActionValidationError(ActionError, ValueError):
    """Raised when values do not satisfy an action's schema.

    Attributes:
        action_name: Canonical name of the action being constructed.
        errors: Field-level error details.
    """

    def __init__(self, action_name: str, errors: list[dict[str, Any]]) -> None:
        self.action_name = action_name
        self.errors = errors
        fields = ", ".join(".".join(str(p) for p in e.get("loc", ())) or "<root>" for e in errors)
        super().__init__(f"Invalid values for action {action_name}: {fields}")


class ActionCatalogError(ActionError):
    """Raised when an action kind cannot be registered."""


class UnknownActionError(ActionCatalogError, KeyError):
    """Raised when an action name is not in the catalog."""


class Action(BaseModel):
    """Base class for all action kinds."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    name: ClassVar[str] = ""

    @classmethod
    def from_values(
        cls,
        values: Mapping[str, Any] | None = None,
        *,
        reject_name_field: bool = False,
    ) -> Action:
        """Validate raw values and build the action.

        Args:
            values: Field values, keyed by wire (camelCase) or Python name
            reject_name_field: Fail instead of discarding a ``name`` value

        Returns:
            The constructed action

        Raises:
            ActionValidationError: If a required field is missing or mistyped
        """
        values = dict(values or {})
        if reject_name_field and RESERVED_FIELD in values:
            raise ActionValidationError(
                cls.name,
                [
                    {
                        "type": "reserved_field",
                        "loc": (RESERVED_FIELD,),
                        "msg": "'name' is reserved for the action identifier",
                    }
                ],
            )
        try:
            return cls.model_validate(values)
        except PydanticValidationError as e:
            log.debug("action_validation_failed", action=cls.name, error_count=e.error_count())
            raise ActionValidationError(cls.name, e.errors(include_url=False)) from e

    def to_payload(self) -> dict[str, Any]:
        """Return the action's fields keyed by their wire names."""
        return self.model_dump(by_alias=True, exclude_none=True)


def _field_definition(spec: Any) -> tuple[Any, Any]:
    """Translate a schema entry into a ``(type, default)`` pair."""
    if isinstance(spec, tuple) and len(spec) == 2 and not isinstance(spec[1], type):
        annotation, default = spec
    else:
        annotation, default = spec, ...

    if isinstance(annotation, tuple):
        annotation = Union[tuple(_field_type(t) for t in annotation)]  # noqa: UP007
    else:
        annotation = _field_type(annotation)
    return annotation, default


def _field_type(tp: Any) -> Any:
    if tp is bool:
        return Boolean
    if tp in (int, float):
        return Number
    if tp is dict:
        return dict[str, Any]
    if tp is list:
        return list[Any]
    return tp


def _class_name(action_name: str) -> str:
    return action_name[:1].upper() + action_name[1:]


class ActionCatalog:
    """Registry of action kinds, keyed by canonical name.

    A catalog is built once, explicitly, and passed to whatever needs to
    construct actions from raw values.

    Example:
        catalog = ActionCatalog()
        Ping = catalog.define("ping", {"count": int})
        action = catalog.create("ping", {"count": 3})
        assert action.name == "ping"
    """

    def __init__(self, *, reject_name_field: bool = False) -> None:
        self._actions: dict[str, type[Action]] = {}
        self._reject_name_field = reject_name_field

    def define(self, name: str, schema: Mapping[str, Any] | None = None) -> type[Action]:
        """Create and register a new action kind.

        Schema values are Python types (``str``, ``bool``, ``float``,
        ``dict``, ``list``, a pydantic model, ...), a tuple of types for
        "one of", or a ``(type, default)`` pair for an optional field. An
        empty schema defines a signal with no payload.

        Args:
            name: Canonical, unique action name
            schema: Field name to expected type mapping

        Returns:
            The new action class

        Raises:
            ActionCatalogError: If the name is taken or the schema uses ``name``
        """
        schema = dict(schema or {})
        if RESERVED_FIELD in schema:
            raise ActionCatalogError(f"Action {name} cannot declare a field called 'name'")

        fields = {field: _field_definition(spec) for field, spec in schema.items()}
        action_cls = create_model(_class_name(name), __base__=Action, **fields)  # type: ignore[call-overload]
        action_cls.name = name
        return self.register(action_cls)

    def register(self, action_cls: type[Action]) -> type[Action]:
        """Register a statically declared action class.

        Usable as a class decorator.

        Raises:
            ActionCatalogError: If the class has no name or the name is taken
        """
        name = action_cls.name
        if not name:
            raise ActionCatalogError(f"{action_cls.__name__} has no action name")
        if name in self._actions:
            raise ActionCatalogError(f"Action {name} is already defined")
        self._actions[name] = action_cls
        return action_cls

    def get(self, name: str) -> type[Action]:
        """Look up an action class by name.

        Raises:
            UnknownActionError: If no action has that name
        """
        try:
            return self._actions[name]
        except KeyError:
            raise UnknownActionError(name) from None

    def create(self, name: str, values: Mapping[str, Any] | None = None) -> Action:
        """Validate values and build the named action.

        Raises:
            UnknownActionError: If no action has that name
            ActionValidationError: If the values do not match the schema
        """
        return self.get(name).from_values(values, reject_name_field=self._reject_name_field)

    def names(self) -> list[str]:
        """Return registered action names in registration order."""
        return list(self._actions)

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    def __iter__(self) -> Iterator[type[Action]]:
        return iter(self._actions.values())

    def __len__(self) -> int:
        return len(self._actions)
