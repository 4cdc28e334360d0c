"""Condition Registry: Extensible registration system for condition types."""

from __future__ import annotations

from typing import Any, Dict, Type

from pydantic import BaseModel, PrivateAttr, ValidationError

from decksim.errors import DecodeError

from .conditions.base import Condition


class ConditionRegistry(BaseModel):
    """Registry mapping a condition's ``type`` name to its model class."""

    _model_map: Dict[str, Type[Condition]] = PrivateAttr(default_factory=dict)

    def register(self, type_name: str, model_class: Type[Condition]) -> None:
        """
        Register a new condition type.

        Args:
            type_name: The "type" value in serialised data (e.g., "card")
            model_class: Condition model used to validate the data
        """
        if type_name in self._model_map and self._model_map[type_name] is not model_class:
            raise ValueError(f"Duplicate condition type: {type_name}")
        self._model_map[type_name] = model_class

    def register_defaults(self) -> None:
        from .conditions.card_conditions import CardCondition
        from .conditions.logical_conditions import AndCondition, OrCondition

        self.register("card", CardCondition)
        self.register("and", AndCondition)
        self.register("or", OrCondition)

    def parse(self, data: Any) -> Condition:
        """
        Parse serialised data into a runtime Condition.

        Raises:
            DecodeError: If the data is not a mapping, has no known type or
                fails validation
        """
        if not isinstance(data, dict):
            raise DecodeError(f"Condition must be a mapping, got {type(data).__name__}")

        ctype = data.get("type")
        if not ctype:
            raise DecodeError("Condition must have a 'type' field")

        model_class = self._model_map.get(ctype)
        if model_class is None:
            known = self.list_registered_types()
            raise DecodeError(f"Unknown condition type: {ctype} (known: {known})")

        try:
            return model_class.model_validate(data)
        except ValidationError as exc:
            raise DecodeError(f"Invalid '{ctype}' condition", cause=exc) from exc

    def list_registered_types(self) -> list[str]:
        """Return list of all registered condition type names."""
        return list(self._model_map.keys())


_global_condition_registry: ConditionRegistry | None = None


def get_condition_registry() -> ConditionRegistry:
    """Get the global condition registry instance, registering built-in types on first use."""
    global _global_condition_registry
    if _global_condition_registry is None:
        _global_condition_registry = ConditionRegistry()
        _global_condition_registry.register_defaults()
    return _global_condition_registry


def register_condition(type_name: str, model_class: Type[Condition]) -> None:
    """Convenience function to register a condition type on the global registry."""
    get_condition_registry().register(type_name, model_class)


__all__ = [
    "ConditionRegistry",
    "get_condition_registry",
    "register_condition",
]
