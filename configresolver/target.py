"""Target introspection and in-place unmarshaling.

Targets are pydantic models, dataclasses or mutable mappings owned by the
caller. Store keys are matched to fields by serialization tag (pydantic
alias, or dataclass metadata keyed by file type) or by field name, ignoring
case. Coercion is delegated to pydantic in lax mode.
"""

import collections.abc
import dataclasses
import types
import typing
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel, TypeAdapter, ValidationError

from configresolver.exceptions import TargetNotAddressableError, UnmarshalError
from configresolver.types import ConfigFileType

SEQUENCE_TYPES: frozenset[Any] = frozenset({
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
})

MAPPING_TYPES: frozenset[Any] = frozenset({
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
})


@dataclass(frozen=True)
class FieldSpec:
    """A target field and the key it is matched against."""

    name: str
    key: str
    annotation: Any


def is_struct_type(tp: Any) -> bool:
    """Whether tp is a pydantic model class or a dataclass."""
    return isinstance(tp, type) and (
        issubclass(tp, BaseModel) or dataclasses.is_dataclass(tp)
    )


def is_frozen(obj: Any) -> bool:
    """Whether a model or dataclass instance rejects attribute assignment."""
    if isinstance(obj, BaseModel):
        return bool(obj.model_config.get("frozen", False))
    params = getattr(obj, "__dataclass_params__", None)
    return bool(params and params.frozen)


def _is_mutable_struct(obj: Any) -> bool:
    return (
        not isinstance(obj, type)
        and is_struct_type(type(obj))
        and not is_frozen(obj)
    )


def check_addressable(target: Any) -> None:
    """Raise unless target can be populated in place.

    Raises:
        TargetNotAddressableError: For classes, frozen instances and
            anything that is not a model, dataclass or mutable mapping
    """
    if _is_mutable_struct(target) or isinstance(target, MutableMapping):
        return
    if isinstance(target, type):
        raise TargetNotAddressableError(
            f"Target must be an instance, got class {target.__name__}"
        )
    if is_struct_type(type(target)):
        raise TargetNotAddressableError(
            f"Target {type(target).__name__} is frozen and cannot be populated"
        )
    raise TargetNotAddressableError(
        "Target must be a mutable model, dataclass or mapping instance, "
        f"got {type(target).__name__}"
    )


def struct_fields(tp: type, file_type: ConfigFileType) -> list[FieldSpec]:
    """List the fields of a model or dataclass with their match keys."""
    if issubclass(tp, BaseModel):
        specs = []
        for name, info in tp.model_fields.items():
            alias = info.validation_alias
            key = alias if isinstance(alias, str) else (info.alias or name)
            specs.append(FieldSpec(name=name, key=key, annotation=info.annotation))
        return specs

    hints = typing.get_type_hints(tp)
    return [
        FieldSpec(
            name=f.name,
            key=f.metadata.get(file_type.value) or f.metadata.get("alias") or f.name,
            annotation=hints.get(f.name, Any),
        )
        for f in dataclasses.fields(tp)
    ]


def _strip_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _lowered(mapping: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).lower(): v for k, v in mapping.items()}


def translate(
    value: Any,
    annotation: Any,
    file_type: ConfigFileType,
    separator: str = ",",
) -> Any:
    """Reshape a store value so pydantic can validate it against annotation.

    Tag-keyed mappings become name-keyed for nested structures, strings
    bound for sequence types are split on separator, and numbers bound for
    str fields are stringified ("port: 8080" into a str field gives "8080").
    """
    tp = _strip_optional(annotation)
    origin = get_origin(tp)

    if tp is str and isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)

    if is_struct_type(tp) and isinstance(value, Mapping):
        lowered = _lowered(value)
        return {
            spec.name: translate(lowered[spec.key.lower()], spec.annotation, file_type, separator)
            for spec in struct_fields(tp, file_type)
            if spec.key.lower() in lowered
        }

    if tp in SEQUENCE_TYPES or origin in SEQUENCE_TYPES:
        if isinstance(value, str):
            value = [item.strip() for item in value.split(separator)] if value.strip() else []
        if not isinstance(value, (list, tuple, set, frozenset)):
            return value
        args = get_args(tp)
        if origin is tuple and args and args[-1] is not Ellipsis:
            return [
                translate(v, args[i], file_type, separator) if i < len(args) else v
                for i, v in enumerate(value)
            ]
        item_type = args[0] if args else Any
        return [translate(v, item_type, file_type, separator) for v in value]

    if (tp in MAPPING_TYPES or origin in MAPPING_TYPES) and isinstance(value, Mapping):
        args = get_args(tp)
        value_type = args[1] if len(args) == 2 else Any
        return {k: translate(v, value_type, file_type, separator) for k, v in value.items()}

    return value


def _validate(annotation: Any, value: Any, key_path: str) -> Any:
    try:
        return TypeAdapter(annotation).validate_python(value, by_alias=False, by_name=True)
    except ValidationError as exc:
        raise UnmarshalError(f"Cannot unmarshal '{key_path}': {exc}", cause=exc) from exc


def plan_assignments(
    target: Any,
    store: Mapping[str, Any],
    file_type: ConfigFileType,
    separator: str = ",",
    parent: str = "",
) -> list[tuple[Any, str, Any]]:
    """Validate every matched field and return the assignments to perform.

    Nothing is assigned here, so a failure leaves the target untouched.
    Nested structure instances already present on the target are planned
    recursively so their unmatched fields keep their values.

    Raises:
        UnmarshalError: If any value cannot be coerced to its field type
    """
    assignments: list[tuple[Any, str, Any]] = []
    lowered = _lowered(store)

    for spec in struct_fields(type(target), file_type):
        key = spec.key.lower()
        if key not in lowered:
            continue
        value = lowered[key]
        key_path = f"{parent}.{spec.key}" if parent else spec.key
        current = getattr(target, spec.name, None)

        if isinstance(value, Mapping) and _is_mutable_struct(current):
            assignments.extend(
                plan_assignments(current, value, file_type, separator, key_path)
            )
            continue

        translated = translate(value, spec.annotation, file_type, separator)
        assignments.append((target, spec.name, _validate(spec.annotation, translated, key_path)))

    return assignments


def unmarshal(
    store: Mapping[str, Any],
    target: Any,
    file_type: ConfigFileType,
    separator: str = ",",
) -> None:
    """Populate target in place from the resolved store."""
    if isinstance(target, MutableMapping):
        target.update(store)
        return

    for obj, name, value in plan_assignments(target, store, file_type, separator):
        setattr(obj, name, value)
