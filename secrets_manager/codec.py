"""JSON <-> typed record conversion.

Polymorphic families are resolved through :data:`secrets_manager.registry.REGISTRY`:
the discriminator is read from the incoming object and the registered variant
model validates the rest. Unknown non-discriminator fields are dropped by the
models themselves (``extra="ignore"``).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta
from typing import Annotated, Any, TypeVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    PlainSerializer,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
)
from pydantic_core import PydanticSerializationError

from secrets_manager.exceptions import DecodeError, EncodeError, UnknownVariantError
from secrets_manager.registry import REGISTRY

ModelT = TypeVar("ModelT", bound=BaseModel)


def _format_path(root: str, loc: Sequence[int | str]) -> str:
    path = root
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}"
    return path


class _NestedDecodeError(ValueError):
    """Carries a codec error through pydantic so the field location is kept."""

    def __init__(self, error: DecodeError) -> None:
        self.error = error
        super().__init__(error.reason)


def _relocate(error: DecodeError, root: str) -> DecodeError:
    path = root + error.path[1:]
    if isinstance(error, UnknownVariantError):
        return UnknownVariantError(error.family, error.discriminator, path)
    return DecodeError(path, error.reason)


def decode_model(model: type[ModelT], data: Any, *, path: str = "$") -> ModelT:
    """Validate ``data`` into a concrete model.

    Parameters
    ----------
    model : type[BaseModel]
        Target model class.
    data : Any
        Parsed JSON value.
    path : str, default="$"
        JSON path of ``data``, used in error reports.

    Returns
    -------
    BaseModel
        Validated record.
    """
    if not isinstance(data, Mapping):
        raise DecodeError(path, f"expected an object, got {type(data).__name__}")
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        error = exc.errors()[0]
        location = _format_path(path, error["loc"])
        nested = error.get("ctx", {}).get("error")
        if isinstance(nested, _NestedDecodeError):
            raise _relocate(nested.error, location) from exc
        raise DecodeError(location, error["msg"]) from exc


def decode(
    family: str,
    data: Any,
    *,
    discriminator: str | None = None,
    path: str = "$",
) -> BaseModel:
    """Decode one member of a polymorphic family.

    Parameters
    ----------
    family : str
        Family name, e.g. ``Secret``.
    data : Any
        Parsed JSON object.
    discriminator : str | None, default=None
        Variant to decode into. Required for families whose discriminator is
        not serialized; otherwise read from ``data``.
    path : str, default="$"
        JSON path of ``data``.

    Returns
    -------
    BaseModel
        Instance of the registered variant model.
    """
    spec = REGISTRY.family(family)
    if not isinstance(data, Mapping):
        raise DecodeError(path, f"expected an object, got {type(data).__name__}")
    value: Any = discriminator
    if value is None and spec.on_wire:
        value = data.get(spec.discriminator)
    if value is None:
        raise UnknownVariantError(family, None, path)
    if not isinstance(value, str):
        raise UnknownVariantError(family, str(value), path)
    variant = REGISTRY.lookup(family, value)
    if variant is None:
        raise UnknownVariantError(family, value, path)
    return decode_model(variant.model, data, path=path)


def decode_list(family: str, items: Any, *, path: str = "$") -> list[BaseModel]:
    """Decode a heterogeneous list element-wise."""
    if not isinstance(items, list):
        raise DecodeError(path, f"expected an array, got {type(items).__name__}")
    return [
        decode(family, item, path=f"{path}[{index}]")
        for index, item in enumerate(items)
    ]


def encode(model: BaseModel) -> dict[str, Any]:
    """Serialize a record to a JSON object.

    Only fields that were set are emitted. For registered variants whose
    family serializes its discriminator, the discriminator is always present.

    Parameters
    ----------
    model : BaseModel
        Record to serialize.

    Returns
    -------
    dict[str, Any]
        JSON-compatible mapping.
    """
    try:
        data = model.model_dump(mode="json", by_alias=True, exclude_unset=True)
    except PydanticSerializationError as exc:
        raise EncodeError(type(model).__name__, str(exc)) from exc
    variant = REGISTRY.variant_of(type(model))
    if variant is not None and variant.family.on_wire:
        data[variant.family.discriminator] = variant.value
    return data


def encode_variant(family: str, model: BaseModel) -> dict[str, Any]:
    """Serialize ``model`` after checking it belongs to ``family``."""
    spec = REGISTRY.family(family)
    variant = REGISTRY.variant_of(type(model))
    if variant is None or variant.family is not spec:
        raise EncodeError(
            spec.discriminator,
            f"{type(model).__name__} is not a registered {family} variant",
        )
    return encode(model)


def diff(partial: BaseModel, prototype: BaseModel | None = None) -> dict[str, Any]:
    """Derive an RFC 7396 merge-patch document.

    Fields the caller never set are omitted. A field explicitly set to
    ``None`` is emitted as ``null`` so the service erases it. Other set fields
    are emitted unless they equal the prototype's value. Nested records
    recurse; lists and mappings are emitted whole.

    Parameters
    ----------
    partial : BaseModel
        Typed partial record.
    prototype : BaseModel | None, default=None
        Reference record; defaults to an empty instance of the same model.

    Returns
    -------
    dict[str, Any]
        Merge-patch document.
    """
    if prototype is None:
        prototype = type(partial).model_construct()
    try:
        dumped = partial.model_dump(mode="json", by_alias=True)
        reference = prototype.model_dump(mode="json", by_alias=True)
    except PydanticSerializationError as exc:
        raise EncodeError(type(partial).__name__, str(exc)) from exc

    patch: dict[str, Any] = {}
    for name, field in type(partial).model_fields.items():
        if name not in partial.model_fields_set:
            continue
        key = field.alias or name
        value = getattr(partial, name)
        if value is None:
            patch[key] = None
            continue
        if isinstance(value, BaseModel):
            nested_reference = getattr(prototype, name, None)
            if type(nested_reference) is not type(value):
                nested_reference = None
            nested = diff(value, nested_reference)
            if nested:
                patch[key] = nested
            continue
        if dumped[key] != reference.get(key):
            patch[key] = dumped[key]
    return patch


def _polymorphic_validator(family: str):
    def validate(value: Any) -> BaseModel | None:
        if value is None:
            return None
        if isinstance(value, BaseModel):
            variant = REGISTRY.variant_of(type(value))
            if variant is None or variant.family.name != family:
                raise ValueError(f"{type(value).__name__} is not a {family} variant")
            return value
        try:
            return decode(family, value)
        except DecodeError as exc:
            raise _NestedDecodeError(exc) from exc

    return validate


def _polymorphic_serializer(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return encode(value)
    return value


def Polymorphic(family: str) -> Any:
    """Annotation for a field holding any variant of ``family``.

    Validation and serialization both go through this module, so nested
    polymorphic values obey the same registry rules as top-level ones.
    """
    return Annotated[
        Any,
        BeforeValidator(_polymorphic_validator(family)),
        PlainSerializer(_polymorphic_serializer, when_used="always"),
    ]


class WireDatetime(datetime):
    """A datetime that remembers the text it was decoded from."""

    wire_text: str | None = None


def _validate_timestamp(value: Any, handler: ValidatorFunctionWrapHandler) -> datetime:
    moment = handler(value)
    if not isinstance(value, str):
        return moment
    stamped = WireDatetime(
        moment.year,
        moment.month,
        moment.day,
        moment.hour,
        moment.minute,
        moment.second,
        moment.microsecond,
        tzinfo=moment.tzinfo,
        fold=moment.fold,
    )
    stamped.wire_text = value
    return stamped


def _serialize_timestamp(value: datetime) -> str:
    text = getattr(value, "wire_text", None)
    if text is not None:
        return text
    if value.utcoffset() == timedelta(0):
        return value.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"
    return value.isoformat(timespec="milliseconds")


Timestamp = Annotated[
    datetime,
    WrapValidator(_validate_timestamp),
    PlainSerializer(_serialize_timestamp, return_type=str, when_used="json"),
]
"""Date-time field type.

Decoded values are emitted exactly as the service wrote them, whatever their
precision or offset style. Values built in code are written with millisecond
precision and a ``Z`` suffix for UTC.
"""
