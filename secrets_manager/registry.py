"""Catalogue of polymorphic record families and their variants."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=type[BaseModel])


@dataclass(frozen=True, slots=True)
class Family:
    """A polymorphic record family.

    Attributes
    ----------
    name : str
        Family name, e.g. ``Secret``.
    discriminator : str
        Field whose value selects the variant.
    on_wire : bool
        Whether the discriminator is serialized into the JSON document.
    """

    name: str
    discriminator: str
    on_wire: bool = True


@dataclass(frozen=True, slots=True)
class Variant:
    """A registered variant of a family."""

    family: Family
    value: str
    model: type[BaseModel]


FAMILIES: Mapping[str, Family] = MappingProxyType(
    {
        family.name: family
        for family in (
            Family("Secret", "secret_type"),
            Family("SecretMetadata", "secret_type"),
            Family("SecretVersion", "secret_type"),
            Family("SecretVersionMetadata", "secret_type"),
            Family("SecretPrototype", "secret_type"),
            Family("SecretVersionPrototype", "secret_type", on_wire=False),
            Family("SecretMetadataPatch", "secret_type", on_wire=False),
            Family("Configuration", "config_type"),
            Family("ConfigurationMetadata", "config_type"),
            Family("ConfigurationPrototype", "config_type"),
            Family("ConfigurationPatch", "config_type", on_wire=False),
            Family("SecretAction", "action_type"),
            Family("SecretActionPrototype", "action_type"),
            Family("SecretVersionAction", "action_type"),
            Family("SecretVersionActionPrototype", "action_type"),
            Family("ConfigurationAction", "action_type"),
            Family("ConfigurationActionPrototype", "action_type"),
        )
    }
)


class ModelRegistry:
    """Map ``(family, discriminator)`` pairs to model classes.

    Variants are registered while the schema modules import; ``freeze`` is
    called once they are all loaded and the registry is read-only afterwards.
    """

    def __init__(self, families: Mapping[str, Family] = FAMILIES) -> None:
        self._families = families
        self._variants: dict[str, dict[str, Variant]] = {
            name: {} for name in families
        }
        self._by_model: dict[type[BaseModel], Variant] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        """Whether registrations are closed."""
        return self._frozen

    def freeze(self) -> None:
        """Stop accepting registrations."""
        if self._frozen:
            return
        self._variants = {
            name: MappingProxyType(variants)  # type: ignore[misc]
            for name, variants in self._variants.items()
        }
        self._frozen = True

    def variant(self, family: str, value: str | None = None) -> Callable[[ModelT], ModelT]:
        """Return a class decorator registering a variant of ``family``.

        Parameters
        ----------
        family : str
            Family name.
        value : str | None, default=None
            Discriminator value. Defaults to the default of the model's
            discriminator field.

        Returns
        -------
        Callable[[type[BaseModel]], type[BaseModel]]
            Decorator that registers and returns the class unchanged.
        """

        def decorator(model: ModelT) -> ModelT:
            self.register(family, model, value)
            return model

        return decorator

    def register(
        self, family: str, model: type[BaseModel], value: str | None = None
    ) -> Variant:
        """Register ``model`` as a variant of ``family``.

        Parameters
        ----------
        family : str
            Family name.
        model : type[BaseModel]
            Variant model.
        value : str | None, default=None
            Discriminator value. Defaults to the default of the model's
            discriminator field.

        Returns
        -------
        Variant
            The new registry entry.

        Raises
        ------
        RuntimeError
            If the registry is frozen.
        TypeError
            If no value is given and the model has no discriminator default.
        ValueError
            If the value or the model is already registered.
        """
        if self._frozen:
            raise RuntimeError("model registry is frozen")
        spec = self.family(family)
        if value is None:
            field = model.model_fields.get(spec.discriminator)
            if field is None or not isinstance(field.default, str):
                raise TypeError(
                    f"{model.__name__} has no default for {spec.discriminator!r}"
                )
            value = field.default
        if value in self._variants[family]:
            raise ValueError(f"{family} variant {value!r} is already registered")
        if model in self._by_model:
            raise ValueError(f"{model.__name__} is already registered")
        variant = Variant(family=spec, value=value, model=model)
        self._variants[family][value] = variant
        self._by_model[model] = variant
        return variant

    def family(self, name: str) -> Family:
        """Return the family called ``name``; unknown names raise ``KeyError``."""
        try:
            return self._families[name]
        except KeyError:
            raise KeyError(f"unknown model family {name!r}") from None

    def lookup(self, family: str, value: str) -> Variant | None:
        """Return the variant registered for ``value`` in ``family``."""
        return self._variants[self.family(family).name].get(value)

    def variants(self, family: str) -> Mapping[str, Variant]:
        """Return the variants of ``family`` keyed by discriminator value.

        Parameters
        ----------
        family : str
            Family name.

        Returns
        -------
        Mapping[str, Variant]
            Read-only once the registry is frozen.
        """
        return self._variants[self.family(family).name]

    def variant_of(self, model: type[BaseModel]) -> Variant | None:
        """Return the registry entry of ``model``, ``None`` for other models."""
        return self._by_model.get(model)

    def discriminators(self, family: str) -> frozenset[str]:
        """Return the discriminator values valid for ``family``."""
        return frozenset(self.variants(family))


REGISTRY = ModelRegistry()
