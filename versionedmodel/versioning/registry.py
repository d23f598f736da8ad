"""Registration of versioned model types."""

import logging
from typing import Any, Dict, Optional, Type

from pydantic import ValidationError as PydanticValidationError

from .config import DEFAULT_PROPERTY_NAME, ModelVersioningConfig, OverrideProperty
from .exceptions import ConfigurationError
from .override import resolve_override_property

logger = logging.getLogger(__name__)


class VersioningRegistry:
    """
    Maps model types to their ModelVersioningConfig.

    All registrations must happen before documents are converted from several
    threads; lookups are plain dict reads and take no lock.
    """

    def __init__(self):
        self._configs: Dict[type, ModelVersioningConfig] = {}

    def register(
        self,
        model_cls: type,
        current_version: str,
        property_name: str = DEFAULT_PROPERTY_NAME,
        default_deserialize_version: Optional[str] = "",
        default_serialize_version: Optional[str] = "",
        suppress_tag_for_version: Optional[str] = None,
        always_convert: bool = False,
        to_current_converter: Any = None,
        to_target_converter: Any = None,
        override_property: Optional[OverrideProperty] = None,
    ) -> ModelVersioningConfig:
        """
        Register ``model_cls`` as a versioned model.

        Converters may be passed as instances or classes; classes are
        instantiated here.

        Returns:
            The validated configuration

        Raises:
            ConfigurationError: if the configuration or the override property is invalid
        """
        override = resolve_override_property(model_cls, override_property)

        try:
            config = ModelVersioningConfig(
                current_version=current_version,
                property_name=property_name,
                default_deserialize_version=default_deserialize_version,
                default_serialize_version=default_serialize_version,
                suppress_tag_for_version=suppress_tag_for_version,
                always_convert=always_convert,
                to_current_converter=to_current_converter,
                to_target_converter=to_target_converter,
                override_property=override,
            )
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid versioning configuration for {model_cls.__qualname__}: {e}"
            ) from e

        if model_cls in self._configs:
            logger.warning(
                f"{model_cls.__qualname__} was already registered, replacing its configuration"
            )
        self._configs[model_cls] = config
        logger.debug(
            f"Registered {model_cls.__qualname__} at version {config.current_version}"
        )
        return config

    def get(self, model_cls: type) -> ModelVersioningConfig:
        """Return the configuration of ``model_cls``.

        Raises:
            ConfigurationError: if the type was never registered
        """
        try:
            return self._configs[model_cls]
        except KeyError:
            raise ConfigurationError(
                f"{model_cls.__qualname__} is not a registered versioned model"
            ) from None

    def __contains__(self, model_cls: object) -> bool:
        return model_cls in self._configs

    def __len__(self) -> int:
        return len(self._configs)


default_registry = VersioningRegistry()


def versioned_model(
    current_version: str,
    registry: Optional[VersioningRegistry] = None,
    **options: Any,
):
    """Class decorator registering a model type.

    Example:
        @versioned_model("2.0", to_current_converter=PersonConverter)
        class Person(BaseModel):
            full_name: str
    """

    def decorate(model_cls: Type) -> Type:
        (registry or default_registry).register(model_cls, current_version, **options)
        return model_cls

    return decorate
