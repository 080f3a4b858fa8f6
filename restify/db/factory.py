"""Store factory with registry-based configuration."""

from typing import Any, Callable, Dict, Optional, Type

from restify.config import get_config
from restify.exceptions import InvalidConfigurationError

from .jsonstore import JsonStore
from .mongostore import MongoStore
from .store import Store

# Registry for store implementations
_STORE_REGISTRY: Dict[str, Type[Store]] = {}
# Registry for store configuration functions
_STORE_CONFIGURATORS: Dict[str, Callable[[Dict[str, Any]], Store]] = {}


def register_store_type(
    name: str,
    store_class: Type[Store],
    configurator: Optional[Callable[[Dict[str, Any]], Store]] = None,
) -> None:
    """Register a store implementation.

    Args:
        name: Store type name to register
        store_class: Class implementing the Store interface
        configurator: Optional function building the store from kwargs

    Raises:
        InvalidConfigurationError: If the class is not a Store or the name is taken
    """
    if not (isinstance(store_class, type) and issubclass(store_class, Store)):
        raise InvalidConfigurationError(
            "store_class",
            getattr(store_class, "__name__", store_class),
            "Store class must inherit from Store",
        )

    if name in _STORE_REGISTRY:
        raise InvalidConfigurationError(
            "store_type", name, "Store type is already registered"
        )

    _STORE_REGISTRY[name] = store_class
    _STORE_CONFIGURATORS[name] = configurator or (
        lambda kwargs: store_class(**kwargs)
    )


def unregister_store_type(name: str) -> None:
    """Unregister a store implementation."""
    _STORE_REGISTRY.pop(name, None)
    _STORE_CONFIGURATORS.pop(name, None)


def list_store_types() -> Dict[str, Type[Store]]:
    """Get all registered store types."""
    return _STORE_REGISTRY.copy()


def create_store(store_type: Optional[str] = None, **kwargs: Any) -> Store:
    """Create a store instance.

    Args:
        store_type: Registered store type, defaults to ``RESTIFY_STORE_TYPE``
        **kwargs: Store-specific configuration

    Returns:
        Store instance

    Raises:
        InvalidConfigurationError: If the type is unknown or construction fails
    """
    if store_type is None:
        store_type = get_config().store_type

    if store_type not in _STORE_REGISTRY:
        available = ", ".join(sorted(_STORE_REGISTRY))
        raise InvalidConfigurationError(
            "store_type",
            store_type,
            f"Store type is not registered. Available types: {available}",
        )

    configurator = _STORE_CONFIGURATORS[store_type]
    try:
        return configurator(kwargs)
    except Exception as e:
        raise InvalidConfigurationError(
            "store_configuration",
            store_type,
            f"Failed to configure store: {e}",
            details={"kwargs": sorted(kwargs)},
        ) from e


def _json_configurator(kwargs: Dict[str, Any]) -> JsonStore:
    base_path = kwargs.get("base_path") or get_config().json_path
    return JsonStore(str(base_path))


def _mongodb_configurator(kwargs: Dict[str, Any]) -> MongoStore:
    config = get_config()
    kwargs.setdefault("uri", config.mongodb_uri)
    kwargs.setdefault("db_name", config.mongodb_db_name)
    return MongoStore(**kwargs)


def _register_builtin_stores() -> None:
    register_store_type("json", JsonStore, _json_configurator)
    register_store_type("mongodb", MongoStore, _mongodb_configurator)


_register_builtin_stores()
