"""
Adapter factory for backend-specific type behavior.
"""
from typecompat.adapter.base import _ADAPTER_REGISTRY
from typecompat.adapter.base import DEFAULT_ADAPTER as DEFAULT_ADAPTER
from typecompat.adapter.base import OPTIONAL_TYPES as OPTIONAL_TYPES
from typecompat.adapter.base import Adapter as Adapter
from typecompat.adapter.base import Path as Path
from typecompat.adapter.base import PathRules as PathRules
from typecompat.adapter.base import Spelling as Spelling
from typecompat.adapter.base import register_adapter as register_adapter
from typecompat.adapter.postgres import POSTGRES_ADAPTER as POSTGRES_ADAPTER
from typecompat.adapter.postgres import postgres_adapter as postgres_adapter
from typecompat.adapter.sqlite import SQLITE_ADAPTER as SQLITE_ADAPTER


def _validate_backend(name: str) -> None:
    """Raise ValueError if no adapter is registered under name."""
    if name not in _ADAPTER_REGISTRY:
        available = list(_ADAPTER_REGISTRY.keys())
        raise ValueError(f'Unsupported backend: {name}. Available: {available}')


def get_adapter(name: str) -> Adapter:
    """Get the registered adapter for a backend name."""
    _validate_backend(name)
    return _ADAPTER_REGISTRY[name]


def get_available_backends() -> list[str]:
    """Return list of registered backend names."""
    return list(_ADAPTER_REGISTRY.keys())


def is_supported_backend(name: str) -> bool:
    """Check if an adapter is registered for a backend."""
    return name in _ADAPTER_REGISTRY
