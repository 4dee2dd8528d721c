from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING

# sqla pulls in SQLAlchemy and is only imported when accessed
if TYPE_CHECKING:
    from . import sqla

from .config import Config, RelReloadConfig
from .exceptions import AdapterError, ConfigError, ReloadFailedError, RelReloadError
from .interface import (
    ModelAdapter,
    RelationshipDescriptor,
    RelationshipKind,
    Reloadable,
    supports_reload,
)
from .log import LogConfig, Logger, LoggerFactory, default_logger
from .observability import HookContext, HookEvent, ObservabilityHooks
from .options import ReloadOptions
from .traversal import Reloader, reload_relationships
from .visited import VisitedMap

try:
    __version__ = version("relreload")
except PackageNotFoundError:
    # Package not installed (development checkout)
    __version__ = "0.1.0-dev"

__all__ = [
    "__version__",
    # Modules
    "sqla",
    # Traversal
    "Reloader",
    "reload_relationships",
    "ReloadOptions",
    "VisitedMap",
    # ORM abstraction
    "ModelAdapter",
    "RelationshipDescriptor",
    "RelationshipKind",
    "Reloadable",
    "supports_reload",
    # Ambient
    "Config",
    "RelReloadConfig",
    "LogConfig",
    "Logger",
    "LoggerFactory",
    "default_logger",
    "HookContext",
    "HookEvent",
    "ObservabilityHooks",
    # Exceptions
    "RelReloadError",
    "ReloadFailedError",
    "AdapterError",
    "ConfigError",
]


def __getattr__(name: str) -> object:
    """Lazy import of the SQLAlchemy integration."""
    import importlib

    if name == "sqla":
        module = importlib.import_module(f".{name}", __name__)
        globals()[name] = module
        return module
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
