from wirebox.arguments import infer_parameter_names
from wirebox.bulk import BulkProvider
from wirebox.container import Container
from wirebox.exceptions import (
    WireboxConcurrentAccessError,
    WireboxError,
    WireboxInvalidKeyError,
    WireboxModuleLoadError,
    WireboxNotCallableError,
)
from wirebox.providers import Provider

__all__ = [
    "BulkProvider",
    "Container",
    "Provider",
    "WireboxConcurrentAccessError",
    "WireboxError",
    "WireboxInvalidKeyError",
    "WireboxModuleLoadError",
    "WireboxNotCallableError",
    "infer_parameter_names",
]
