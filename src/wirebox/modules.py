from __future__ import annotations

import hashlib
import importlib
import importlib.util
import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path
from types import ModuleType
from typing import TypeAlias

ModuleLoader: TypeAlias = Callable[[str], object]
"""Callable that turns a module specifier into a loaded module (or any object)."""

_RELATIVE_PREFIXES = ("./", "../", ".\\", "..\\")
_PACKAGE_INIT = "__init__.py"
_FILE_MODULE_PREFIX = "_wirebox_file_module_"

logger = logging.getLogger(__name__)


def is_relative_specifier(specifier: str) -> bool:
    """Return True when ``specifier`` is a path relative to a base directory."""
    return specifier in {".", ".."} or specifier.startswith(_RELATIVE_PREFIXES)


def resolve_specifier(specifier: str, base_directory: str | os.PathLike[str]) -> str:
    """Join relative specifiers to ``base_directory``; return others unchanged.

    Args:
        specifier: Module name, dotted path or filesystem path.
        base_directory: Directory used for ``./`` and ``../`` specifiers.

    """
    if not is_relative_specifier(specifier):
        return specifier
    return os.path.normpath(os.path.join(os.fspath(base_directory), specifier))


def load_module(specifier: str) -> ModuleType:
    """Load a module by dotted name or by filesystem path.

    Paths to ``.py`` files and to package directories are executed once and
    cached in ``sys.modules`` under a name derived from their absolute path.
    A path without a suffix tries ``<path>.py`` first, then the package
    directory ``<path>/__init__.py``. Everything else goes through
    ``importlib.import_module``.

    Args:
        specifier: Dotted module name or path to a source file/package.

    Raises:
        ImportError: If the module cannot be found or executed.

    """
    path = Path(specifier)
    if path.suffix == ".py":
        return _load_from_path(path)
    if is_path_specifier(specifier):
        source_file = Path(f"{specifier}.py")
        if source_file.is_file():
            return _load_from_path(source_file)
        return _load_from_path(path)
    if path.is_dir():
        return _load_from_path(path)
    return importlib.import_module(specifier)


def is_path_specifier(specifier: str) -> bool:
    """Return True when ``specifier`` names a filesystem path rather than a dotted module."""
    if os.path.isabs(specifier) or is_relative_specifier(specifier):
        return True
    return os.sep in specifier or (os.altsep is not None and os.altsep in specifier)


def _load_from_path(path: Path) -> ModuleType:
    path = path.absolute()
    if path.is_dir():
        path = path / _PACKAGE_INIT
    if not path.is_file():
        msg = f"No module file at {path}"
        raise ModuleNotFoundError(msg, path=str(path))

    module_name = _FILE_MODULE_PREFIX + hashlib.sha1(str(path).encode()).hexdigest()[:16]  # noqa: S324
    if (module := sys.modules.get(module_name)) is not None:
        return module

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Cannot build an import spec for {path}"
        raise ImportError(msg, path=str(path))

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise

    logger.debug("Loaded module %s from %s", module_name, path)
    return module
