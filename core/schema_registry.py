# core/schema_registry.py
from __future__ import annotations
from typing import Callable, List, Tuple
from sqlalchemy.engine import Engine
import importlib
import logging
import pkgutil
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

# Schema installer type
SchemaInstaller = Callable[[Engine], None]

# Registry: (name, installer_func)
_REGISTRY: List[Tuple[str, SchemaInstaller]] = []

def register(
    name: str | SchemaInstaller, installer: SchemaInstaller | None = None
) -> SchemaInstaller | Callable[[SchemaInstaller], SchemaInstaller]:
    """
    Registers a schema installer function.
    Can be used as a decorator (@register / @register("name")) or a call (register("name", fn)).
    Registering the same name twice replaces the earlier installer.
    """
    if isinstance(name, str) and installer is None:
        def decorator(fn: SchemaInstaller) -> SchemaInstaller:
            _add(name, fn)
            return fn
        return decorator

    if callable(name) and installer is None:
        _add(name.__name__, name)
        return name

    if isinstance(name, str) and callable(installer):
        _add(name, installer)
        return installer

    raise TypeError("Invalid usage of @register")

def _add(name: str, fn: SchemaInstaller) -> None:
    for i, (existing, _) in enumerate(_REGISTRY):
        if existing == name:
            _REGISTRY[i] = (name, fn)
            return
    _REGISTRY.append((name, fn))

def registered_names() -> List[str]:
    return [name for name, _ in _REGISTRY]

def run_all(engine: Engine) -> None:
    """
    Runs all registered schema installers in registration order.
    """
    logger.info("Running %d schema installers", len(_REGISTRY))
    for name, installer_fn in _REGISTRY:
        logger.debug("Applying schema: %s", name)
        installer_fn(engine)

def auto_discover(start_path: str | Path = "schemas", root_package: str | None = None) -> None:
    """
    Imports every module in a directory to trigger @register decorators.

    :param start_path: The directory to scan (e.g. "schemas").
    :param root_package: The parent package name, when the directory lives inside one.
    """
    start_path = Path(start_path)
    if not start_path.is_dir():
        logger.warning("Schema auto_discover: %s is not a directory, skipping", start_path)
        return

    if root_package:
        base_import_name = f"{root_package}.{start_path.name}"
    else:
        parent_dir = str(start_path.parent.resolve())
        if parent_dir not in sys.path:
            sys.path.insert(0, parent_dir)
        base_import_name = start_path.name

    for _, module_name, is_pkg in pkgutil.iter_modules([str(start_path)], prefix=f"{base_import_name}."):
        if is_pkg:
            continue
        importlib.import_module(module_name)
        logger.debug("Discovered schema module %s", module_name)
