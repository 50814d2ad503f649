"""Service for resolving bound actions into callables at trigger time."""

from __future__ import annotations

import importlib
import importlib.util
import logging
import os
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Callable

from eventmanager.domain.errors import MissingTypeError, NotCallableError
from eventmanager.domain.models import Action, ActionDescriptor, DirectAction
from eventmanager.repos.memory import HandlerCatalog
from eventmanager.services.parser import format_action

logger = logging.getLogger(__name__)


def _is_path(unit: str) -> bool:
    return unit.endswith(".py") or os.sep in unit or "/" in unit


class SourceUnitLoader:
    """Loads each source unit at most once per process.

    Dotted names go through ``importlib.import_module``; anything that looks
    like a file path is executed as a module from that file.
    """

    def __init__(self) -> None:
        self._loaded: dict[str, ModuleType] = {}

    def load(self, unit: str) -> ModuleType:
        module = self._loaded.get(unit)
        if module is not None:
            return module

        if _is_path(unit):
            module = self._load_file(Path(unit))
        else:
            module = importlib.import_module(unit)
        logger.debug("Loaded source unit %s", unit)
        self._loaded[unit] = module
        return module

    def is_loaded(self, unit: str) -> bool:
        return unit in self._loaded

    @staticmethod
    def _load_file(path: Path) -> ModuleType:
        path = path.resolve()
        module_name = f"_eventmanager_unit_{path.stem}_{abs(hash(str(path))):x}"
        if module_name in sys.modules:
            return sys.modules[module_name]
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load source unit from {path}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(module_name, None)
            raise
        return module


class ActionResolver:
    """Turns an action into the callable that receives the shared args."""

    def __init__(
        self,
        catalog: HandlerCatalog | None = None,
        loader: SourceUnitLoader | None = None,
    ) -> None:
        self.catalog = catalog if catalog is not None else HandlerCatalog()
        self.loader = loader if loader is not None else SourceUnitLoader()

    def resolve(self, action: Action) -> Callable[[Any], Any]:
        if isinstance(action, DirectAction):
            target = action.target
        else:
            target = self._resolve_descriptor(action)

        if not callable(target):
            raise NotCallableError(format_action(action))
        return target

    def call(self, action: Action, args: Any) -> Any:
        return self.resolve(action)(args)

    def _resolve_descriptor(self, action: ActionDescriptor) -> Any:
        module = None
        if action.source_unit:
            module = self.loader.load(action.source_unit)

        if action.type_name:
            factory = self.catalog.get_type(action.type_name)
            if factory is None and module is not None:
                factory = getattr(module, action.type_name, None)
            if factory is None or not callable(factory):
                raise MissingTypeError(action.type_name)
            instance = factory()
            logger.debug("Instantiated %s for %s", action.type_name, action.member_name)
            return getattr(instance, action.member_name, None)

        target = self.catalog.get_function(action.member_name)
        if target is None and module is not None:
            target = getattr(module, action.member_name, None)
        return target
