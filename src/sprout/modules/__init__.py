"""Sprout modules."""
from sprout.modules.base import Module
from sprout.modules.loader import ModuleLoader, ModuleFactory
from sprout.modules.errors import ErrorCache, ErrorRecord, MODULE_NAME as ERRORS_MODULE

__all__ = [
    "Module", "ModuleLoader", "ModuleFactory",
    "ErrorCache", "ErrorRecord", "ERRORS_MODULE",
]
