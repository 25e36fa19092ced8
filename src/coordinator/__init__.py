"""Coordinator — composition root системы."""

from .core import CoordinatorConfig, CoreCoordinator, build_core

__all__ = [
    "CoordinatorConfig",
    "CoreCoordinator",
    "build_core",
]
