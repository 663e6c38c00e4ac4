"""
SLA Config - Numerical Configuration System

Provides the process-wide numerical settings used by matrix operations:
the absolute tolerance for matrix equality, the pivot threshold for
elimination, and whether sparse products drop exact zeros.

Configuration can be set globally or overridden thread-locally within a
context, without changing any function signature.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, replace
from typing import Callable, Dict, Any, List
import os
import threading


# =============================================================================
# Configuration Classes
# =============================================================================

def _default_precision() -> float:
    raw = os.environ.get("SLA_ABSOLUTE_PRECISION")
    if raw is None:
        return 1e-8
    return float(raw)


@dataclass
class ComputeConfig:
    """Configuration for compute operations."""
    absolute_precision: float = 1e-8   # Tolerance for matrix equality
    epsilon: float = 1e-10             # Pivot threshold for elimination
    prune_products: bool = False       # Drop exact zeros from sparse products


# =============================================================================
# Global Configuration Manager
# =============================================================================

class SlaConfig:
    """
    Global configuration manager for SLA.

    Provides thread-local configuration with context manager support.

    Example:
        # Global configuration
        sla.config.compute = ComputeConfig(absolute_precision=1e-6)

        # Local configuration (context manager)
        with sla.config.local(compute=ComputeConfig(prune_products=True)):
            product = CompressedRow.multiply(a, b)
        # Back to global config
    """

    def __init__(self):
        self._global_compute = ComputeConfig(absolute_precision=_default_precision())

        # Thread-local storage for context overrides
        self._local = threading.local()

        self._callbacks: Dict[str, List[Callable]] = {
            "compute": [],
        }

    # -------------------------------------------------------------------------
    # Property Accessors (with thread-local override support)
    # -------------------------------------------------------------------------

    @property
    def compute(self) -> ComputeConfig:
        """Get compute configuration."""
        if getattr(self._local, "compute", None) is not None:
            return self._local.compute
        return self._global_compute

    @compute.setter
    def compute(self, value: ComputeConfig):
        """Set global compute configuration."""
        if not isinstance(value, ComputeConfig):
            raise TypeError(f"Expected ComputeConfig, got {type(value).__name__}")
        self._global_compute = value
        self._notify("compute", value)

    # -------------------------------------------------------------------------
    # Convenience Properties
    # -------------------------------------------------------------------------

    @property
    def absolute_precision(self) -> float:
        """Tolerance used when comparing matrices."""
        return self.compute.absolute_precision

    @absolute_precision.setter
    def absolute_precision(self, value: float):
        if value < 0:
            raise ValueError(f"absolute_precision must be non-negative, got {value}")
        self.compute = replace(self._global_compute, absolute_precision=value)

    @property
    def epsilon(self) -> float:
        """Pivot threshold for elimination."""
        return self.compute.epsilon

    @epsilon.setter
    def epsilon(self, value: float):
        if value < 0:
            raise ValueError(f"epsilon must be non-negative, got {value}")
        self.compute = replace(self._global_compute, epsilon=value)

    # -------------------------------------------------------------------------
    # Context Manager Support
    # -------------------------------------------------------------------------

    def local(self, **kwargs) -> "_LocalConfigContext":
        """
        Create a local configuration context.

        Args:
            **kwargs: Configuration overrides (compute)

        Returns:
            Context manager
        """
        unknown = set(kwargs) - set(self._callbacks)
        if unknown:
            raise TypeError(f"Unknown configuration sections: {sorted(unknown)}")
        return _LocalConfigContext(self, **kwargs)

    def _set_local(self, **kwargs) -> Dict[str, Any]:
        """Set thread-local configuration, returning the overrides it replaced."""
        previous = {}
        for key, value in kwargs.items():
            if value is not None:
                previous[key] = getattr(self._local, key, None)
                setattr(self._local, key, value)
        return previous

    def _restore_local(self, previous: Dict[str, Any]):
        """Reinstate thread-local overrides saved by ``_set_local``."""
        for key, value in previous.items():
            setattr(self._local, key, value)

    # -------------------------------------------------------------------------
    # Callback Registration
    # -------------------------------------------------------------------------

    def on_change(self, config_name: str, callback: Callable):
        """
        Register callback for configuration changes.

        Args:
            config_name: Name of config section ("compute")
            callback: Function to call with the new value
        """
        if config_name not in self._callbacks:
            raise KeyError(f"Unknown configuration section: {config_name!r}")
        self._callbacks[config_name].append(callback)

    def _notify(self, config_name: str, value: Any):
        for callback in self._callbacks.get(config_name, []):
            callback(value)

    # -------------------------------------------------------------------------
    # Reset / Serialization
    # -------------------------------------------------------------------------

    def reset(self):
        """Reset all configurations to defaults."""
        self._global_compute = ComputeConfig(absolute_precision=_default_precision())

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {"compute": asdict(self.compute)}

    def __repr__(self) -> str:
        return f"SlaConfig({self.to_dict()})"


class _LocalConfigContext:
    """Context manager for local configuration override."""

    def __init__(self, config: SlaConfig, **kwargs):
        self._config = config
        self._kwargs = kwargs
        self._previous: Dict[str, Any] = {}

    def __enter__(self):
        self._previous = self._config._set_local(**self._kwargs)
        return self._config

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._config._restore_local(self._previous)
        return False


# =============================================================================
# Global Instance
# =============================================================================

config = SlaConfig()


def get_config() -> SlaConfig:
    """Get the global configuration instance."""
    return config


def get_absolute_precision() -> float:
    """Current tolerance for matrix equality."""
    return config.compute.absolute_precision
