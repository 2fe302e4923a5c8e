"""Plugin loading and registration utilities."""

from __future__ import annotations

from importlib import import_module
from typing import Any, Callable, Dict

from .identity import FakerIdentityProvider, IdentityProvider

ProviderFactory = Callable[[], IdentityProvider]


class PluginRegistry:
    """Registry for identity provider factories."""

    def __init__(self) -> None:
        self.providers: Dict[str, ProviderFactory] = {}

    def register_provider(self, name: str, factory: ProviderFactory) -> None:
        """Register a provider factory under a name."""

        self.providers[name] = factory

    def load_entrypoint(self, dotted_path: str) -> Callable[..., Any]:
        """Dynamically load a callable via dotted path."""

        module_name, _, attr = dotted_path.rpartition(".")
        if not module_name:
            raise ValueError(f"Expected a dotted path like 'package.module.attr', got {dotted_path!r}")
        module = import_module(module_name)
        return getattr(module, attr)

    def create_provider(self, name: str) -> IdentityProvider:
        """Instantiate a registered provider, or load one from a dotted path."""

        factory = self.providers.get(name)
        if factory is None:
            if "." not in name:
                known = ", ".join(sorted(self.providers)) or "none"
                raise KeyError(f"Unknown identity provider {name!r} (registered: {known})")
            factory = self.load_entrypoint(name)
        provider = factory()
        if not isinstance(provider, IdentityProvider):
            raise TypeError(f"{name!r} did not produce an identity provider")
        return provider


registry = PluginRegistry()
registry.register_provider("faker", FakerIdentityProvider)

__all__ = ["registry", "PluginRegistry", "ProviderFactory"]
