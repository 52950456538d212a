from __future__ import annotations

import os
from collections.abc import Hashable, Iterator
from typing import TYPE_CHECKING, Any

from wirebox.providers import Provider

if TYPE_CHECKING:
    from typing_extensions import Self


class BulkProvider:
    """Apply the same configuration to several providers at once.

    Returned by ``Container.register_bulk``. Each configuration method is
    forwarded to every provider in registration order and returns the bulk
    provider for chaining.
    """

    def __init__(self, providers: list[Provider] | None = None) -> None:
        self.providers: list[Provider] = list(providers or [])

    def __iter__(self) -> Iterator[Provider]:
        return iter(self.providers)

    def __len__(self) -> int:
        return len(self.providers)

    def add_provider(self, provider: Provider) -> None:
        """Add ``provider`` to the set."""
        self.providers.append(provider)

    def from_value(self) -> Self:
        return self._fan_out("from_value")

    def from_container(self) -> Self:
        return self._fan_out("from_container")

    def from_module(self, base_directory: str | os.PathLike[str] | None = None) -> Self:
        return self._fan_out("from_module", base_directory)

    def as_value(self) -> Self:
        return self._fan_out("as_value")

    def as_factory(self, *dependencies: Hashable) -> Self:
        return self._fan_out("as_factory", *dependencies)

    def as_instance(self, *dependencies: Hashable) -> Self:
        return self._fan_out("as_instance", *dependencies)

    def cached(self, enabled: bool = True) -> Self:  # noqa: FBT001, FBT002
        return self._fan_out("cached", enabled)

    def with_context(self, context: Any = None) -> Self:
        return self._fan_out("with_context", context)

    def reset_cache(self) -> None:
        self._fan_out("reset_cache")

    def _fan_out(self, method_name: str, *args: Any) -> Self:
        for provider in self.providers:
            getattr(provider, method_name)(*args)
        return self
