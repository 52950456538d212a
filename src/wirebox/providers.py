from __future__ import annotations

import asyncio
import inspect
import logging
import os
from collections.abc import Hashable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

from wirebox.exceptions import (
    WireboxConcurrentAccessError,
    WireboxModuleLoadError,
    WireboxNotCallableError,
)
from wirebox.modules import resolve_specifier

if TYPE_CHECKING:
    from typing_extensions import Self

    from wirebox.container import Container

logger = logging.getLogger(__name__)

_MISSING: Any = object()


@dataclass(frozen=True, slots=True)
class FromValue:
    """Use the stored value as-is."""


@dataclass(frozen=True, slots=True)
class FromContainer:
    """Treat the stored value as another key and resolve it from the container."""


@dataclass(frozen=True, slots=True)
class FromModule:
    """Treat the stored value as a module specifier and load it."""

    base_directory: str | os.PathLike[str] | None = None
    """Directory for relative specifiers. ``None`` means the container's working directory."""


@dataclass(frozen=True, slots=True)
class AsValue:
    """Pass the raw value through unchanged."""


@dataclass(frozen=True, slots=True)
class AsFactory:
    """Call the raw value with injected dependencies."""

    dependencies: tuple[Hashable, ...] | None = None
    """Explicit dependency keys. ``None`` means infer them from parameter names."""


@dataclass(frozen=True, slots=True)
class AsInstance:
    """Instantiate the raw value with injected constructor dependencies."""

    dependencies: tuple[Hashable, ...] | None = None
    """Explicit dependency keys. ``None`` means infer them from parameter names."""


SourceMode: TypeAlias = FromValue | FromContainer | FromModule
"""How a provider turns its stored value into a raw value."""

TransformMode: TypeAlias = AsValue | AsFactory | AsInstance
"""How a provider turns the raw value into the provided value."""


class Provider:
    """Produce the value registered under one container key.

    A provider is a small pipeline: the *source* step turns the stored value
    into a raw value (``from_value``, ``from_container``, ``from_module``),
    the *transform* step turns the raw value into the provided value
    (``as_value``, ``as_factory``, ``as_instance``) and an optional cache
    memoizes the result. Configuration methods return the provider so calls
    can be chained after ``Container.register``.

    Every configuration change drops the cached value.

    Examples:
        .. code-block:: python

            container.register("greeting", "hi")
            container.register("shout", lambda greeting: greeting.upper()).as_factory().cached()
            container.resolve("shout")  # "HI"

    """

    def __init__(self, key: Hashable, value: Any, container: Container) -> None:
        """Initialize a provider with the default configuration.

        Args:
            key: Registration key, used for diagnostics.
            value: Stored value the source step starts from.
            container: Owning container used for lookups and injection.

        """
        self.key = key
        self.value = value
        self.container = container
        self.source: SourceMode = FromValue()
        self.transform: TransformMode = AsValue()
        self.is_cached = False
        self.context: Any = None

        self._cached_value: Any = _MISSING
        self._cache_generation = 0
        self._async_lock: asyncio.Lock | None = None
        self._async_lock_loop: asyncio.AbstractEventLoop | None = None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(key={self.key!r}, source={self.source!r}, "
            f"transform={self.transform!r}, cached={self.is_cached})"
        )

    @property
    def is_resolving_async(self) -> bool:
        """Whether a cached ``provide_async`` call is computing the value right now."""
        return self._async_lock is not None and self._async_lock.locked()

    def from_value(self) -> Self:
        """Use the stored value as the raw value. This is the default."""
        self.source = FromValue()
        self.reset_cache()
        return self

    def from_container(self) -> Self:
        """Resolve the stored value as another container key.

        Useful for aliases: ``container.register("db", "primary_db").from_container()``.
        """
        self.source = FromContainer()
        self.reset_cache()
        return self

    def from_module(self, base_directory: str | os.PathLike[str] | None = None) -> Self:
        """Load the module named by the stored value.

        Specifiers starting with ``./`` or ``../`` are resolved against
        ``base_directory``; other specifiers are passed to the container's
        module loader unchanged.

        Args:
            base_directory: Directory for relative specifiers. Defaults to the
                container's working directory at resolution time.

        """
        self.source = FromModule(base_directory=base_directory)
        self.reset_cache()
        return self

    def as_value(self) -> Self:
        """Provide the raw value unchanged. This is the default."""
        self.transform = AsValue()
        self.reset_cache()
        return self

    def as_factory(self, *dependencies: Hashable) -> Self:
        """Call the raw value and provide its result.

        Args:
            *dependencies: Keys injected as positional arguments. When omitted,
                keys are inferred from the factory's parameter names.

        """
        self.transform = AsFactory(dependencies=dependencies or None)
        self.reset_cache()
        return self

    def as_instance(self, *dependencies: Hashable) -> Self:
        """Instantiate the raw value and provide the new instance.

        Args:
            *dependencies: Keys injected as constructor arguments. When
                omitted, keys are inferred from the constructor parameters.

        """
        self.transform = AsInstance(dependencies=dependencies or None)
        self.reset_cache()
        return self

    def cached(self, enabled: bool = True) -> Self:  # noqa: FBT001, FBT002
        """Enable or disable memoization of the provided value.

        Args:
            enabled: Whether to cache. Disabling also drops the cached value.

        """
        self.is_cached = enabled
        self.reset_cache()
        return self

    def with_context(self, context: Any = None) -> Self:
        """Bind factory calls to ``context``.

        The context is passed as the factory's first argument, the way a bound
        method receives ``self``. It has no effect on values or instances.

        Args:
            context: Receiver object, or ``None`` to call factories unbound.

        """
        self.context = context
        self.reset_cache()
        return self

    def reset_cache(self) -> None:
        """Drop the cached value, if any."""
        self._cached_value = _MISSING
        self._cache_generation += 1

    def provide(self) -> Any:
        """Return the provided value synchronously.

        Raises:
            WireboxConcurrentAccessError: If caching is enabled, nothing is
                cached yet and ``provide_async`` is still computing the value.
            WireboxNotCallableError: If a factory/instance provider resolved
                to a non-callable.
            WireboxModuleLoadError: If a ``from_module`` provider failed to load.

        """
        if not self.is_cached:
            return self.resolve()

        if self._cached_value is not _MISSING:
            return self._cached_value

        if self.is_resolving_async:
            raise WireboxConcurrentAccessError(self.key)

        value = self.resolve()
        self._cached_value = value
        logger.debug("Cached value for key %r", self.key)
        return value

    async def provide_async(self) -> Any:
        """Return the provided value, awaiting async sources, factories and dependencies.

        With caching enabled, concurrent callers share one computation: the
        first caller computes while the others wait and reuse the result.
        The cache is shared with ``provide``; an awaitable cached there (a
        future, or a coroutine returned by a factory) is awaited here.

        Raises:
            WireboxNotCallableError: If a factory/instance provider resolved
                to a non-callable.
            WireboxModuleLoadError: If a ``from_module`` provider failed to load.

        """
        if not self.is_cached:
            return await self.resolve_async()

        if self._cached_value is not _MISSING:
            return await self._settle_cached_value()

        async with self._get_async_lock():
            if self._cached_value is not _MISSING:
                return await self._settle_cached_value()

            generation = self._cache_generation
            value = await self.resolve_async()
            if generation == self._cache_generation and self.is_cached:
                self._cached_value = value
                logger.debug("Cached value for key %r", self.key)
            return value

    async def _settle_cached_value(self) -> Any:
        value = self._cached_value
        if not inspect.isawaitable(value):
            return value
        # Coroutines can be awaited once; keep a future in the slot instead.
        future = asyncio.ensure_future(value)
        self._cached_value = future
        return await future

    def _get_async_lock(self) -> asyncio.Lock:
        # A lock is bound to the loop it was first contended on.
        loop = asyncio.get_running_loop()
        lock = self._async_lock
        if lock is None or (self._async_lock_loop is not loop and not lock.locked()):
            lock = self._async_lock = asyncio.Lock()
            self._async_lock_loop = loop
        return lock

    def resolve(self) -> Any:
        """Compute the value without consulting the cache."""
        return self._apply_transform(self._load_source())

    async def resolve_async(self) -> Any:
        """Compute the value asynchronously without consulting the cache."""
        raw = await self._load_source_async()
        if inspect.isawaitable(raw):
            raw = await raw
        return await self._apply_transform_async(raw)

    def _load_source(self) -> Any:
        source = self.source
        if isinstance(source, FromContainer):
            return self.container.resolve(self.value)
        if isinstance(source, FromModule):
            return self._load_module(source)
        return self.value

    async def _load_source_async(self) -> Any:
        source = self.source
        if isinstance(source, FromContainer):
            return await self.container.resolve_async(self.value)
        if isinstance(source, FromModule):
            return self._load_module(source)
        return self.value

    def _apply_transform(self, raw: Any) -> Any:
        transform = self.transform
        if isinstance(transform, AsFactory):
            self._ensure_callable(raw)
            return self.container.call(raw, self._dependencies(transform), self.context)
        if isinstance(transform, AsInstance):
            self._ensure_callable(raw)
            return self.container.instance(raw, self._dependencies(transform))
        return raw

    async def _apply_transform_async(self, raw: Any) -> Any:
        transform = self.transform
        if isinstance(transform, AsFactory):
            self._ensure_callable(raw)
            return await self.container.call_async(
                raw,
                self._dependencies(transform),
                self.context,
            )
        if isinstance(transform, AsInstance):
            self._ensure_callable(raw)
            return await self.container.instance_async(raw, self._dependencies(transform))
        return raw

    def _dependencies(self, transform: AsFactory | AsInstance) -> list[Hashable] | None:
        if transform.dependencies is None:
            return None
        return list(transform.dependencies)

    def _ensure_callable(self, raw: Any) -> None:
        if not callable(raw):
            raise WireboxNotCallableError(self.key)

    def _load_module(self, source: FromModule) -> Any:
        base_directory = source.base_directory
        if base_directory is None:
            base_directory = self.container.working_directory
        specifier = resolve_specifier(str(self.value), base_directory)
        try:
            return self.container.module_loader(specifier)
        except Exception as e:
            raise WireboxModuleLoadError(specifier, e) from e
