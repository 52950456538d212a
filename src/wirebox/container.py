from __future__ import annotations

import asyncio
import builtins
import inspect
import logging
import os
from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping, Sequence
from types import MethodType
from typing import Any, TypeVar

from wirebox.arguments import count_required_positionals, infer_parameters
from wirebox.bulk import BulkProvider
from wirebox.exceptions import WireboxInvalidKeyError
from wirebox.modules import ModuleLoader, load_module
from wirebox.providers import Provider

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Container:
    """Map keys to providers and inject resolved values into callables.

    Keys are any hashable values, usually strings matching parameter names.
    ``register`` returns a ``Provider`` that controls how the value is
    produced; ``resolve``/``resolve_async`` produce it. ``call`` and
    ``instance`` (and their async variants) look up one key per parameter
    of a function or constructor and pass the values positionally.

    Dependencies are resolved recursively with no cycle detection: a cyclic
    graph ends in ``RecursionError``.
    """

    def __init__(
        self,
        *,
        module_loader: ModuleLoader = load_module,
        working_directory: str | os.PathLike[str] | None = None,
    ) -> None:
        """Initialize an empty container.

        Args:
            module_loader: Callable used by ``Provider.from_module`` to load a
                module specifier. Defaults to ``wirebox.modules.load_module``.
            working_directory: Base directory for relative module specifiers.
                Defaults to the process working directory at resolution time.

        """
        self.module_loader = module_loader
        self._working_directory = working_directory
        self._registered: dict[Hashable, Provider] = {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(keys={self.list()!r})"

    def __contains__(self, key: object) -> bool:
        return key in self._registered

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._registered)

    @property
    def working_directory(self) -> str:
        """Directory that relative ``from_module`` specifiers are resolved against."""
        if self._working_directory is None:
            return os.getcwd()
        return os.fspath(self._working_directory)

    def register(self, key: Hashable, value: Any) -> Provider:
        """Register ``value`` under ``key`` and return its provider.

        The provider starts as ``from_value().as_value().cached(False)`` with
        no context, so resolving ``key`` returns ``value`` unchanged until the
        provider is configured otherwise. Registering an existing key replaces
        its provider.

        Args:
            key: Hashable lookup key.
            value: Value, factory, class, alias key or module specifier,
                depending on how the returned provider is configured.

        Returns:
            The new provider, for fluent configuration.

        Examples:
            .. code-block:: python

                container.register("config", load_config).as_factory().cached()
                container.register("repo", SqlRepository).as_instance()

        """
        if key in self._registered:
            logger.debug("Replacing provider for key %r", key)
        else:
            logger.debug("Registering provider for key %r", key)
        provider = Provider(key, value, self)
        self._registered[key] = provider
        return provider

    def register_bulk(
        self,
        items: Mapping[Hashable, Any] | Iterable[tuple[Hashable, Any]],
    ) -> BulkProvider:
        """Register every key/value pair and return a provider set for shared configuration.

        Args:
            items: Mapping or iterable of ``(key, value)`` pairs.

        Examples:
            .. code-block:: python

                container.register_bulk({"users": UserRepo, "orders": OrderRepo}).as_instance()

        """
        pairs = items.items() if isinstance(items, Mapping) else items
        return BulkProvider([self.register(key, value) for key, value in pairs])

    def is_registered(self, key: Hashable) -> bool:
        """Return True when ``key`` has a provider."""
        return key in self._registered

    def get_provider(self, key: Hashable) -> Provider:
        """Return the provider registered under ``key``.

        Raises:
            WireboxInvalidKeyError: If ``key`` is not registered.

        """
        provider = self._registered.get(key)
        if provider is None:
            raise WireboxInvalidKeyError(key)
        return provider

    def resolve(self, key: Hashable) -> Any:
        """Produce the value registered under ``key``.

        Args:
            key: Registered key.

        Raises:
            WireboxInvalidKeyError: If ``key`` (or a key it depends on) is
                not registered.
            WireboxConcurrentAccessError: If the provider is cached and an
                async resolution of it is still running.

        """
        return self.get_provider(key).provide()

    async def resolve_async(self, key: Hashable) -> Any:
        """Produce the value registered under ``key``, awaiting async values.

        Errors, including a missing key, are raised when the coroutine is
        awaited, never when it is created.

        Args:
            key: Registered key.

        Raises:
            WireboxInvalidKeyError: If ``key`` (or a key it depends on) is
                not registered.

        """
        return await self.get_provider(key).provide_async()

    def call(
        self,
        fn: Callable[..., T],
        dependencies: Sequence[Hashable] | Any = None,
        context: Any = None,
    ) -> T:
        """Call ``fn`` with its dependencies resolved from the container.

        Awaitable dependency values are passed as-is; ``call`` never awaits.

        Args:
            fn: Function to call.
            dependencies: Keys to inject positionally. When omitted, keys are
                the names of ``fn``'s positional parameters. Any value that is
                not a list or tuple is taken as ``context`` instead.
            context: Object bound as ``fn``'s first argument, the way a method
                receives ``self``. The bound parameter is not injected.

        Returns:
            Whatever ``fn`` returns.

        Notes:
            An explicit key list shorter than ``fn``'s required parameters
            leaves the remaining required parameters set to ``None``.

        Examples:
            .. code-block:: python

                container.register("a", 1)
                container.register("b", 2)
                container.call(lambda a, b: a + b)  # 3

        """
        dependencies, context = self._split_dependencies_and_context(dependencies, context)
        target = self._bind(fn, context)
        args = [self.resolve(key) for key in self._injection_keys(target, dependencies)]
        return target(*self._pad_arguments(target, args))

    async def call_async(
        self,
        fn: Callable[..., Any],
        dependencies: Sequence[Hashable] | Any = None,
        context: Any = None,
    ) -> Any:
        """Call ``fn`` after awaiting all of its dependencies.

        Dependencies are resolved concurrently and the first failure propagates.
        Resolutions that are already running are left to finish on their own.
        If ``fn`` returns an awaitable it is awaited too, so ``async def``
        factories work transparently.

        Args:
            fn: Function or coroutine function to call.
            dependencies: Keys to inject, or ``None`` to infer them. See ``call``.
            context: Object bound as ``fn``'s first argument. See ``call``.

        Returns:
            The awaited result of ``fn``.

        """
        dependencies, context = self._split_dependencies_and_context(dependencies, context)
        target = self._bind(fn, context)
        args = await self._resolve_all_async(self._injection_keys(target, dependencies))
        result = target(*self._pad_arguments(target, args))
        if inspect.isawaitable(result):
            result = await result
        return result

    def instance(self, cls: Callable[..., T], dependencies: Sequence[Hashable] | None = None) -> T:
        """Construct ``cls`` with its constructor dependencies resolved from the container.

        Args:
            cls: Class (or any constructor callable) to instantiate.
            dependencies: Keys to inject, or ``None`` to infer them from the
                constructor parameter names.

        Examples:
            .. code-block:: python

                class Service:
                    def __init__(self, repo, clock): ...

                service = container.instance(Service)

        """
        args = [self.resolve(key) for key in self._injection_keys(cls, dependencies)]
        return cls(*self._pad_arguments(cls, args))

    async def instance_async(
        self,
        cls: Callable[..., T],
        dependencies: Sequence[Hashable] | None = None,
    ) -> T:
        """Construct ``cls`` after awaiting all of its constructor dependencies.

        Args:
            cls: Class (or any constructor callable) to instantiate.
            dependencies: Keys to inject, or ``None`` to infer them.

        """
        args = await self._resolve_all_async(self._injection_keys(cls, dependencies))
        return cls(*self._pad_arguments(cls, args))

    def list(self) -> builtins.list[Hashable]:
        """Return registered keys in registration order."""
        return builtins.list(self._registered)

    def _split_dependencies_and_context(
        self,
        dependencies: Any,
        context: Any,
    ) -> tuple[builtins.list[Hashable] | None, Any]:
        if dependencies is None:
            return None, context
        if isinstance(dependencies, builtins.list | tuple):
            return builtins.list(dependencies), context
        if context is not None:
            msg = (
                f"Dependencies must be a list or tuple of keys, got {dependencies!r} "
                "together with an explicit context."
            )
            raise TypeError(msg)
        return None, dependencies

    def _bind(self, fn: Callable[..., Any], context: Any) -> Callable[..., Any]:
        if context is None:
            return fn
        return MethodType(fn, context)

    def _injection_keys(
        self,
        target: Callable[..., Any],
        dependencies: Sequence[Hashable] | None,
    ) -> builtins.list[Hashable]:
        if dependencies is not None:
            return builtins.list(dependencies)

        keys: builtins.list[Hashable] = []
        for parameter in infer_parameters(target):
            # Unregistered parameters with defaults keep their defaults.
            if parameter.has_default and parameter.name not in self._registered:
                break
            keys.append(parameter.name)
        return keys

    def _pad_arguments(
        self,
        target: Callable[..., Any],
        args: builtins.list[Any],
    ) -> builtins.list[Any]:
        missing = count_required_positionals(target, len(args))
        if not missing:
            return args
        return [*args, *([None] * missing)]

    async def _resolve_all_async(self, keys: Sequence[Hashable]) -> builtins.list[Any]:
        if not keys:
            return []
        if len(keys) == 1:
            # Single dependency - await directly (skip gather overhead)
            return [await self.resolve_async(keys[0])]

        # Wrap in create_task() so each coroutine gets its own context copy
        tasks = [asyncio.create_task(self.resolve_async(key)) for key in keys]
        return builtins.list(await asyncio.gather(*tasks))
