from __future__ import annotations

from typing import Any


class WireboxError(Exception):
    """Represent a base class for all wirebox-specific failures.

    Catch this type when you want to handle any wirebox error path without
    matching each concrete exception class individually.
    """


class WireboxInvalidKeyError(WireboxError, KeyError):
    """Signal that a key has no registered provider.

    Raised by ``Container.resolve`` and awaited ``Container.resolve_async``
    calls, including lookups made on behalf of factories, constructors and
    ``from_container`` aliases.

    Typical fix is registering the key before resolving it, or correcting the
    dependency name inferred from a parameter.
    """

    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Invalid key: {self.key!s}"


class WireboxNotCallableError(WireboxError, TypeError):
    """Signal that a factory or instance provider resolved to a non-callable.

    Raised by providers configured with ``as_factory()`` or ``as_instance()``
    when the raw value produced by their source step cannot be invoked.
    """

    def __init__(self, key: Any) -> None:
        super().__init__(f"Provider for key {key!s} did not resolve to a function")
        self.key = key


class WireboxModuleLoadError(WireboxError, ImportError):
    """Signal that a ``from_module`` provider failed to load its module.

    The message names the resolved module specifier and the underlying
    cause; the original exception is chained as ``__cause__``.
    """

    def __init__(self, specifier: str, cause: BaseException) -> None:
        super().__init__(f"Unable to load module {specifier!r}: {cause}")
        self.specifier = specifier


class WireboxConcurrentAccessError(WireboxError, RuntimeError):
    """Signal sync resolution of a cached provider while async resolution runs.

    Raised by ``Provider.provide`` when caching is enabled and the same
    provider is still being resolved by ``provide_async``.

    Typical fix is awaiting ``provide_async``/``resolve_async`` instead of
    mixing sync and async access for the same key.
    """

    def __init__(self, key: Any) -> None:
        super().__init__(
            f"Cannot resolve {key!s} synchronously while an asynchronous resolution is pending",
        )
        self.key = key
