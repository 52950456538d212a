from __future__ import annotations

from unittest.mock import Mock

from wirebox.bulk import BulkProvider
from wirebox.container import Container


def test_operates_with_no_providers() -> None:
    bulk = BulkProvider()

    assert bulk.from_module() is bulk
    assert len(bulk) == 0


def test_forwards_method_to_every_provider() -> None:
    providers = [Mock(), Mock(), Mock()]
    bulk = BulkProvider()
    for provider in providers:
        bulk.add_provider(provider)

    bulk.cached()

    for provider in providers:
        provider.cached.assert_called_once_with(True)


def test_passes_arguments_along() -> None:
    provider = Mock()
    bulk = BulkProvider([provider])

    bulk.as_factory("one", 2, True)
    bulk.from_module("/srv/app")
    bulk.with_context("ctx")

    provider.as_factory.assert_called_once_with("one", 2, True)
    provider.from_module.assert_called_once_with("/srv/app")
    provider.with_context.assert_called_once_with("ctx")


def test_allows_chaining() -> None:
    bulk = BulkProvider()

    assert bulk.cached() is bulk
    assert bulk.as_instance().from_value().as_value().from_container() is bulk


def test_reset_cache_reaches_real_providers() -> None:
    container = Container()
    calls: list[int] = []
    bulk = container.register_bulk({"counter": lambda: calls.append(1) or len(calls)})
    bulk.as_factory().cached()

    assert container.resolve("counter") == 1
    assert container.resolve("counter") == 1
    bulk.reset_cache()
    assert container.resolve("counter") == 2
