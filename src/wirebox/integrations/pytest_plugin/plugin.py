from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import Any

import pytest

from wirebox.container import Container

_REGISTER_MARKER = "wirebox_register"


def pytest_configure(config: pytest.Config) -> None:
    """Register the ``wirebox_register`` marker.

    Args:
        config: Pytest configuration object.

    """
    config.addinivalue_line(
        "markers",
        f"{_REGISTER_MARKER}(values): pre-register a mapping of keys to values "
        "in the wirebox_container fixture",
    )


@pytest.fixture()
def wirebox_container(request: pytest.FixtureRequest) -> Container:
    """Create a per-test container.

    Values passed to ``@pytest.mark.wirebox_register({...})`` markers are
    registered with the default ``from_value().as_value()`` configuration,
    closest marker last so it wins on duplicate keys. The fixture is
    function-scoped, so registrations are isolated between tests.

    Args:
        request: Pytest fixture request used to read markers.

    Returns:
        A new ``Container`` instance.

    """
    container = Container()
    markers = list(request.node.iter_markers(name=_REGISTER_MARKER))
    for marker in reversed(markers):
        for key, value in _marker_values(marker).items():
            container.register(key, value)
    return container


def _marker_values(marker: pytest.Mark) -> Mapping[Hashable, Any]:
    values: dict[Hashable, Any] = {}
    for arg in marker.args:
        if not isinstance(arg, Mapping):
            msg = f"{_REGISTER_MARKER} expects mappings, got {arg!r}"
            raise TypeError(msg)
        values.update(arg)
    values.update(marker.kwargs)
    return values
