"""Shared pytest fixtures for wirebox tests."""

from __future__ import annotations

import pytest

from tests.helpers import LoaderSpy
from wirebox.container import Container


@pytest.fixture()
def container() -> Container:
    """Empty container using the real module loader."""
    return Container()


@pytest.fixture()
def module_loader() -> LoaderSpy:
    """Recording module loader."""
    return LoaderSpy()


@pytest.fixture()
def container_with_loader(module_loader: LoaderSpy) -> Container:
    """Container whose module loader is a recording spy rooted at /srv/app."""
    return Container(module_loader=module_loader, working_directory="/srv/app")
