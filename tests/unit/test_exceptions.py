from __future__ import annotations

import pytest

from wirebox.exceptions import (
    WireboxConcurrentAccessError,
    WireboxError,
    WireboxInvalidKeyError,
    WireboxModuleLoadError,
    WireboxNotCallableError,
)


@pytest.mark.parametrize(
    ("error", "builtin"),
    [
        (WireboxInvalidKeyError("key"), KeyError),
        (WireboxNotCallableError("key"), TypeError),
        (WireboxModuleLoadError("mod", ImportError("boom")), ImportError),
        (WireboxConcurrentAccessError("key"), RuntimeError),
    ],
)
def test_errors_share_base_and_builtin(error: WireboxError, builtin: type[Exception]) -> None:
    assert isinstance(error, WireboxError)
    assert isinstance(error, builtin)


def test_invalid_key_message_uses_plain_key() -> None:
    assert str(WireboxInvalidKeyError("missing-key")) == "Invalid key: missing-key"
    assert str(WireboxInvalidKeyError(7)) == "Invalid key: 7"


def test_module_load_error_message() -> None:
    error = WireboxModuleLoadError("/srv/app/config.py", ImportError("Can not find module"))

    assert "/srv/app/config.py" in str(error)
    assert "Can not find module" in str(error)
    assert error.specifier == "/srv/app/config.py"


def test_concurrent_access_error_names_key() -> None:
    error = WireboxConcurrentAccessError("db")

    assert error.key == "db"
    assert "db" in str(error)
    assert "asynchronous resolution is pending" in str(error)
