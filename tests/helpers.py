from __future__ import annotations


class LoaderSpy:
    """Module loader that records specifiers and returns a marker string."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.error: Exception | None = None

    def __call__(self, specifier: str) -> str:
        self.calls.append(specifier)
        if self.error is not None:
            raise self.error
        return f"Module: {specifier}"
