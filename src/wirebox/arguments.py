from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from inspect import Parameter
from typing import Any

_POSITIONAL_KINDS = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
_UNUSED_PARAMETER_NAME = "_"


@dataclass(frozen=True, slots=True)
class InferredParameter:
    """Positional parameter of an injectable callable."""

    name: str
    has_default: bool


@dataclass(slots=True)
class ParameterNamesExtractor:
    """Extract injectable parameter names from user-supplied callables.

    Names are plain strings later used as container keys; they are never
    checked against registrations here.
    """

    def extract(self, callable_obj: object) -> list[InferredParameter]:
        """Return positional parameters of ``callable_obj`` in declaration order.

        Classes report their constructor parameters without ``self``; bound
        methods report theirs without the bound receiver. Keyword-only,
        ``*args`` and ``**kwargs`` parameters are skipped. A lone ``_``
        parameter means "intentionally unused" and yields no parameters.

        Args:
            callable_obj: Function, lambda, class, bound method, partial or
                callable instance to inspect. Any other object yields ``[]``.

        """
        parameters = [
            InferredParameter(
                name=parameter.name,
                has_default=parameter.default is not Parameter.empty,
            )
            for parameter in self._positional_parameters(callable_obj)
        ]
        if len(parameters) == 1 and parameters[0].name == _UNUSED_PARAMETER_NAME:
            return []
        return parameters

    def count_missing_required(self, callable_obj: object, supplied: int) -> int:
        """Count required positional parameters not covered by ``supplied`` arguments.

        Args:
            callable_obj: Callable the arguments will be passed to.
            supplied: Number of positional arguments already available.

        """
        missing = 0
        for parameter in self._positional_parameters(callable_obj)[supplied:]:
            if parameter.default is not Parameter.empty:
                break
            missing += 1
        return missing

    def _positional_parameters(self, callable_obj: object) -> tuple[Parameter, ...]:
        if not callable(callable_obj):
            return ()

        signature = self._signature(callable_obj)
        if signature is None:
            return ()

        return tuple(
            parameter
            for parameter in signature.parameters.values()
            if parameter.kind in _POSITIONAL_KINDS
        )

    def _signature(self, callable_obj: Callable[..., Any]) -> inspect.Signature | None:
        try:
            return inspect.signature(callable_obj)
        except (TypeError, ValueError):
            return None


_EXTRACTOR = ParameterNamesExtractor()


def infer_parameters(callable_obj: object) -> list[InferredParameter]:
    """Infer injectable positional parameters of ``callable_obj``. Never raises."""
    return _EXTRACTOR.extract(callable_obj)


def infer_parameter_names(callable_obj: object) -> list[str]:
    """Infer dependency keys for ``callable_obj`` from its declared parameter names.

    Never raises: non-callables and callables without an introspectable
    signature produce an empty list, meaning "no injected dependencies".

    Examples:
        .. code-block:: python

            def connect(host, port): ...

            infer_parameter_names(connect)  # ["host", "port"]

    """
    return [parameter.name for parameter in _EXTRACTOR.extract(callable_obj)]


def count_required_positionals(callable_obj: object, supplied: int) -> int:
    """Return how many required positional parameters ``supplied`` arguments leave unfilled."""
    return _EXTRACTOR.count_missing_required(callable_obj, supplied)
