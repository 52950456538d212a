from __future__ import annotations

import functools

import pytest

from wirebox.arguments import (
    InferredParameter,
    count_required_positionals,
    infer_parameter_names,
    infer_parameters,
)


class ServiceWithTrickyMethods:
    def deconstructor(self, wrong):
        return wrong

    def __init__(self, right, correct) -> None:
        self.value = (right, correct)

    def reconstructor(self, incorrect):
        return incorrect

    def subconstructor(self, wrong, bad):
        return (wrong, bad)

    @classmethod
    def build(cls, config):
        return config

    @staticmethod
    def helper(first, second):
        return first, second


class ClassWithoutConstructor:
    def method_name(self, wrong):
        return wrong


class CallableObject:
    def __call__(self, request, response):
        return request, response


@pytest.mark.parametrize("value", [123, "text", None, [1, 2], {"a": 1}])
def test_non_callables_yield_no_names(value: object) -> None:
    assert infer_parameter_names(value) == []


def test_function_without_parameters() -> None:
    def build():
        return True

    assert infer_parameter_names(build) == []


def test_function_with_three_parameters() -> None:
    def build(dk, lmn, moose):
        return dk + lmn + moose

    assert infer_parameter_names(build) == ["dk", "lmn", "moose"]


def test_lambda_parameters() -> None:
    assert infer_parameter_names(lambda test: test) == ["test"]
    assert infer_parameter_names(lambda x, y: (x, y)) == ["x", "y"]


def test_lone_underscore_means_no_parameters() -> None:
    assert infer_parameter_names(lambda _: 1) == []


def test_underscore_among_other_parameters_is_kept() -> None:
    assert infer_parameter_names(lambda _, value: value) == ["_", "value"]


def test_class_reports_constructor_parameters() -> None:
    assert infer_parameter_names(ServiceWithTrickyMethods) == ["right", "correct"]


def test_class_without_constructor_has_no_parameters() -> None:
    assert infer_parameter_names(ClassWithoutConstructor) == []


def test_bound_methods_skip_receiver() -> None:
    service = ServiceWithTrickyMethods(1, 2)

    assert infer_parameter_names(service.reconstructor) == ["incorrect"]
    assert infer_parameter_names(service.subconstructor) == ["wrong", "bad"]
    assert infer_parameter_names(ServiceWithTrickyMethods.build) == ["config"]
    assert infer_parameter_names(ServiceWithTrickyMethods.helper) == ["first", "second"]


def test_callable_instance_reports_call_parameters() -> None:
    assert infer_parameter_names(CallableObject()) == ["request", "response"]


def test_partial_hides_bound_arguments() -> None:
    def connect(host, port, timeout):
        return host, port, timeout

    assert infer_parameter_names(functools.partial(connect, "localhost")) == ["port", "timeout"]


def test_variadic_and_keyword_only_parameters_are_skipped() -> None:
    def handler(first, /, second, *args, flag=False, **kwargs):
        return first, second, args, flag, kwargs

    assert infer_parameter_names(handler) == ["first", "second"]


def test_unusual_layout_does_not_matter() -> None:
    def handler(
        mouse
        ,
        cat,
    ):
        return mouse, cat

    assert infer_parameter_names(handler) == ["mouse", "cat"]


def test_nested_functions_in_body_are_ignored() -> None:
    def outer(config):
        def inner(thing):
            return config, thing

        return {"x": inner, "y": lambda other: other}

    assert infer_parameter_names(outer) == ["config"]


def test_callable_without_introspectable_signature_yields_no_names() -> None:
    def broken(first, second):
        return first, second

    broken.__signature__ = "not a signature"  # type: ignore[attr-defined]

    assert infer_parameter_names(broken) == []


def test_infer_parameters_reports_defaults() -> None:
    def build(repo, retries=3):
        return repo, retries

    assert infer_parameters(build) == [
        InferredParameter(name="repo", has_default=False),
        InferredParameter(name="retries", has_default=True),
    ]


def test_count_required_positionals() -> None:
    def build(first, second, third=None):
        return first, second, third

    assert count_required_positionals(build, 0) == 2
    assert count_required_positionals(build, 1) == 1
    assert count_required_positionals(build, 2) == 0
    assert count_required_positionals(build, 5) == 0
    assert count_required_positionals("not callable", 0) == 0
