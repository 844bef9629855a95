"""
Generate OpenAPI documentation with standard responses from a Python class definition

Copyright 2021-2026, Levente Hunyadi
"""

import inspect
from typing import Any, Callable, TypeVar

from .metadata import WebMethod
from .options import *  # noqa: F403
from .responses import ApiResponses, ResponseDescriptor
from .utility import Specification as Specification

F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T")


def webmethod(
    route: str | None = None,
    public: bool = False,
    deprecated: bool = False,
    request_example: Any | None = None,
    response_example: Any | None = None,
    request_examples: list[Any] | None = None,
    response_examples: list[Any] | None = None,
    responses: list[ResponseDescriptor] | None = None,
) -> Callable[[F], F]:
    """
    Decorator that supplies additional metadata to an endpoint operation function.

    :param route: The URL path pattern associated with this operation which path parameters are substituted into.
    :param public: True if the operation can be invoked without prior authentication.
    :param deprecated: True if the operation is flagged for removal in a future version.
    :param request_example: A sample request that the operation might take.
    :param response_example: A sample response that the operation might produce.
    :param request_examples: Sample requests that the operation might take. Pass a list of objects, not JSON.
    :param response_examples: Sample responses that the operation might produce. Pass a list of objects, not JSON.
    :param responses: Responses specific to this operation, at most one per status code. These take precedence over
        the standard set.
    """

    if request_example is not None and request_examples is not None:
        raise ValueError("arguments `request_example` and `request_examples` are exclusive")
    if response_example is not None and response_examples is not None:
        raise ValueError("arguments `response_example` and `response_examples` are exclusive")

    if request_example is not None:
        request_examples = [request_example]
    if response_example is not None:
        response_examples = [response_example]

    if responses:
        status_codes = [int(descriptor.status_code) for descriptor in responses]
        duplicates = sorted(set(code for code in status_codes if status_codes.count(code) > 1))
        if duplicates:
            raise ValueError(f"duplicate status codes in argument `responses`: {duplicates}")

    def wrap(cls: F) -> F:
        cls.__webmethod__ = WebMethod(  # type: ignore[attr-defined]
            route=route,
            public=public or False,
            deprecated=deprecated or False,
            request_examples=request_examples,
            response_examples=response_examples,
            responses=list(responses) if responses else None,
        )
        return cls

    return wrap


def api_responses(media_type: str = "application/json") -> Callable[[T], T]:
    """
    Decorator that attaches the standard set of responses (200, 400, 401, 403 and 500) to an endpoint class or an
    endpoint operation function.

    When applied at both levels, the function-level declaration takes precedence.

    :param media_type: Content type of the successful (200) response.
    """

    if not isinstance(media_type, str) or not media_type:
        raise ValueError(f"expected a non-empty media type string, got: {media_type!r}")

    def wrap(obj: T) -> T:
        if not (inspect.isclass(obj) or inspect.isfunction(obj)):
            raise TypeError(f"standard responses can only be attached to a class or a function: {obj!r}")

        obj.__api_responses__ = ApiResponses(media_type=media_type)  # type: ignore[attr-defined]
        return obj

    return wrap
