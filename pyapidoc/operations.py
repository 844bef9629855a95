"""
Generate OpenAPI documentation with standard responses from a Python class definition

Copyright 2022-2025, Levente Hunyadi
"""

import datetime
import enum
import inspect
import typing
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

from strong_typing.inspection import is_type_enum, is_type_optional, unwrap_optional_type

from .metadata import WebMethod
from .responses import ApiResponses, ResponseDescriptor


class ValidationError(TypeError):
    "Raised when an endpoint class or one of its operations cannot be mapped to an OpenAPI operation."


@enum.unique
class HTTPMethod(enum.Enum):
    "HTTP method used to invoke an endpoint operation."

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


# maps a function name prefix to the HTTP method it implies
_PREFIX_METHODS: dict[str, HTTPMethod] = {
    "create": HTTPMethod.POST,
    "delete": HTTPMethod.DELETE,
    "do": HTTPMethod.POST,
    "get": HTTPMethod.GET,
    "patch": HTTPMethod.PATCH,
    "post": HTTPMethod.POST,
    "put": HTTPMethod.PUT,
    "remove": HTTPMethod.DELETE,
    "set": HTTPMethod.PUT,
    "update": HTTPMethod.PATCH,
}

_SIMPLE_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    str,
    uuid.UUID,
    datetime.date,
    datetime.time,
    datetime.datetime,
)

OperationParameter = tuple[str, type]


@dataclass
class EndpointOperation:
    """
    Type information and metadata associated with an endpoint operation.

    :param defining_class: The most specific class that defines the endpoint operation.
    :param name: The short name of the endpoint operation (function name without the HTTP method prefix).
    :param func_name: The name of the function that implements the operation.
    :param func_ref: The callable that implements the operation.
    :param route: The URL path pattern of the operation, if given explicitly.
    :param path_params: Parameters of the operation signature that are passed in the path component of the URL.
    :param query_params: Parameters of the operation signature that are passed in the query string.
    :param request_param: The parameter that corresponds to the data transmitted in the request body.
    :param response_type: The type of the data transmitted in the response body, or `None` for no payload.
    :param http_method: The HTTP method used to invoke the endpoint such as POST, GET or PUT.
    :param public: True if the operation can be invoked without prior authentication.
    :param deprecated: True if the operation is flagged for removal in a future version.
    :param request_examples: Sample requests that the operation might take.
    :param response_examples: Sample responses that the operation might produce.
    :param api_responses: Standard responses attached to the operation function or its class.
    :param declared_responses: Responses declared specifically for this operation.
    """

    defining_class: type
    name: str
    func_name: str
    func_ref: Callable[..., Any]
    route: Optional[str]
    path_params: list[OperationParameter]
    query_params: list[OperationParameter]
    request_param: Optional[OperationParameter]
    response_type: Optional[type]
    http_method: HTTPMethod
    public: bool
    deprecated: bool = False
    request_examples: Optional[list[Any]] = None
    response_examples: Optional[list[Any]] = None
    api_responses: Optional[ApiResponses] = None
    declared_responses: Optional[list[ResponseDescriptor]] = None

    def get_route(self) -> str:
        if self.route is not None:
            return self.route

        route_parts = ["", self.name]
        for param_name, _ in self.path_params:
            route_parts.append("{" + param_name + "}")
        return "/".join(route_parts)


class _FormatParameterExtractor:
    "A visitor to extract parameters in a format string."

    keys: list[str]

    def __init__(self) -> None:
        self.keys = []

    def __getitem__(self, key: str) -> None:
        self.keys.append(key)
        return None


def _get_route_parameters(route: str) -> list[str]:
    extractor = _FormatParameterExtractor()
    route.format_map(extractor)
    return extractor.keys


def _is_simple_type(typ: type) -> bool:
    if is_type_optional(typ):
        typ = unwrap_optional_type(typ)
    return typ in _SIMPLE_TYPES or is_type_enum(typ)


def _get_endpoint_functions(endpoint: type) -> Iterator[tuple[str, str, str, Callable[..., Any]]]:
    if not inspect.isclass(endpoint):
        raise ValidationError(f"object is not a class type: {endpoint}")

    for func_name, func_ref in inspect.getmembers(endpoint, inspect.isfunction):
        prefix, _, operation_name = func_name.partition("_")
        if prefix not in _PREFIX_METHODS or not operation_name:
            continue
        yield prefix, operation_name, func_name, func_ref


def _get_defining_class(member_fn: str, derived_cls: type) -> type:
    "Find the class in which a member function is first defined in a class inheritance hierarchy."

    for cls in reversed(derived_cls.__mro__):
        if cls is object:
            continue
        if member_fn in cls.__dict__:
            return cls

    raise ValidationError(f"cannot find defining class for {member_fn} in {derived_cls}")


def _get_api_responses(func_ref: Callable[..., Any], defining_class: type, endpoint: type) -> Optional[ApiResponses]:
    "Looks up standard responses, with function-level declarations taking precedence over class-level ones."

    for obj in (func_ref, defining_class, endpoint):
        api_responses = getattr(obj, "__api_responses__", None)
        if api_responses is not None:
            return api_responses
    return None


def get_endpoint_operations(endpoint: type) -> list[EndpointOperation]:
    """
    Extracts a list of member functions in a class eligible for HTTP interface binding.

    These member functions are expected to have a signature like
    ```
    async def get_object(self, uuid: str, /, version: int) -> Object:
        ...
    ```
    where the prefix `get_` translates to an HTTP GET, `object` corresponds to the name of the endpoint operation,
    the positional-only `uuid` is mapped to a route path element in "/object/{uuid}", `version` is passed in the
    query string, and `Object` becomes the response payload type, transmitted as an object serialized to JSON.
    Use `webmethod(route=...)` to name path parameters explicitly.

    If the member function has a composite class type in the argument list, it becomes the request payload type,
    and the caller is expected to provide the data as serialized JSON in an HTTP POST request.

    :param endpoint: A class with member functions that can be mapped to an HTTP endpoint.
    """

    result = []

    for prefix, operation_name, func_name, func_ref in _get_endpoint_functions(endpoint):
        # extract routing information from function metadata
        webmethod: Optional[WebMethod] = getattr(func_ref, "__webmethod__", None)
        if webmethod is None:
            webmethod = WebMethod()

        route = webmethod.route
        route_params = _get_route_parameters(route) if route is not None else None
        http_method = _PREFIX_METHODS[prefix]

        signature = inspect.signature(func_ref)
        try:
            type_hints = typing.get_type_hints(func_ref)
        except NameError as e:
            raise ValidationError(f"unresolved type annotation in function {func_name}: {e}") from e

        path_params: list[OperationParameter] = []
        query_params: list[OperationParameter] = []
        request_param: Optional[OperationParameter] = None

        for param_name, parameter in signature.parameters.items():
            # omit "self" for instance methods
            if param_name == "self" and parameter.annotation is inspect.Parameter.empty:
                continue

            # check if all parameters have explicit type
            if param_name not in type_hints:
                raise ValidationError(
                    f"parameter `{param_name}` in function `{func_name}` has no type annotation"
                )
            param_type = type_hints[param_name]

            if route_params is not None:
                is_path_param = param_name in route_params
            else:
                is_path_param = parameter.kind is inspect.Parameter.POSITIONAL_ONLY

            if is_path_param:
                path_params.append((param_name, param_type))
            elif http_method in (HTTPMethod.GET, HTTPMethod.DELETE) or _is_simple_type(param_type):
                query_params.append((param_name, param_type))
            elif request_param is None:
                request_param = (param_name, param_type)
            else:
                raise ValidationError(
                    f"function `{func_name}` has multiple request body parameters: `{request_param[0]}` and `{param_name}`"
                )

        if route_params is not None:
            missing = set(route_params) - set(name for name, _ in path_params)
            if missing:
                raise ValidationError(
                    f"route `{route}` of function `{func_name}` references unknown parameters: {', '.join(sorted(missing))}"
                )

        response_type: Optional[type] = type_hints.get("return")
        if response_type is type(None):
            response_type = None

        defining_class = _get_defining_class(func_name, endpoint)

        result.append(
            EndpointOperation(
                defining_class=defining_class,
                name=operation_name,
                func_name=func_name,
                func_ref=func_ref,
                route=route,
                path_params=path_params,
                query_params=query_params,
                request_param=request_param,
                response_type=response_type,
                http_method=http_method,
                public=webmethod.public,
                deprecated=webmethod.deprecated,
                request_examples=webmethod.request_examples,
                response_examples=webmethod.response_examples,
                api_responses=_get_api_responses(func_ref, defining_class, endpoint),
                declared_responses=webmethod.responses,
            )
        )

    if not result:
        raise ValidationError(f"no eligible endpoint operations in class: {endpoint.__name__}")

    return result
