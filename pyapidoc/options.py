"""
Generate OpenAPI documentation with standard responses from a Python class definition

Copyright 2022-2025, Levente Hunyadi
"""

import dataclasses
from dataclasses import dataclass
from http import HTTPStatus
from typing import Callable, Optional, Union

from .responses import ApiResponses as ApiResponses
from .specification import Info, SecurityScheme, Server
from .specification import SecuritySchemeAPI as SecuritySchemeAPI
from .specification import SecuritySchemeHTTP as SecuritySchemeHTTP
from .specification import SecuritySchemeOpenIDConnect as SecuritySchemeOpenIDConnect

HTTPStatusCode = Union[HTTPStatus, int, str]


@dataclass
class Options:
    """
    :param server: Base URL for the API endpoint.
    :param info: Meta-information for the endpoint specification.
    :param version: OpenAPI specification version as a tuple of major, minor, revision.
    :param default_security_scheme: Security scheme to apply to endpoints, unless overridden on a per-endpoint basis.
    :param use_examples: Whether to emit request and response examples for operations.
    :param success_responses: Associates operation response types with HTTP status codes.
    :param error_responses: Associates error response types with HTTP status codes.
    :param property_description_fun: Custom transformation function to apply to class property documentation strings.
    :param default_responses: Standard responses to merge into every operation that declares none of its own.
    """

    server: Server
    info: Info
    version: tuple[int, int, int] = (3, 1, 0)
    default_security_scheme: Optional[SecurityScheme] = None
    use_examples: bool = True
    success_responses: dict[type, HTTPStatusCode] = dataclasses.field(default_factory=dict)
    error_responses: dict[type, HTTPStatusCode] = dataclasses.field(default_factory=dict)
    property_description_fun: Optional[Callable[[type, str, str], str]] = None
    default_responses: Optional[ApiResponses] = None

    def get_version_string(self) -> str:
        "OpenAPI specification version in the format major.minor.revision."

        return ".".join(str(part) for part in self.version)
