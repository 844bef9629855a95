"""
Generate OpenAPI documentation with standard responses from a Python class definition

Copyright 2022-2025, Levente Hunyadi
"""

from dataclasses import dataclass
from typing import Any, Optional

from .responses import ResponseDescriptor


@dataclass
class WebMethod:
    """
    Additional metadata tied to an endpoint operation function.

    :param route: The URL path pattern associated with this operation which path parameters are substituted into.
    :param public: True if the operation can be invoked without prior authentication.
    :param deprecated: True if the operation is flagged for removal in a future version.
    :param request_examples: Sample requests that the operation might take. Pass a list of objects, not JSON.
    :param response_examples: Sample responses that the operation might produce. Pass a list of objects, not JSON.
    :param responses: Responses declared in addition to (or replacing) the standard set, at most one per status code.
    """

    route: Optional[str] = None
    public: bool = False
    deprecated: bool = False
    request_examples: Optional[list[Any]] = None
    response_examples: Optional[list[Any]] = None
    responses: Optional[list[ResponseDescriptor]] = None
