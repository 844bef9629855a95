import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Optional, Union

from strong_typing.docstring import parse_type
from strong_typing.inspection import (
    is_generic_list,
    is_type_optional,
    is_type_union,
    unwrap_generic_list,
    unwrap_optional_type,
    unwrap_union_types,
)
from strong_typing.name import python_type_to_name
from strong_typing.schema import (
    JsonSchemaGenerator,
    Schema,
    SchemaOptions,
    get_schema_identifier,
)
from strong_typing.serialization import object_to_json

from .operations import EndpointOperation, HTTPMethod, get_endpoint_operations
from .options import HTTPStatusCode, Options
from .responses import ApiResponses, ResponseDescriptor
from .specification import (
    Components,
    Document,
    Example,
    ExampleRef,
    MediaType,
    Operation,
    Parameter,
    ParameterLocation,
    PathItem,
    RequestBody,
    Response,
    ResponseRef,
    SchemaRef,
    Tag,
)

logger = logging.getLogger(__name__)

SchemaOrRef = Union[Schema, SchemaRef]

# schema for a response body whose structure is not documented
GENERIC_OBJECT_SCHEMA: Schema = {"type": "object"}


def status_code_to_str(status_code: HTTPStatusCode) -> str:
    "Converts an HTTP status code (e.g. `HTTPStatus.OK`, `200` or `'200'`) to the string key used in OpenAPI."

    if isinstance(status_code, int):
        return str(int(status_code))
    return str(status_code)


def status_code_to_name(status_code: HTTPStatusCode) -> str:
    "Converts an HTTP status code to an identifier such as `BadRequest`, suitable as a component name."

    phrase = HTTPStatus(int(status_code)).phrase
    return "".join(word.capitalize() for word in phrase.replace("-", " ").split())


class SchemaBuilder:
    schema_generator: JsonSchemaGenerator
    schemas: dict[str, Schema]

    def __init__(self, schema_generator: JsonSchemaGenerator) -> None:
        self.schema_generator = schema_generator
        self.schemas = {}

    def classdef_to_schema(self, typ: type) -> Schema:
        """
        Converts a type to a JSON schema.
        For nested types found in the type hierarchy, adds the type to the schema registry in the OpenAPI specification section `components`.
        """

        type_schema, type_definitions = self.schema_generator.classdef_to_schema(typ)

        # append schema to list of known schemas, to be used in OpenAPI's Components Object section
        for ref, schema in type_definitions.items():
            self._add_ref(ref, schema)

        return type_schema

    def classdef_to_ref(self, typ: type) -> SchemaOrRef:
        """
        Converts a type to a JSON schema, and if possible, returns a schema reference.
        For composite types (such as classes), adds the type to the schema registry in the OpenAPI specification section `components`.
        """

        type_schema = self.classdef_to_schema(typ)
        if typ is str or typ is int or typ is float:
            # represent simple types as themselves
            return type_schema

        type_name = get_schema_identifier(typ)
        if type_name is not None:
            return self._build_ref(type_name, type_schema)

        try:
            type_name = python_type_to_name(typ)
            return self._build_ref(type_name, type_schema)
        except TypeError:
            pass

        return type_schema

    def _build_ref(self, type_name: str, type_schema: Schema) -> SchemaRef:
        self._add_ref(type_name, type_schema)
        return SchemaRef(type_name)

    def _add_ref(self, type_name: str, type_schema: Schema) -> None:
        if type_name not in self.schemas:
            self.schemas[type_name] = type_schema


class ContentBuilder:
    schema_builder: SchemaBuilder
    media_type: Optional[str]

    def __init__(self, schema_builder: SchemaBuilder, media_type: Optional[str] = None) -> None:
        """
        :param schema_builder: Registry of schemas that content types are added to.
        :param media_type: Content type to declare, overriding the one inferred from the payload type.
        """

        self.schema_builder = schema_builder
        self.media_type = media_type

    def build_content(self, payload_type: type, examples: Optional[list[Any]] = None) -> dict[str, MediaType]:
        "Creates the content subtree for a request or response."

        if self.media_type is not None:
            return {self.media_type: self.build_media_type(payload_type, examples)}

        if is_generic_list(payload_type):
            media_type = "application/jsonl"
            item_type = unwrap_generic_list(payload_type)
        else:
            media_type = "application/json"
            item_type = payload_type

        return {media_type: self.build_media_type(item_type, examples)}

    def build_media_type(self, item_type: type, examples: Optional[list[Any]] = None) -> MediaType:
        schema = self.schema_builder.classdef_to_ref(item_type)
        return MediaType(
            schema=schema,
            examples=self._build_examples(examples),
        )

    def _build_examples(self, examples: Optional[list[Any]] = None) -> Optional[dict[str, Union[Example, ExampleRef]]]:
        if examples is None:
            return None

        return {str(example): Example(value=object_to_json(example)) for example in examples}


@dataclass
class ResponseOptions:
    """
    Configuration options for building a response for an operation.

    :param type_descriptions: Maps each response type to a textual description (if available).
    :param examples: A list of response examples.
    :param status_catalog: Maps each response type to an HTTP status code.
    :param default_status_code: HTTP status code assigned to responses that have no mapping.
    """

    type_descriptions: dict[type, str]
    examples: Optional[list[Any]]
    status_catalog: dict[type, HTTPStatusCode]
    default_status_code: HTTPStatusCode


class ResponseBuilder:
    content_builder: ContentBuilder

    def __init__(self, content_builder: ContentBuilder) -> None:
        self.content_builder = content_builder

    def _get_status_responses(self, options: ResponseOptions) -> dict[str, list[type]]:
        status_responses: dict[str, list[type]] = {}

        for response_type in options.type_descriptions.keys():
            status_code = status_code_to_str(options.status_catalog.get(response_type, options.default_status_code))
            if status_code not in status_responses:
                status_responses[status_code] = []
            status_responses[status_code].append(response_type)

        return status_responses

    def build_response(self, options: ResponseOptions) -> dict[str, Union[Response, ResponseRef]]:
        """
        Groups responses that have the same status code.
        """

        responses: dict[str, Union[Response, ResponseRef]] = {}
        status_responses = self._get_status_responses(options)
        for status_code, response_type_list in status_responses.items():
            response_type_tuple = tuple(response_type_list)
            if len(response_type_tuple) > 1:
                composite_response_type: type = Union[response_type_tuple]  # type: ignore
            else:
                (response_type,) = response_type_tuple
                composite_response_type = response_type

            description = " **OR** ".join(
                filter(None, (options.type_descriptions[response_type] for response_type in response_type_tuple))
            )

            responses[status_code] = Response(
                description=description,
                content=self.content_builder.build_content(
                    composite_response_type, options.examples if options.examples else None
                ),
            )

        return responses


class Generator:
    endpoint: type
    options: Options
    schema_builder: SchemaBuilder
    responses: dict[str, Response]

    def __init__(self, endpoint: type, options: Options) -> None:
        self.endpoint = endpoint
        self.options = options
        schema_generator = JsonSchemaGenerator(
            SchemaOptions(
                definitions_path="#/components/schemas/",
                property_description_fun=options.property_description_fun,
            )
        )
        self.schema_builder = SchemaBuilder(schema_generator)
        self.responses = {}

    def _get_api_responses(self, op: EndpointOperation) -> Optional[ApiResponses]:
        if op.api_responses is not None:
            return op.api_responses
        return self.options.default_responses

    def _build_descriptor_response(self, descriptor: ResponseDescriptor) -> Response:
        "Creates a response subtree from a response descriptor."

        if descriptor.payload_type is not None:
            schema: SchemaOrRef = self.schema_builder.classdef_to_ref(descriptor.payload_type)
        else:
            schema = GENERIC_OBJECT_SCHEMA

        return Response(
            description=descriptor.description,
            content={
                descriptor.media_type: MediaType(
                    schema=schema,
                    example=descriptor.get_example(),
                )
            },
        )

    def _build_standard_response(self, descriptor: ResponseDescriptor) -> Union[Response, ResponseRef]:
        """
        Creates a response for an entry in the standard set.

        Error responses are identical across operations, and are registered once in the OpenAPI specification section
        `components` to be referenced from operations.
        """

        if descriptor.status_code < 400:
            return self._build_descriptor_response(descriptor)

        name = status_code_to_name(descriptor.status_code)
        if name not in self.responses:
            self.responses[name] = self._build_descriptor_response(descriptor)
        return ResponseRef(name)

    def _merge_responses(
        self,
        op: EndpointOperation,
        standard: tuple[ResponseDescriptor, ...],
        derived: dict[str, Union[Response, ResponseRef]],
        declared: dict[str, Union[Response, ResponseRef]],
    ) -> dict[str, Union[Response, ResponseRef]]:
        """
        Merges responses with the same status code.

        Responses declared explicitly for the operation take precedence over responses derived from the function
        signature, which in turn take precedence over the standard set. Status codes of the standard set come first,
        in their canonical order, followed by any remaining status codes in the order they were produced.
        """

        merged: dict[str, Union[Response, ResponseRef]] = {}

        for descriptor in standard:
            status_code = status_code_to_str(descriptor.status_code)
            declared_response = declared.pop(status_code, None)
            derived_response = derived.pop(status_code, None)
            if declared_response is not None:
                logger.debug("%s: standard response %s replaced by declared response", op.func_name, status_code)
                merged[status_code] = declared_response
            elif derived_response is not None:
                logger.debug("%s: standard response %s replaced by operation signature", op.func_name, status_code)
                merged[status_code] = derived_response
            else:
                merged[status_code] = self._build_standard_response(descriptor)

        for status_code, response in derived.items():
            merged[status_code] = declared.pop(status_code, response)
        merged.update(declared)

        return merged

    def _build_operation(self, op: EndpointOperation) -> Operation:
        doc_string = parse_type(op.func_ref)
        doc_params = dict((param.name, param.description) for param in doc_string.params.values())

        api_responses = self._get_api_responses(op)
        if api_responses is not None:
            logger.debug("%s: standard responses apply with media type %s", op.func_name, api_responses.media_type)

        # parameters passed in URL component path
        path_parameters = [
            Parameter(
                name=param_name,
                in_=ParameterLocation.Path,
                description=doc_params.get(param_name),
                required=True,
                schema=self.schema_builder.classdef_to_ref(param_type),
            )
            for param_name, param_type in op.path_params
        ]

        # parameters passed in URL component query string
        query_parameters = []
        for param_name, param_type in op.query_params:
            if is_type_optional(param_type):
                inner_type = unwrap_optional_type(param_type)
                required = False
            else:
                inner_type = param_type
                required = True

            query_parameter = Parameter(
                name=param_name,
                in_=ParameterLocation.Query,
                description=doc_params.get(param_name),
                required=required,
                schema=self.schema_builder.classdef_to_ref(inner_type),
            )
            query_parameters.append(query_parameter)

        # parameters passed anywhere
        parameters = path_parameters + query_parameters

        request_examples = op.request_examples if self.options.use_examples else None
        response_examples = (op.response_examples or []) if self.options.use_examples else []

        # data passed in payload
        if op.request_param:
            builder = ContentBuilder(self.schema_builder)
            request_name, request_type = op.request_param
            requestBody = RequestBody(
                content={"application/json": builder.build_media_type(request_type, request_examples)},
                description=doc_params.get(request_name),
                required=True,
            )
        else:
            requestBody = None

        # success response types
        if api_responses is not None:
            default_description = api_responses.success.description
            success_media_type: Optional[str] = api_responses.success.media_type
        else:
            default_description = "OK"
            success_media_type = None

        responses: dict[str, Union[Response, ResponseRef]]
        if op.response_type is None:
            # operations without payload are covered by the generic success response of the standard set
            if api_responses is None:
                description = doc_string.returns.description if doc_string.returns else default_description
                responses = {"200": Response(description=description)}
            else:
                responses = {}
        else:
            if doc_string.returns is None and is_type_union(op.response_type):
                # split union of return types into a list of response types
                success_type_descriptions = {
                    item: parse_type(item).short_description or default_description
                    for item in unwrap_union_types(op.response_type)
                }
            else:
                # use return type as a single response type
                success_type_descriptions = {
                    op.response_type: (doc_string.returns.description if doc_string.returns else default_description)
                }

            success_examples = [example for example in response_examples if not isinstance(example, Exception)]

            content_builder = ContentBuilder(self.schema_builder, media_type=success_media_type)
            response_builder = ResponseBuilder(content_builder)
            response_options = ResponseOptions(
                success_type_descriptions,
                success_examples,
                self.options.success_responses,
                "200",
            )
            responses = response_builder.build_response(response_options)

        # failure response types
        if doc_string.raises:
            exception_types: dict[type, str] = {
                item.raise_type: item.description for item in doc_string.raises.values()
            }
            exception_examples = [example for example in response_examples if isinstance(example, Exception)]

            content_builder = ContentBuilder(self.schema_builder)
            response_builder = ResponseBuilder(content_builder)
            response_options = ResponseOptions(
                exception_types,
                exception_examples,
                self.options.error_responses,
                "500",
            )
            responses.update(response_builder.build_response(response_options))

        # responses declared explicitly for the operation
        declared_responses: dict[str, Union[Response, ResponseRef]] = {}
        for descriptor in op.declared_responses or []:
            declared_responses[status_code_to_str(descriptor.status_code)] = self._build_descriptor_response(descriptor)

        standard = api_responses.descriptors() if api_responses is not None else ()
        responses = self._merge_responses(op, standard, responses, declared_responses)

        return Operation(
            tags=[op.defining_class.__name__],
            summary=doc_string.short_description,
            description=doc_string.long_description,
            operationId=op.func_name,
            parameters=parameters,
            requestBody=requestBody,
            responses=responses,
            security=[] if op.public else None,
            deprecated=True if op.deprecated else None,
        )

    def generate(self) -> Document:
        paths: dict[str, PathItem] = {}
        endpoint_classes: dict[type, None] = {}
        for op in get_endpoint_operations(self.endpoint):
            endpoint_classes[op.defining_class] = None

            operation = self._build_operation(op)

            if op.http_method is HTTPMethod.GET:
                pathItem = PathItem(get=operation)
            elif op.http_method is HTTPMethod.PUT:
                pathItem = PathItem(put=operation)
            elif op.http_method is HTTPMethod.POST:
                pathItem = PathItem(post=operation)
            elif op.http_method is HTTPMethod.DELETE:
                pathItem = PathItem(delete=operation)
            elif op.http_method is HTTPMethod.PATCH:
                pathItem = PathItem(patch=operation)
            else:
                raise NotImplementedError(f"unknown HTTP method: {op.http_method}")

            route = op.get_route()
            if route in paths:
                paths[route].update(pathItem)
            else:
                paths[route] = pathItem

        operation_tags: list[Tag] = []
        for cls in endpoint_classes:
            doc_string = parse_type(cls)
            operation_tags.append(
                Tag(
                    name=cls.__name__,
                    description=doc_string.long_description,
                    displayName=doc_string.short_description,
                )
            )

        if self.options.default_security_scheme:
            securitySchemes = {"Default": self.options.default_security_scheme}
            security: Optional[list[dict[str, list[str]]]] = [{"Default": []}]
        else:
            securitySchemes = None
            security = None

        logger.debug("generated %d path(s) for endpoint %s", len(paths), self.endpoint.__name__)

        return Document(
            openapi=self.options.get_version_string(),
            info=self.options.info,
            servers=[self.options.server],
            paths=paths,
            components=Components(
                schemas=self.schema_builder.schemas or None,
                responses=self.responses or None,
                securitySchemes=securitySchemes,
            ),
            security=security,
            tags=operation_tags,
        )
