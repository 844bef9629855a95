"""
Generate OpenAPI documentation with standard responses from a Python class definition

Copyright 2022-2025, Levente Hunyadi
"""

import json
from typing import TextIO, cast

from strong_typing.serialization import object_to_json

from .generator import Generator
from .options import Options
from .specification import Document, JsonType


class Specification:
    document: Document

    def __init__(self, endpoint: type, options: Options):
        generator = Generator(endpoint, options)
        self.document = generator.generate()

    def get_json(self) -> JsonType:
        """
        Returns the OpenAPI specification as a Python data type (e.g. `dict` for an object, `list` for an array).

        The result can be serialized to a JSON string with `json.dump` or `json.dumps`.
        """

        json_doc = cast(dict[str, JsonType], object_to_json(self.document))

        # rename vendor-specific properties
        tags = json_doc.get("tags")
        if tags and isinstance(tags, list):
            for tag in tags:
                if not isinstance(tag, dict):
                    continue

                display_name = tag.pop("displayName", None)
                if display_name:
                    tag["x-displayName"] = display_name

        return json_doc

    def get_json_string(self, pretty_print: bool = False) -> str:
        """
        Returns the OpenAPI specification as a JSON string.

        :param pretty_print: Whether to use line indents to beautify the output.
        """

        json_doc = self.get_json()
        if pretty_print:
            return json.dumps(json_doc, check_circular=False, ensure_ascii=False, indent=4)
        else:
            return json.dumps(json_doc, check_circular=False, ensure_ascii=False, separators=(",", ":"))

    def write_json(self, f: TextIO, pretty_print: bool = False) -> None:
        """
        Writes the OpenAPI specification to a file as a JSON string.

        :param pretty_print: Whether to use line indents to beautify the output.
        """

        json_doc = self.get_json()
        if pretty_print:
            json.dump(json_doc, f, check_circular=False, ensure_ascii=False, indent=4)
        else:
            json.dump(json_doc, f, check_circular=False, ensure_ascii=False, separators=(",", ":"))

    def get_yaml_string(self) -> str:
        "Returns the OpenAPI specification as a YAML string. Requires the package PyYAML."

        import yaml

        return yaml.dump(self.get_json(), allow_unicode=True, sort_keys=False)
