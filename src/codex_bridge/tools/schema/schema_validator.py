"""Turn generated argument models into the JSON schemas advertised through ``tools/list``."""

from typing import Any, Dict, Set, Type

import jsonref  # type: ignore
from pydantic import BaseModel

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

_METADATA_KEYS = ("$defs", "$schema", "$id", "title", "definitions")


class SchemaValidator:
    """
    Helper class for building and sanitizing the input schemas of MCP tools.
    """

    @classmethod
    def input_schema_for(cls, args_model: Type[BaseModel]) -> Dict[str, Any]:
        """Build a self-contained input schema for a tool's argument model.

        Args:
            args_model: The Pydantic model generated from the tool signature.

        Returns:
            A JSON schema with all references inlined and metadata removed.

        Raises:
            ToolValidationError: If the model contains recursive references.
        """
        raw_schema = args_model.model_json_schema()
        cls.assert_no_recursive_refs(raw_schema)
        # proxies=False yields plain dicts instead of JsonRef objects
        resolved = jsonref.replace_refs(raw_schema, proxies=False)
        return cls.sanitize_schema(resolved)

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """
        Raises ToolValidationError if following local ``$ref`` pointers leads back to a visited definition.

        Args:
            schema: The JSON schema to check.
        """
        defs = schema.get("$defs", {}) or schema.get("definitions", {})

        def walk(node: Any, seen: Set[str]) -> None:
            if isinstance(node, list):
                for item in node:
                    walk(item, seen)
                return
            if not isinstance(node, dict):
                return

            ref = node.get("$ref")
            if ref is None:
                for value in node.values():
                    walk(value, seen)
                return

            if ref in seen:
                msg = f"Recursive structure detected: {ref}. Tool arguments must be flat or acyclic."
                logger.error(msg)
                raise ToolValidationError(msg)

            def_name = ref.rsplit("/", 1)[-1]
            if ref.startswith("#") and def_name in defs:
                walk(defs[def_name], seen | {ref})

        walk(schema, set())

    @staticmethod
    def sanitize_schema(schema: Any) -> Any:
        """
        Cleans up a generated schema for MCP clients.

        Removes $defs, $schema, $id and title, collapses ``Optional[X]`` (anyOf with null)
        into ``X``, and closes objects with ``additionalProperties: false``.

        Args:
            schema: The JSON schema to sanitize.

        Returns:
            The sanitized schema.
        """
        if not isinstance(schema, dict):
            return schema

        cleaned = {key: value for key, value in schema.items() if key not in _METADATA_KEYS}

        variants = cleaned.get("anyOf")
        if isinstance(variants, list):
            non_null = [v for v in variants if not (isinstance(v, dict) and v.get("type") == "null")]
            if len(non_null) == 1 and isinstance(non_null[0], dict):
                collapsed = dict(non_null[0])
                if "description" in cleaned:
                    collapsed["description"] = cleaned["description"]
                return SchemaValidator.sanitize_schema(collapsed)

        if cleaned.get("type") == "object":
            cleaned.setdefault("additionalProperties", False)

        for key, value in cleaned.items():
            if key == "properties" and isinstance(value, dict):
                cleaned[key] = {name: SchemaValidator.sanitize_schema(prop) for name, prop in value.items()}
            elif isinstance(value, dict):
                cleaned[key] = SchemaValidator.sanitize_schema(value)
            elif isinstance(value, list):
                cleaned[key] = [SchemaValidator.sanitize_schema(item) for item in value]

        return cleaned
