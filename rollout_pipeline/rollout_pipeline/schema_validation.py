# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Schema resolution and structural validation of raw pipeline documents.

A raw document is the loosely-typed mapping produced by the YAML parser.
The ``$schema`` field selects the schema it must conform to; documents
without one are checked against the default schema of the registry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from jsonschema.exceptions import ValidationError as JsonSchemaValidationError
from jsonschema.protocols import Validator

from .exceptions import SchemaComplianceError, UnsupportedSchemaError
from .parsers.yaml_parser import Content, SourceMap, yaml_parser
from .schema_registry import SchemaRegistry, default_registry
from .utils.source_location import SourceLocation, format_source, lookup_source

logger = logging.getLogger(__name__)

SCHEMA_REF_FIELD = "$schema"

JsonPointer = str


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    yaml_path: Optional[JsonPointer] = None
    location: Optional[SourceLocation] = None


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _to_pointer(path: Sequence[Any]) -> JsonPointer:
    return "".join(f"/{_jp_escape(str(p))}" for p in path)


def get_schema_for_pipeline(
    document: Mapping[str, Any], registry: Optional[SchemaRegistry] = None
) -> Tuple[Validator, str]:
    """Select the compiled schema a raw pipeline document must conform to.

    Args:
        document: Raw pipeline document
        registry: Registry to look the reference up in. Defaults to the bundled schemas.

    Returns:
        Tuple of (compiled schema, resolved schema reference)

    Raises:
        UnsupportedSchemaError: If the reference is not registered
    """
    registry = registry if registry is not None else default_registry()

    schema_ref = document.get(SCHEMA_REF_FIELD, registry.default_ref)
    validator = registry.lookup(schema_ref)
    if validator is None:
        raise UnsupportedSchemaError(schema_ref)

    logger.debug(f"Resolved pipeline schema: {schema_ref}")
    return validator, schema_ref


def validate_against_schema(
    document: Mapping[str, Any],
    validator: Validator,
    *,
    source_map: Optional[SourceMap] = None,
    source_name: Optional[str] = None,
) -> List[SchemaIssue]:
    """Validate a raw document against a compiled schema.

    Returns:
        All schema violations, ordered by document path and then message so
        that identical input always yields identical output.
    """
    errors: List[JsonSchemaValidationError] = list(validator.iter_errors(document))

    issues = []
    for error in errors:
        path = _to_pointer(error.absolute_path)
        issues.append(
            SchemaIssue(
                message=error.message,
                yaml_path=path,
                location=lookup_source(source_map, path, source_name),
            )
        )
    issues.sort(key=lambda i: (i.yaml_path or "", i.message))
    return issues


def format_schema_issues(issues: Sequence[SchemaIssue]) -> str:
    return "\n".join(
        f"  - {i.message}" + (format_source(i.location) if i.location else f" (yaml_path={i.yaml_path})")
        for i in issues
    )


def validate_pipeline_document(
    document: Dict[str, Any],
    registry: Optional[SchemaRegistry] = None,
    *,
    source_map: Optional[SourceMap] = None,
    source_name: Optional[str] = None,
) -> str:
    """Resolve the schema of a parsed document and validate against it.

    Returns:
        The schema reference the document was validated against

    Raises:
        UnsupportedSchemaError: If the schema reference is not registered
        SchemaComplianceError: If the document violates the schema
    """
    validator, schema_ref = get_schema_for_pipeline(document, registry)
    issues = validate_against_schema(
        document, validator, source_map=source_map, source_name=source_name
    )
    if issues:
        raise SchemaComplianceError(schema_ref, issues, format_schema_issues(issues))
    return schema_ref


def validate_pipeline_schema(
    content: Content,
    registry: Optional[SchemaRegistry] = None,
    source_name: Optional[str] = None,
) -> None:
    """Validate serialized pipeline content (YAML or JSON) against its schema.

    Args:
        content: Document source
        registry: Schema registry. Defaults to the bundled schemas.
        source_name: Name used for the source in error messages (e.g. a file path)

    Raises:
        PipelineParseError: If the content cannot be parsed
        UnsupportedSchemaError: If the schema reference is not registered
        SchemaComplianceError: If the document violates the schema
    """
    document, source_map = yaml_parser.load_document_with_source(content)
    validate_pipeline_document(
        document, registry, source_map=source_map, source_name=source_name
    )
