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

"""Registry of compiled JSON Schemas for rollout pipeline documents."""

import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Tuple, Union

from jsonschema.exceptions import SchemaError
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for

logger = logging.getLogger(__name__)

PIPELINE_SCHEMA_V1_REF = "pipeline.schema.v1"
DEFAULT_SCHEMA_REF = PIPELINE_SCHEMA_V1_REF

SCHEMA_DIR = Path(__file__).parent / "schema"


def get_schema_path(schema_ref: str, schema_dir: Union[str, Path, None] = None) -> Path:
    """Get the path to the JSON Schema file for a schema reference.

    Args:
        schema_ref: Schema reference (e.g., "pipeline.schema.v1")
        schema_dir: Directory to look in. Defaults to the bundled schema directory.

    Returns:
        Path to the schema file
    """
    return Path(schema_dir or SCHEMA_DIR) / f"{schema_ref}.json"


def load_schema_file(schema_path: Path) -> dict:
    """Load a single JSON Schema document.

    Raises:
        FileNotFoundError: If the schema file doesn't exist
        json.JSONDecodeError: If the schema file is invalid JSON
    """
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise json.JSONDecodeError(
            f"Invalid JSON in schema file {schema_path}: {e.msg}",
            e.doc,
            e.pos,
        ) from e


def compile_schema(schema_ref: str, schema: dict) -> Validator:
    """Compile a schema document with the validator class matching its dialect."""
    validator_cls = validator_for(schema)
    try:
        validator_cls.check_schema(schema)
    except SchemaError as e:
        raise ValueError(f"Schema {schema_ref} is not a valid JSON Schema: {e.message}") from e
    return validator_cls(schema)


class SchemaRegistry:
    """Immutable mapping from schema reference to compiled schema.

    The registry is populated once at construction and exposes no mutation
    afterwards, so one instance can be shared by concurrent validations.
    """

    def __init__(self, schemas: Mapping[str, dict], default_ref: str = DEFAULT_SCHEMA_REF):
        compiled = {ref: compile_schema(ref, schema) for ref, schema in schemas.items()}
        self._validators: Mapping[str, Validator] = MappingProxyType(compiled)
        self._default_ref = default_ref
        logger.debug(f"Schema registry initialized with {sorted(compiled)} (default: {default_ref})")

    @classmethod
    def from_directory(
        cls, schema_dir: Union[str, Path], default_ref: str = DEFAULT_SCHEMA_REF
    ) -> "SchemaRegistry":
        """Build a registry from every ``*.json`` file in a directory.

        The schema reference of each document is its file name without the
        ``.json`` suffix.
        """
        schema_dir = Path(schema_dir)
        if not schema_dir.is_dir():
            raise FileNotFoundError(f"Schema directory not found: {schema_dir}")

        schemas = {}
        for schema_path in sorted(schema_dir.glob("*.json")):
            schema_ref = schema_path.name[: -len(".json")]
            schemas[schema_ref] = load_schema_file(schema_path)
        return cls(schemas, default_ref=default_ref)

    @property
    def default_ref(self) -> str:
        return self._default_ref

    @property
    def refs(self) -> Tuple[str, ...]:
        return tuple(sorted(self._validators))

    def lookup(self, schema_ref: Any) -> Optional[Validator]:
        """Return the compiled schema for a reference, or None if unknown."""
        if not isinstance(schema_ref, str):
            return None
        return self._validators.get(schema_ref)

    def __contains__(self, schema_ref: object) -> bool:
        return isinstance(schema_ref, str) and schema_ref in self._validators

    def __iter__(self) -> Iterator[str]:
        return iter(self.refs)

    def __len__(self) -> int:
        return len(self._validators)


@lru_cache(maxsize=None)
def default_registry() -> SchemaRegistry:
    """Registry built from the schemas bundled with this package."""
    return SchemaRegistry.from_directory(SCHEMA_DIR, default_ref=DEFAULT_SCHEMA_REF)
