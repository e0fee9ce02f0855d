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

"""Load pipeline definitions into the validated, typed model."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .models.pipeline import Pipeline
from .parsers.yaml_parser import Content, SourceMap, yaml_parser
from .schema_registry import SchemaRegistry
from .schema_validation import validate_pipeline_document

logger = logging.getLogger(__name__)


def _build_pipeline(
    document: Dict[str, Any],
    source_map: SourceMap,
    registry: Optional[SchemaRegistry],
    source_name: Optional[str],
) -> Pipeline:
    schema_ref = validate_pipeline_document(
        document, registry, source_map=source_map, source_name=source_name
    )
    logger.debug(f"Pipeline {source_name or '<content>'} is compliant with schema {schema_ref}")

    pipeline = Pipeline.from_dict(document)
    pipeline.validate()
    logger.debug(
        f"Pipeline {pipeline.service_group}/{pipeline.rollout_name} validated: "
        f"{len(pipeline.resource_groups)} resource group(s), {len(pipeline.step_names())} step(s)"
    )
    return pipeline


def parse_pipeline(
    content: Content,
    registry: Optional[SchemaRegistry] = None,
    source_name: Optional[str] = None,
) -> Pipeline:
    """Parse and fully validate pipeline content.

    Structural validation runs first; the typed model is only built from a
    compliant document and then validated semantically.

    Args:
        content: YAML or JSON document source
        registry: Schema registry. Defaults to the bundled schemas.
        source_name: Name used for the source in error messages

    Returns:
        The validated pipeline

    Raises:
        PipelineParseError: If the content cannot be parsed
        ValidationError: On the first structural or semantic violation
    """
    document, source_map = yaml_parser.load_document_with_source(content)
    return _build_pipeline(document, source_map, registry, source_name)


def load_pipeline(
    file_path: Union[str, Path], registry: Optional[SchemaRegistry] = None
) -> Pipeline:
    """Read a pipeline file and fully validate it."""
    document, source_map = yaml_parser.load_file(file_path)
    return _build_pipeline(document, source_map, registry, str(file_path))
