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

"""Validation of declarative rollout pipeline definitions."""

from .exceptions import (
    DanglingDependencyError,
    DuplicateStepError,
    InvalidFieldError,
    MissingFieldError,
    PipelineError,
    PipelineParseError,
    SchemaComplianceError,
    SchemaResolutionError,
    UnsupportedSchemaError,
    ValidationError,
)
from .loader import load_pipeline, parse_pipeline
from .models.pipeline import Pipeline, ResourceGroup, Step, Variable
from .schema_registry import (
    DEFAULT_SCHEMA_REF,
    PIPELINE_SCHEMA_V1_REF,
    SchemaRegistry,
    default_registry,
)
from .schema_validation import get_schema_for_pipeline, validate_pipeline_schema

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_SCHEMA_REF",
    "PIPELINE_SCHEMA_V1_REF",
    "DanglingDependencyError",
    "DuplicateStepError",
    "InvalidFieldError",
    "MissingFieldError",
    "Pipeline",
    "PipelineError",
    "PipelineParseError",
    "ResourceGroup",
    "SchemaComplianceError",
    "SchemaRegistry",
    "SchemaResolutionError",
    "Step",
    "UnsupportedSchemaError",
    "ValidationError",
    "Variable",
    "default_registry",
    "get_schema_for_pipeline",
    "load_pipeline",
    "parse_pipeline",
    "validate_pipeline_schema",
]
