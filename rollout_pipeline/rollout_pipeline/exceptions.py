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

"""Custom exceptions for rollout pipeline validation."""

from typing import Any, Sequence


class PipelineError(Exception):
    """Base exception for pipeline related errors."""
    pass


class PipelineParseError(PipelineError):
    """Exception raised when a pipeline document cannot be parsed."""
    pass


class ValidationError(PipelineError):
    """Exception raised for validation errors."""
    pass


class MissingFieldError(ValidationError):
    """A required field of the typed model is empty."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class InvalidFieldError(ValidationError):
    """A document field has a shape the typed model cannot hold."""

    def __init__(self, field: str, expected: str, value: Any):
        super().__init__(f"{field} must be {expected}, got {type(value).__name__}")
        self.field = field


class DuplicateStepError(ValidationError):
    """A step name is declared more than once in the pipeline."""

    def __init__(self, step_name: str):
        super().__init__(f'duplicate step name "{step_name}"')
        self.step_name = step_name


class DanglingDependencyError(ValidationError):
    """A step depends on a step that is not declared anywhere."""

    def __init__(self, step_name: str, dependency: str):
        super().__init__(
            f"invalid dependency on step {step_name}: dependency {dependency} does not exist"
        )
        self.step_name = step_name
        self.dependency = dependency


class SchemaResolutionError(ValidationError):
    """Exception raised when no schema can be selected for a document."""
    pass


class UnsupportedSchemaError(SchemaResolutionError):
    """The schema reference is not known to the registry."""

    def __init__(self, schema_ref: Any):
        super().__init__(f"unsupported schema reference: {schema_ref}")
        self.schema_ref = schema_ref


class SchemaComplianceError(ValidationError):
    """The document does not conform to its resolved schema."""

    def __init__(self, schema_ref: str, issues: Sequence[Any] = (), details: str = ""):
        message = f"pipeline is not compliant with schema {schema_ref}"
        if details:
            message = f"{message}:\n{details}"
        super().__init__(message)
        self.schema_ref = schema_ref
        self.issues = tuple(issues)
