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

"""Per-file results of a validation run."""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ..exceptions import PipelineError, SchemaComplianceError


class ValidationResult:
    """Container for the validation outcome of a single pipeline file."""

    def __init__(self, file_path: Path):
        self.file_path = file_path
        self.errors: List[Dict[str, Any]] = []

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        yaml_path: Optional[str] = None,
    ):
        error = {'message': message}
        if line is not None:
            error['line'] = line
        if column is not None:
            error['column'] = column
        if yaml_path is not None:
            error['yaml_path'] = yaml_path
        self.errors.append(error)

    def add_exception(self, exc: PipelineError):
        """Record a validation failure, one entry per schema issue when available."""
        if isinstance(exc, SchemaComplianceError) and exc.issues:
            for issue in exc.issues:
                location = issue.location
                self.add_error(
                    f"pipeline is not compliant with schema {exc.schema_ref}: {issue.message}",
                    line=location.line if location else None,
                    column=location.column if location else None,
                    yaml_path=issue.yaml_path,
                )
            return
        self.add_error(str(exc))

    def to_dict(self) -> Dict[str, Any]:
        return {'file': str(self.file_path), 'errors': self.errors}
