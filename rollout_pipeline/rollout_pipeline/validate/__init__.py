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

"""Validation of pipeline definition files."""

import logging
from pathlib import Path
from typing import List, Optional

from ..exceptions import PipelineError
from ..loader import load_pipeline
from ..schema_registry import SchemaRegistry
from .report import ValidationResult

__all__ = ['validate_files', 'ValidationResult']

logger = logging.getLogger(__name__)


def validate_files(
    file_paths: List[Path], registry: Optional[SchemaRegistry] = None
) -> List[ValidationResult]:
    """Validate a list of pipeline files.

    Args:
        file_paths: List of file paths to validate
        registry: Schema registry shared by all files

    Returns:
        List of ValidationResult objects, one per file
    """
    results = []

    for file_path in file_paths:
        result = ValidationResult(file_path)
        try:
            load_pipeline(file_path, registry=registry)
        except PipelineError as e:
            logger.debug(f"Validation failed for {file_path}: {e}")
            result.add_exception(e)
        results.append(result)

    return results
