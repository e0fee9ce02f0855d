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

"""Configuration for the pipeline validator command line."""

import logging
import os
from dataclasses import dataclass

from .schema_registry import DEFAULT_SCHEMA_REF, SCHEMA_DIR, SchemaRegistry, default_registry
from .utils.logging_utils import configure_split_stream_logging


@dataclass
class ValidatorConfig:
    """Configuration class for pipeline validation runs."""
    log_level: str = "WARNING"
    print_level: str = "ERROR"

    # schemas
    schema_dir: str = ""
    default_schema_ref: str = DEFAULT_SCHEMA_REF

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('ROLLOUT_PIPELINE_LOG_LEVEL', 'WARNING'),
            print_level=os.getenv('ROLLOUT_PIPELINE_PRINT_LEVEL', 'ERROR'),
            schema_dir=os.getenv('ROLLOUT_PIPELINE_SCHEMA_DIR', ''),
            default_schema_ref=os.getenv('ROLLOUT_PIPELINE_DEFAULT_SCHEMA', DEFAULT_SCHEMA_REF),
        )

    def build_registry(self) -> SchemaRegistry:
        """Registry for this configuration; the bundled one unless overridden."""
        if not self.schema_dir and self.default_schema_ref == DEFAULT_SCHEMA_REF:
            return default_registry()
        schema_dir = self.schema_dir or SCHEMA_DIR
        return SchemaRegistry.from_directory(schema_dir, default_ref=self.default_schema_ref)

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_split_stream_logging(
            level=level,
            stderr_level=stderr_level,
            formatter=formatter,
            logger_name='rollout_pipeline',
        )

