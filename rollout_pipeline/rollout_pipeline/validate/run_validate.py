#!/usr/bin/env python3
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

"""CLI entry point for validating rollout pipeline files."""

import argparse
import json
import sys
from pathlib import Path
from typing import List

from ..config import ValidatorConfig
from . import validate_files

PIPELINE_FILE_PATTERNS = ['*.pipeline.yaml', '*.pipeline.yml', '*.pipeline.json', 'pipeline.yaml', 'pipeline.yml']


def find_pipeline_files(paths: List[str]) -> List[Path]:
    """Find all pipeline files in given paths.

    Files named explicitly are taken as they are; directories are searched
    recursively for files matching PIPELINE_FILE_PATTERNS.
    """
    pipeline_files = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            print(f"Warning: Path does not exist: {path}", file=sys.stderr)
            continue

        if path.is_file():
            pipeline_files.append(path)
        elif path.is_dir():
            for pattern in PIPELINE_FILE_PATTERNS:
                pipeline_files.extend(path.rglob(pattern))
        else:
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)

    return sorted(set(pipeline_files))


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the validator CLI."""
    parser = argparse.ArgumentParser(
        description='Validate rollout pipeline definition files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='*',
        default=None,
        help='File paths or directories to validate (default: current directory)',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--schema-dir',
        default=None,
        help='Directory of JSON Schema files to validate against (default: bundled schemas)',
    )

    args = parser.parse_args(argv)

    config = ValidatorConfig.from_env()
    if args.schema_dir:
        config.schema_dir = args.schema_dir
    config.set_logging()

    if not args.paths:
        args.paths = ['.']

    pipeline_files = find_pipeline_files(args.paths)

    if not pipeline_files:
        print("No pipeline files found.", file=sys.stderr)
        sys.exit(1)

    results = validate_files(pipeline_files, registry=config.build_registry())

    if args.format == 'json':
        output = {
            'files': len(results),
            'errors': sum(len(r.errors) for r in results),
            'results': [r.to_dict() for r in results],
        }
        print(json.dumps(output, indent=2))
    elif args.format == 'github-actions':
        for result in results:
            for error in result.errors:
                print(f"::error file={result.file_path},line={error.get('line', 1)}::{error['message']}")
    else:  # human-readable
        for result in results:
            if result.errors:
                print(f"\n{result.file_path}:")
                for error in result.errors:
                    line_info = f":{error['line']}" if 'line' in error else ""
                    print(f"  ERROR{line_info}: {error['message']}")

    if any(not r.ok for r in results):
        sys.exit(1)
    if args.format == 'human':
        print(f"Validated {len(results)} pipeline file(s) with no errors.")
    sys.exit(0)


if __name__ == '__main__':
    main()
