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

"""CLI entry point for validating JSON/YAML documents against a schema."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from ..config import BridgeConfig
from ..exceptions import SchemaBridgeError
from ..formatter import format_results
from ..models import DataFormat, ValidationInput, ValidationResult
from ..validator import Validator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def find_data_files(paths: List[str], extensions: Sequence[str]) -> List[Path]:
    """Find all data files in the given paths."""
    data_files = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            print(f"Warning: Path does not exist: {path}", file=sys.stderr)
            continue

        if path.is_file():
            # explicitly named files are validated whatever their extension
            data_files.append(path)
        elif path.is_dir():
            for ext in extensions:
                data_files.extend(p for p in path.rglob(f'*{ext}') if p.is_file())
        else:
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)

    return sorted(set(data_files))


def _input_for_file(path: Path, fmt: str) -> ValidationInput:
    if fmt == 'auto':
        data_format = DataFormat.from_path(path) or DataFormat.YAML
    else:
        data_format = DataFormat(fmt)
    return ValidationInput.from_file(path, data_format, name=str(path))


def _print_json(results: List[ValidationResult], failures: List[dict]) -> None:
    output = {
        'files': len(results) + len(failures),
        'valid': sum(1 for r in results if r.valid),
        'invalid': sum(1 for r in results if not r.valid),
        'results': [r.to_dict() for r in results],
        'failures': failures,
    }
    print(json.dumps(output, indent=2))


def build_parser() -> argparse.ArgumentParser:
    config = BridgeConfig.from_env()
    parser = argparse.ArgumentParser(
        description='Validate JSON/YAML documents against a schema definition',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('schema', help='Schema file (JSON Schema in JSON or YAML)')
    parser.add_argument(
        'paths',
        nargs='*',
        default=None,
        help='Files or directories to validate',
    )
    parser.add_argument(
        '-d', '--definition',
        default=config.definition_name,
        help=f'Definition to validate against (default: {config.definition_name})',
    )
    parser.add_argument(
        '--format',
        choices=['auto', 'json', 'yaml'],
        default='auto',
        help='Data format; auto picks it from the file extension (default: auto)',
    )
    parser.add_argument('--stdin', action='store_true', help='Validate standard input')
    parser.add_argument('--name', default='<stdin>', help='Label for standard input (default: <stdin>)')
    parser.add_argument(
        '--output',
        choices=['human', 'json'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--keep-index-segments',
        action='store_true',
        default=config.keep_index_segments,
        help='Keep list indices in error field paths',
    )
    parser.add_argument('--log-level', default=config.log_level, help='Log level (default: %(default)s)')
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the validation CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = BridgeConfig.from_env()
    config.log_level = args.log_level
    config.set_logging()

    try:
        validator = Validator(args.schema, args.definition, keep_index_segments=args.keep_index_segments)
    except SchemaBridgeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_ERROR)

    inputs: List[ValidationInput] = []
    if args.stdin:
        fmt = DataFormat.YAML if args.format == 'auto' else DataFormat(args.format)
        inputs.append(ValidationInput.from_stream(sys.stdin.buffer, fmt, args.name))
    if args.paths:
        inputs.extend(_input_for_file(p, args.format) for p in find_data_files(args.paths, config.data_extensions))

    if not inputs:
        print("No input documents found.", file=sys.stderr)
        sys.exit(EXIT_ERROR)

    results: List[ValidationResult] = []
    failures: List[dict] = []
    for validation_input in inputs:
        try:
            results.append(validator.validate(validation_input))
        except SchemaBridgeError as e:
            logger.debug(f"Validation of {validation_input.name} could not run", exc_info=True)
            failures.append({'name': validation_input.name, 'error': str(e)})

    if args.output == 'json':
        _print_json(results, failures)
    else:
        sys.stdout.write(format_results(results))
        for failure in failures:
            print(f"ERROR: {failure['name']}: {failure['error']}", file=sys.stderr)

    if failures:
        sys.exit(EXIT_ERROR)
    if any(not r.valid for r in results):
        sys.exit(EXIT_INVALID)
    sys.exit(EXIT_OK)


if __name__ == '__main__':
    main()
