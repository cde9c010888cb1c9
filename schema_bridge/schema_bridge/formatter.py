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

"""Human-readable report for validation results."""

from typing import Iterable, List

from .models import ValidationError, ValidationResult


def format_results(results: Iterable[ValidationResult]) -> str:
    """Format validation results into one report.

    Output format::

        config.yaml: ok
        FAIL: config.json
          line 5, field "replicas": value 0 does not satisfy constraint >=1
    """
    lines: List[str] = []
    for result in results:
        lines.extend(format_single_result(result))
    return "".join(f"{line}\n" for line in lines)


def format_single_result(result: ValidationResult) -> List[str]:
    if result.valid:
        return [f"{result.name}: ok"]
    return [f"FAIL: {result.name}"] + [format_error(e) for e in result.errors]


def format_error(error: ValidationError) -> str:
    if error.line > 0 and error.path:
        return f'  line {error.line}, field "{error.path}": {error.message}'
    if error.line > 0:
        return f"  line {error.line}: {error.message}"
    if error.path:
        return f'  field "{error.path}": {error.message}'
    return f"  {error.message}"
