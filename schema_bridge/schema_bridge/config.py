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

"""Configuration for the schema_bridge command line.

The validation core takes everything it needs as arguments; only the CLI reads
this configuration.
"""

import os
import logging
from dataclasses import dataclass
from typing import Tuple

from .utils.logging_utils import configure_split_stream_logging


@dataclass
class BridgeConfig:
    """Configuration class for schema_bridge runs."""
    log_level: str = "WARNING"
    print_level: str = "WARNING"
    definition_name: str = "#Config"
    keep_index_segments: bool = False
    data_extensions: Tuple[str, ...] = (".json", ".yaml", ".yml")

    @classmethod
    def from_env(cls) -> 'BridgeConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('SCHEMA_BRIDGE_LOG_LEVEL', 'WARNING'),
            print_level=os.getenv('SCHEMA_BRIDGE_PRINT_LEVEL', 'WARNING'),
            definition_name=os.getenv('SCHEMA_BRIDGE_DEFINITION', '#Config'),
            keep_index_segments=os.getenv('SCHEMA_BRIDGE_KEEP_INDEX_SEGMENTS', 'false').lower() == 'true',
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)
