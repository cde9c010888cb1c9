"""Schema engines.

The pipeline depends only on the capability classes in ``base``; the JSON
Schema engine is the default implementation.
"""

from .base import (
    EngineCompileError,
    EngineError,
    EngineErrorList,
    EngineSyntaxError,
    EngineValue,
    EvaluationContext,
    Position,
    SchemaEngine,
)
from .jsonschema_engine import JsonSchemaEngine

__all__ = [
    "EngineCompileError",
    "EngineError",
    "EngineErrorList",
    "EngineSyntaxError",
    "EngineValue",
    "EvaluationContext",
    "Position",
    "SchemaEngine",
    "JsonSchemaEngine",
]
