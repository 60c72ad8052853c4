"""Core helpers shared by the dialogue rule subsystem."""

from .assignment import Assignment
from .errors import DialogueError, ErrorDetails, InvalidOperationError
from .logging_config import get_logger, setup_logging
from .templates import Template
from .values import (
    ArrayVal,
    BooleanVal,
    DoubleVal,
    NoneVal,
    SetVal,
    StringVal,
    Value,
    create_value,
    none,
)

__all__ = [
    "ArrayVal",
    "Assignment",
    "BooleanVal",
    "DialogueError",
    "DoubleVal",
    "ErrorDetails",
    "InvalidOperationError",
    "NoneVal",
    "SetVal",
    "StringVal",
    "Template",
    "Value",
    "create_value",
    "get_logger",
    "none",
    "setup_logging",
]
