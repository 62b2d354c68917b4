"""Validation package for build-time structure and quality rules."""

from .pipeline import ValidationError, ValidationOutcome, ValidationPipeline
from .rules import (
    check_directory_shape,
    check_import_naming,
    check_import_syntax,
    check_line_count,
    check_style_import,
    relative_id,
)

__all__ = [
    "ValidationError",
    "ValidationOutcome",
    "ValidationPipeline",
    "check_directory_shape",
    "check_import_naming",
    "check_import_syntax",
    "check_line_count",
    "check_style_import",
    "relative_id",
]
