"""
Validation Package
Positional argument validation for dispatched channels
"""
from cosy.validation.validator import (
    TYPES,
    ValidationResult,
    ValidationRule,
    Validator,
    normalize_rules,
    type_of,
    validate,
)

__all__ = [
    'TYPES',
    'ValidationResult',
    'ValidationRule',
    'Validator',
    'normalize_rules',
    'type_of',
    'validate',
]
