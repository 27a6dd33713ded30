"""
Argument Validator
Checks positional dispatch arguments against per-index rules
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from cosy.exceptions import ValidationError

TYPES = ('null', 'boolean', 'number', 'string', 'array', 'function', 'object')


@dataclass
class ValidationRule:
    """
    Rule for a single positional argument

    Attributes:
        required: Reject None / missing values
        type: One of 'null', 'boolean', 'number', 'string', 'array',
              'function', 'object'
        validator: Callable returning True on success, False or an error
                   message on failure
    """
    required: bool = False
    type: Optional[str] = None
    validator: Optional[Callable[[Any], Union[bool, str, None]]] = None

    def __post_init__(self):
        if self.type is not None and self.type not in TYPES:
            raise ValueError(
                f"Unknown validation type '{self.type}', expected one of: {', '.join(TYPES)}"
            )

    @classmethod
    def make(cls, rule: Union['ValidationRule', Mapping[str, Any]]) -> 'ValidationRule':
        """Build a rule from a dict such as {'required': True, 'type': 'string'}"""
        if isinstance(rule, cls):
            return rule
        if isinstance(rule, Mapping):
            unknown = set(rule) - {'required', 'type', 'validator'}
            if unknown:
                raise ValueError(f"Unknown validation rule keys: {', '.join(sorted(unknown))}")
            return cls(**rule)
        raise TypeError(f"Validation rule must be a dict or ValidationRule, got {type(rule).__name__}")


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid


def type_of(value: Any) -> str:
    """Classify a value using the validator's type names"""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, (list, tuple)):
        return 'array'
    if callable(value):
        return 'function'
    return 'object'


def normalize_rules(rules: Mapping[Any, Any]) -> Dict[Any, ValidationRule]:
    """Convert every rule of a rule map into a ValidationRule"""
    return {key: ValidationRule.make(rule) for key, rule in rules.items()}


class Validator:
    """
    Validates positional arguments

    Rule keys are zero-based argument indexes, given as ints or numeric
    strings. A key that is not a number always reads as a missing value.

    Usage:
        validator = Validator()
        result = validator.validate(['hi'], {0: {'required': True, 'type': 'string'}})
        if not result.valid:
            print(result.errors)

    Every rule is checked; each failing rule contributes one message.
    """

    def validate(self, args: Sequence[Any], rules: Mapping[Any, Any]) -> ValidationResult:
        errors = []

        for key, rule in rules.items():
            error = self.validate_argument(key, self._argument(args, key), ValidationRule.make(rule))
            if error:
                errors.append(error)

        return ValidationResult(valid=not errors, errors=errors)

    def validate_or_fail(self, args: Sequence[Any], rules: Mapping[Any, Any]) -> ValidationResult:
        """
        Validate and raise on failure

        Raises:
            ValidationError: Carrying every failure message
        """
        result = self.validate(args, rules)
        if not result.valid:
            raise ValidationError(result.errors)
        return result

    def validate_argument(self, key: Any, value: Any, rule: ValidationRule) -> Optional[str]:
        """Check one argument, returning an error message or None"""
        if value is None:
            if rule.required:
                return f"Argument {key} is required"
            return None

        if rule.type:
            actual = type_of(value)
            if actual != rule.type:
                return f"Argument {key} must be of type {rule.type}, got {actual}"

        if rule.validator is not None:
            outcome = rule.validator(value)
            if isinstance(outcome, str):
                return f"Argument {key} failed validation: {outcome}"
            if outcome is False:
                return f"Argument {key} failed validation"

        return None

    @staticmethod
    def _argument(args: Sequence[Any], key: Any) -> Any:
        try:
            index = int(key)
        except (TypeError, ValueError):
            return None
        if isinstance(key, bool) or index < 0 or index >= len(args):
            return None
        return args[index]


def validate(args: Sequence[Any], rules: Mapping[Any, Any]) -> ValidationResult:
    """
    Quick validation helper

    Example:
        result = validate([1], {'0': {'type': 'number'}})
    """
    return Validator().validate(args, rules)
