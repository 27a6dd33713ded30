"""
Tests for positional argument validation
"""
import pytest

from cosy.exceptions import ValidationError
from cosy.validation import ValidationRule, Validator, type_of, validate


@pytest.fixture
def validator():
    return Validator()


@pytest.mark.parametrize('value,expected', [
    (None, 'null'),
    (True, 'boolean'),
    (3, 'number'),
    (2.5, 'number'),
    ('text', 'string'),
    ([1], 'array'),
    ((1,), 'array'),
    (len, 'function'),
    ({'a': 1}, 'object'),
])
def test_type_of(value, expected):
    assert type_of(value) == expected


def test_valid_arguments(validator):
    result = validator.validate(['hi', 3], {
        0: {'required': True, 'type': 'string'},
        1: {'type': 'number'},
    })

    assert result.valid
    assert result.errors == []
    assert bool(result)


def test_required_argument_missing(validator):
    result = validator.validate([], {0: {'required': True}})

    assert not result.valid
    assert result.errors == ["Argument 0 is required"]


def test_none_counts_as_missing(validator):
    result = validator.validate([None], {0: {'required': True, 'type': 'string'}})

    assert result.errors == ["Argument 0 is required"]


def test_optional_missing_argument_skips_other_checks(validator):
    rule = {'type': 'string', 'validator': lambda value: False}

    assert validator.validate([], {0: rule}).valid


def test_type_mismatch(validator):
    result = validator.validate([1], {0: {'type': 'string'}})

    assert result.errors == ["Argument 0 must be of type string, got number"]


def test_boolean_is_not_a_number(validator):
    result = validator.validate([True], {0: {'type': 'number'}})

    assert result.errors == ["Argument 0 must be of type number, got boolean"]


def test_custom_validator_messages(validator):
    rules = {
        0: {'validator': lambda value: value > 0},
        1: {'validator': lambda value: True if value.isupper() else 'must be upper case'},
    }

    result = validator.validate([-1, 'abc'], rules)

    assert result.errors == [
        "Argument 0 failed validation",
        "Argument 1 failed validation: must be upper case",
    ]


def test_first_failing_check_wins_per_rule(validator):
    calls = []
    rule = {'type': 'string', 'validator': lambda value: calls.append(value) or False}

    result = validator.validate([5], {0: rule})

    assert result.errors == ["Argument 0 must be of type string, got number"]
    assert calls == []


def test_every_failing_rule_is_reported(validator):
    result = validator.validate([], {0: {'required': True}, 1: {'required': True}})

    assert len(result.errors) == 2


def test_string_keys_are_indexes(validator):
    result = validator.validate(['x', 'y'], {'1': {'type': 'number'}})

    assert result.errors == ["Argument 1 must be of type number, got string"]


def test_non_numeric_key_reads_as_missing(validator):
    result = validator.validate(['x'], {'name': {'required': True}})

    assert result.errors == ["Argument name is required"]


def test_validate_or_fail_raises_with_all_errors(validator):
    with pytest.raises(ValidationError) as excinfo:
        validator.validate_or_fail([], {0: {'required': True}, 1: {'required': True}})

    error = excinfo.value
    assert error.errors == ["Argument 0 is required", "Argument 1 is required"]
    assert error.message == "Argument 0 is required, Argument 1 is required"
    assert error.status_code == 422


def test_rule_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError):
        ValidationRule.make({'requird': True})


def test_rule_rejects_unknown_type():
    with pytest.raises(ValueError):
        ValidationRule(type='integer')


def test_rule_rejects_non_mapping():
    with pytest.raises(TypeError):
        ValidationRule.make('required')


def test_module_level_validate():
    assert validate([1], {'0': {'type': 'number'}}).valid
