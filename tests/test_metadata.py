#!/usr/bin/env python3
"""
Tests for importing contracts from compiled metadata.
"""

import pytest

from contractpoet import FunSpec, KModifier, LambdaTypeName, ParameterSpec
from contractpoet.core.models import ContractEffectType, ContractInvocationKind
from contractpoet.metadata import read_contract, to_contract
from contractpoet.metadata.models import (
    IS_NEGATED,
    IS_NULL_CHECK_PREDICATE,
    KmClassifierClass,
    KmClassifierTypeAlias,
    KmClassifierTypeParameter,
    KmConstantValue,
    KmContract,
    KmEffect,
    KmEffectExpression,
    KmEffectInvocationKind,
    KmEffectType,
    KmType,
)
from contractpoet.poet.types import ANY, STRING


def value_function():
    return FunSpec.builder("check").add_parameter(ParameterSpec("value", ANY.copy(nullable=True))).build()


def test_flags():
    """Test flag bits map to negation and null checks"""
    expression = KmEffectExpression(flags=IS_NEGATED | IS_NULL_CHECK_PREDICATE, parameter_index=1)
    assert expression.is_negated
    assert expression.is_null_check_predicate
    assert not KmEffectExpression(flags=0).is_negated


def test_returns_not_null_contract():
    contract = to_contract(KmContract(effects=[
        KmEffect(
            type=KmEffectType.RETURNS_NOT_NULL,
            conclusion=KmEffectExpression(flags=IS_NEGATED | IS_NULL_CHECK_PREDICATE, parameter_index=1)
        )
    ]))
    assert contract.effects[0].type == ContractEffectType.RETURNS_NOT_NULL
    assert contract.render(value_function()) == (
        "kotlin.contracts.contract {\n"
        "  returnsNotNull() implies (value != null)\n"
        "}\n"
    )


def test_instance_and_constant_values():
    """Test class classifiers and constant values"""
    contract = to_contract(KmContract(effects=[
        KmEffect(
            type=KmEffectType.RETURNS_CONSTANT,
            constructor_arguments=[KmEffectExpression(constant_value=KmConstantValue(False))],
            conclusion=KmEffectExpression(
                flags=IS_NEGATED,
                parameter_index=1,
                is_instance_type=KmType(KmClassifierClass("kotlin/collections/Map.Entry"), nullable=True),
                or_arguments=[KmEffectExpression(parameter_index=1, constant_value=KmConstantValue(None))]
            )
        )
    ]))
    assert contract.effects[0].render(value_function()) == \
        "returns(false) implies (value !is kotlin.collections.Map.Entry? || (value == null))"


def test_calls_with_parameter_index():
    """Test callsInPlace targets given by index render the parameter name"""
    contract = to_contract(KmContract(effects=[
        KmEffect(
            type=KmEffectType.CALLS,
            invocation_kind=KmEffectInvocationKind.AT_LEAST_ONCE,
            constructor_arguments=[KmEffectExpression(parameter_index=1)]
        )
    ]))
    function = (FunSpec.builder("repeat")
                .add_modifiers(KModifier.INLINE)
                .add_parameter(ParameterSpec("action", LambdaTypeName()))
                .build())
    assert contract.effects[0].invocation_kind == ContractInvocationKind.AT_LEAST_ONCE
    assert "callsInPlace(action, kotlin.contracts.InvocationKind.AT_LEAST_ONCE)" in str(function.with_contract(contract))


def test_type_parameter_not_supported():
    contract = KmContract(effects=[
        KmEffect(
            type=KmEffectType.RETURNS_CONSTANT,
            conclusion=KmEffectExpression(parameter_index=1,
                                          is_instance_type=KmType(KmClassifierTypeParameter(0)))
        )
    ])
    with pytest.raises(NotImplementedError, match="Unsupported type: TypeParameter"):
        to_contract(contract)


def test_type_alias_not_supported():
    contract = KmContract(effects=[
        KmEffect(
            type=KmEffectType.RETURNS_CONSTANT,
            conclusion=KmEffectExpression(parameter_index=1,
                                          is_instance_type=KmType(KmClassifierTypeAlias("foo/Alias")))
        )
    ])
    with pytest.raises(NotImplementedError, match="Unsupported type: TypeAlias"):
        to_contract(contract)


def test_invalid_metadata_fails_validation():
    """Test malformed metadata goes through the same structural checks"""
    with pytest.raises(ValueError, match="returnsNotNull effects must have a conclusion"):
        to_contract(KmContract(effects=[KmEffect(type=KmEffectType.RETURNS_NOT_NULL)]))
    with pytest.raises(ValueError, match="at least one effect"):
        to_contract(KmContract())


def test_read_contract_dump():
    """Test reading a JSON dump of a contract"""
    data = {
        "effects": [
            {
                "type": "RETURNS_CONSTANT",
                "constructor_arguments": [{"constant_value": {"value": True}}],
                "conclusion": {
                    "flags": 0,
                    "parameter_index": 1,
                    "is_instance_type": {"classifier": {"kind": "class", "name": "kotlin/String"}},
                    "and_arguments": [{"flags": 3, "parameter_index": 0}]
                }
            },
            {
                "type": "CALLS",
                "invocation_kind": "EXACTLY_ONCE",
                "constructor_arguments": [{"parameter_index": 1}]
            }
        ]
    }
    km_contract = read_contract(data)
    assert km_contract.effects[0].conclusion.is_instance_type.classifier == KmClassifierClass("kotlin/String")
    assert km_contract.effects[1].invocation_kind == KmEffectInvocationKind.EXACTLY_ONCE

    contract = to_contract(km_contract)
    assert str(contract.effects[0]) == "returns(true) implies ($1 is kotlin.String && (this@ != null))"
    assert contract.effects[0].conclusion.is_instance_type == STRING


def test_read_contract_type_parameter_classifier():
    km_contract = read_contract({"effects": [{
        "type": "RETURNS_CONSTANT",
        "conclusion": {"parameter_index": 1,
                       "is_instance_type": {"classifier": {"kind": "type_parameter", "id": 0},
                                            "nullable": True}}
    }]})
    instance_type = km_contract.effects[0].conclusion.is_instance_type
    assert instance_type == KmType(KmClassifierTypeParameter(0), nullable=True)


@pytest.mark.parametrize("data", [
    {"effects": [{"invocation_kind": "EXACTLY_ONCE"}]},
    {"effects": [{"type": "RETURNS_SOMETIMES"}]},
    {"effects": [{"type": "CALLS", "invocation_kind": "SOMETIMES"}]},
    {"effects": [1]},
    {"effects": "RETURNS_CONSTANT"},
    [],
    {"effects": [{"type": "RETURNS_CONSTANT", "conclusion": {"flags": "x", "parameter_index": 1}}]},
    {"effects": [{"type": "RETURNS_CONSTANT", "conclusion": {"constant_value": 5}}]},
    {"effects": [{"type": "RETURNS_CONSTANT", "conclusion": {"constant_value": {}}}]},
    {"effects": [{"type": "RETURNS_CONSTANT", "conclusion": {"parameter_index": "first"}}]},
    {"effects": [{"type": "RETURNS_CONSTANT",
                  "conclusion": {"parameter_index": 1, "and_arguments": [None]}}]},
    {"effects": [{"type": "RETURNS_CONSTANT",
                  "conclusion": {"parameter_index": 1, "is_instance_type": {"classifier": {"kind": "star"}}}}]},
    {"effects": [{"type": "RETURNS_CONSTANT",
                  "conclusion": {"parameter_index": 1, "is_instance_type": {"classifier": {"kind": "class"}}}}]},
])
def test_read_contract_rejects_malformed_dumps(data):
    """Test every malformed dump is reported as a ValueError"""
    with pytest.raises(ValueError, match="Invalid contract metadata"):
        read_contract(data)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
