#!/usr/bin/env python3
"""
contractpoet examples - functions rendered with their contracts
"""

from contractpoet import (
    Contract,
    ContractEffect,
    ContractEffectExpression,
    ContractInvocationKind,
    FunSpec,
    KModifier,
    LambdaTypeName,
    ParameterSpec,
)
from contractpoet.poet.types import ANY, BOOLEAN, STRING, UNIT


def show(title: str, function: FunSpec) -> str:
    print("\n" + "=" * 70)
    print(title)
    print("=" * 70)
    source = str(function)
    print(source)
    return source


def example_calls_in_place():
    """Example: inline function invoking its lambda exactly once"""
    body = ParameterSpec("body", LambdaTypeName(parameters=(STRING,), return_type=STRING))
    contract = (Contract.builder()
                .add_effect(ContractEffect.calls(body, ContractInvocationKind.EXACTLY_ONCE))
                .build())
    function = (FunSpec.builder("test")
                .add_modifiers(KModifier.INLINE)
                .add_parameter(body)
                .build())
    return show("Example 1: callsInPlace", function.with_contract(contract))


def example_returns_not_null():
    """Example: non-null result implies a non-null argument"""
    param = ParameterSpec("param", STRING.copy(nullable=True))
    contract = (Contract.builder()
                .add_effect(ContractEffect.returns_not_null(
                    ContractEffectExpression.null_check(1, is_negated=True)))
                .build())
    function = (FunSpec.builder("test")
                .returns(UNIT.copy(nullable=True))
                .add_parameter(param)
                .build())
    return show("Example 2: returnsNotNull", function.with_contract(contract))


def example_instance_check():
    """Example: returning implies the argument is not a String"""
    contract = (Contract.builder()
                .add_effect(ContractEffect.returns(
                    ContractEffectExpression.is_instance(STRING, 1, is_negated=True)))
                .build())
    function = FunSpec.builder("test").add_parameter(ParameterSpec("param", ANY)).build()
    return show("Example 3: instance check", function.with_contract(contract))


def example_and_or():
    """Example: and-arguments render before or-arguments"""
    params = [ParameterSpec(f"param{i}", STRING.copy(nullable=True)) for i in (1, 2, 3)]
    conclusion = (ContractEffectExpression.null_check(1, True)
                  .or_(ContractEffectExpression.null_check(2, True))
                  .and_(ContractEffectExpression.null_check(3, True)))
    contract = Contract.builder().add_effect(ContractEffect.returns(conclusion)).build()
    function = FunSpec.builder("test").add_parameters(params).build()
    return show("Example 4: and/or", function.with_contract(contract))


def example_boolean_receiver():
    """Example: Boolean receiver with a constant conclusion"""
    contract = (Contract.builder()
                .add_effect(ContractEffect.returns(ContractEffectExpression.constant_value(True)))
                .build())
    function = FunSpec.builder("test").receiver(BOOLEAN).build()
    return show("Example 5: Boolean receiver", function.with_contract(contract))


def main():
    """Run all examples"""
    results = []

    try:
        results.append(example_calls_in_place())
        results.append(example_returns_not_null())
        results.append(example_instance_check())
        results.append(example_and_or())
        results.append(example_boolean_receiver())

        print("\n" + "=" * 70)
        print(f"Rendered {len(results)} functions")
        print("=" * 70)

        return 0

    except ValueError as e:
        print(f"\nError: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
