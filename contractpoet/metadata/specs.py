"""
Mapping of compiled-metadata contracts onto the contract model.

Everything goes through the builders, so a malformed dump fails with the
same ValueErrors as hand-built specs.
"""

from ..core.contracts import Contract
from ..core.effects import ContractEffect
from ..core.expressions import ContractEffectExpression, literal
from ..core.models import ContractEffectType, ContractInvocationKind
from ..poet.types import ClassName, TypeName
from .models import (
    KmClassifierClass,
    KmClassifierTypeAlias,
    KmClassifierTypeParameter,
    KmContract,
    KmEffect,
    KmEffectExpression,
    KmEffectInvocationKind,
    KmEffectType,
    KmType,
)

EFFECT_TYPES = {
    KmEffectType.RETURNS_CONSTANT: ContractEffectType.RETURNS_CONSTANT,
    KmEffectType.CALLS: ContractEffectType.CALLS,
    KmEffectType.RETURNS_NOT_NULL: ContractEffectType.RETURNS_NOT_NULL,
}

INVOCATION_KINDS = {
    KmEffectInvocationKind.AT_MOST_ONCE: ContractInvocationKind.AT_MOST_ONCE,
    KmEffectInvocationKind.EXACTLY_ONCE: ContractInvocationKind.EXACTLY_ONCE,
    KmEffectInvocationKind.AT_LEAST_ONCE: ContractInvocationKind.AT_LEAST_ONCE,
}


def to_type_name(km_type: KmType) -> TypeName:
    classifier = km_type.classifier
    if isinstance(classifier, KmClassifierClass):
        return ClassName.from_metadata_name(classifier.name).copy(nullable=km_type.nullable)
    if isinstance(classifier, KmClassifierTypeParameter):
        raise NotImplementedError("Unsupported type: TypeParameter")
    if isinstance(classifier, KmClassifierTypeAlias):
        raise NotImplementedError("Unsupported type: TypeAlias")
    raise NotImplementedError(f"Unsupported type: {type(classifier).__name__}")


def to_expression(km_expression: KmEffectExpression) -> ContractEffectExpression:
    builder = (ContractEffectExpression.builder()
               .negated(km_expression.is_negated)
               .null_check_predicate(km_expression.is_null_check_predicate)
               .parameter(km_expression.parameter_index))
    if km_expression.constant_value is not None:
        builder.constant(literal(km_expression.constant_value.value))
    if km_expression.is_instance_type is not None:
        builder.instance_type(to_type_name(km_expression.is_instance_type))
    builder.add_and_arguments(to_expression(e) for e in km_expression.and_arguments)
    builder.add_or_arguments(to_expression(e) for e in km_expression.or_arguments)
    return builder.build()


def to_effect(km_effect: KmEffect) -> ContractEffect:
    invocation_kind = km_effect.invocation_kind
    return (ContractEffect.builder(EFFECT_TYPES[km_effect.type])
            .with_invocation_kind(INVOCATION_KINDS[invocation_kind] if invocation_kind is not None else None)
            .add_constructor_arguments(to_expression(e) for e in km_effect.constructor_arguments)
            .with_conclusion(to_expression(km_effect.conclusion) if km_effect.conclusion is not None else None)
            .build())


def to_contract(km_contract: KmContract) -> Contract:
    """Convert a compiled-metadata contract into a Contract"""
    return Contract.builder().add_effects(to_effect(e) for e in km_contract.effects).build()
