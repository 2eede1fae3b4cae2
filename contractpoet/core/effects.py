"""
Contract effects: one declarative fact a contract states about a function
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .base import TagMap, TaggableSpec
from .expressions import ContractEffectExpression
from .models import ContractEffectType, ContractInvocationKind
from ..poet.functions import ParameterSpec
from ..poet.types import LambdaTypeName
from ..translators.effects import EffectRenderer


@dataclass(frozen=True)
class EffectRule:
    """Structural requirements for one effect type"""
    keyword: str
    min_arguments: int
    max_arguments: int
    conclusion_required: bool
    conclusion_allowed: bool
    invocation_kind_required: bool


EFFECT_RULES: Dict[ContractEffectType, EffectRule] = {
    ContractEffectType.RETURNS_NOT_NULL: EffectRule(
        keyword="returnsNotNull",
        min_arguments=0,
        max_arguments=0,
        conclusion_required=True,
        conclusion_allowed=True,
        invocation_kind_required=False
    ),
    ContractEffectType.RETURNS_CONSTANT: EffectRule(
        keyword="returns",
        min_arguments=0,
        max_arguments=1,
        conclusion_required=True,
        conclusion_allowed=True,
        invocation_kind_required=False
    ),
    ContractEffectType.CALLS: EffectRule(
        keyword="callsInPlace",
        min_arguments=1,
        max_arguments=1,
        conclusion_required=False,
        conclusion_allowed=False,
        invocation_kind_required=True
    ),
}


def _describe_arguments(arguments: Tuple[ContractEffectExpression, ...]) -> str:
    return "[" + ", ".join(str(argument) for argument in arguments) + "]"


def validate_effect(effect_type: ContractEffectType,
                    constructor_arguments: Tuple[ContractEffectExpression, ...],
                    conclusion: Optional[ContractEffectExpression],
                    invocation_kind: Optional[ContractInvocationKind]) -> None:
    """Raise ValueError if the effect violates its type's rule"""
    rule = EFFECT_RULES[effect_type]
    count = len(constructor_arguments)
    if not rule.min_arguments <= count <= rule.max_arguments:
        if rule.max_arguments == 0:
            expected = "cannot have constructor arguments"
        elif rule.min_arguments == rule.max_arguments:
            expected = f"require exactly {rule.min_arguments} constructor argument"
        else:
            expected = (f"require exactly {rule.min_arguments} or {rule.max_arguments} "
                        f"constructor argument")
        raise ValueError(f"{rule.keyword} effects {expected} but received "
                         f"{_describe_arguments(constructor_arguments)}")
    if rule.conclusion_required and conclusion is None:
        raise ValueError(f"{rule.keyword} effects must have a conclusion")
    if not rule.conclusion_allowed and conclusion is not None:
        raise ValueError(f"{rule.keyword} effects cannot have a conclusion but received {conclusion}")
    if rule.invocation_kind_required and invocation_kind is None:
        raise ValueError(f"{rule.keyword} effects require an invocation kind")
    if not rule.invocation_kind_required and invocation_kind is not None:
        raise ValueError(f"{rule.keyword} effects cannot have an invocation kind but received "
                         f"{invocation_kind.value}")


class ContractEffect(TaggableSpec):
    """
    An effect (a part of the contract of a function).

    Attributes:
        type: The effect type
        invocation_kind: How many times a CALLS effect's lambda parameter is invoked
        constructor_arguments: The constant for RETURNS_CONSTANT, or the
            parameter reference for CALLS
        conclusion: Right-hand side of the implication, if any
    """

    def __init__(self, builder: "ContractEffect.Builder"):
        self.type: ContractEffectType = builder.type
        self.invocation_kind: Optional[ContractInvocationKind] = builder.invocation_kind
        self.constructor_arguments: Tuple[ContractEffectExpression, ...] = tuple(builder.constructor_arguments)
        self.conclusion: Optional[ContractEffectExpression] = builder.conclusion
        self._tag_map = TagMap(builder.tags)
        validate_effect(self.type, self.constructor_arguments, self.conclusion, self.invocation_kind)
        self._freeze()

    def render(self, function=None) -> str:
        return EffectRenderer(function).render_effect(self)

    def _canonical_text(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ContractEffect({self._canonical_text()!r})"

    def to_builder(self) -> "ContractEffect.Builder":
        builder = ContractEffect.Builder(self.type)
        builder.invocation_kind = self.invocation_kind
        builder.conclusion = self.conclusion
        builder.constructor_arguments.extend(self.constructor_arguments)
        builder.tags.update(self._tag_map.tags)
        return builder

    class Builder:
        """Mutable staging area; build() validates against EFFECT_RULES"""

        def __init__(self, effect_type: ContractEffectType):
            self.type = ContractEffectType(effect_type)
            self.tags: Dict[type, Any] = {}
            self.invocation_kind: Optional[ContractInvocationKind] = None
            self.conclusion: Optional[ContractEffectExpression] = None
            self.constructor_arguments: List[ContractEffectExpression] = []

        def with_invocation_kind(self, invocation_kind: Optional[ContractInvocationKind]) -> "ContractEffect.Builder":
            self.invocation_kind = None if invocation_kind is None else ContractInvocationKind(invocation_kind)
            return self

        def with_conclusion(self, conclusion: Optional[ContractEffectExpression]) -> "ContractEffect.Builder":
            self.conclusion = conclusion
            return self

        def add_constructor_argument(self, argument: ContractEffectExpression) -> "ContractEffect.Builder":
            self.constructor_arguments.append(argument)
            return self

        def add_constructor_arguments(self, arguments: Iterable[ContractEffectExpression]) -> "ContractEffect.Builder":
            self.constructor_arguments.extend(arguments)
            return self

        def tag(self, tag_type: type, value: Any) -> "ContractEffect.Builder":
            self.tags[tag_type] = value
            return self

        def build(self) -> "ContractEffect":
            return ContractEffect(self)

    @staticmethod
    def builder(effect_type: ContractEffectType) -> "ContractEffect.Builder":
        return ContractEffect.Builder(effect_type)

    @staticmethod
    def calls(parameter: Union[ParameterSpec, str],
              invocation_kind: ContractInvocationKind) -> "ContractEffect":
        """
        callsInPlace effect for a lambda parameter.

        A ParameterSpec must have a function type. A bare name is taken as is.
        """
        if isinstance(parameter, ParameterSpec) and not isinstance(parameter.type, LambdaTypeName):
            raise ValueError(f"callsInPlace is only applicable to function parameters. "
                             f"Input was {parameter.type}")
        return (ContractEffect.builder(ContractEffectType.CALLS)
                .with_invocation_kind(invocation_kind)
                .add_constructor_argument(ContractEffectExpression.parameter_reference(parameter))
                .build())

    @staticmethod
    def returns(conclusion: ContractEffectExpression) -> "ContractEffect":
        """returns() implies conclusion"""
        return (ContractEffect.builder(ContractEffectType.RETURNS_CONSTANT)
                .with_conclusion(conclusion)
                .build())

    @staticmethod
    def returns_value(value: Any, conclusion: ContractEffectExpression) -> "ContractEffect":
        """returns(value) implies conclusion"""
        return (ContractEffect.builder(ContractEffectType.RETURNS_CONSTANT)
                .add_constructor_argument(ContractEffectExpression.constant_value(value))
                .with_conclusion(conclusion)
                .build())

    @staticmethod
    def returns_not_null(conclusion: ContractEffectExpression) -> "ContractEffect":
        """returnsNotNull() implies conclusion"""
        return (ContractEffect.builder(ContractEffectType.RETURNS_NOT_NULL)
                .with_conclusion(conclusion)
                .build())
