"""
Effect expressions: the propositions used inside contract effects
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .base import TagMap, TaggableSpec
from .config import NULL_LITERAL
from ..poet.functions import ParameterSpec
from ..poet.types import TypeName
from ..translators.effects import EffectRenderer


def literal(value: Any) -> str:
    """Render a Python value as a source literal token"""
    if value is None:
        return NULL_LITERAL
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _require_parameter_index(parameter_index: int) -> None:
    if parameter_index < 0:
        raise ValueError(f"parameter_index must be >= 0 but was {parameter_index}")


class ContractEffectExpression(TaggableSpec):
    """
    An effect expression, the contents of an effect.

    Attributes:
        is_negated: The proposition is negated (!= / !is instead of == / is)
        is_null_check_predicate: Checks whether the target value is null
        parameter_index: 1-based index of the value parameter; 0 means the
            receiver. None for bare constants and parameter references.
        constant_value: Literal token compared against, or emitted verbatim
            when there is no parameter_index
        is_instance_type: Target type of an is-check
        and_arguments: Conjuncts rendered after this proposition
        or_arguments: Disjuncts rendered after all conjuncts
    """

    def __init__(self, builder: "ContractEffectExpression.Builder"):
        self.is_negated: bool = builder.is_negated
        self.is_null_check_predicate: bool = builder.is_null_check_predicate
        self.parameter_index: Optional[int] = builder.parameter_index
        self.constant_value: Optional[str] = builder.constant_value
        self.is_instance_type: Optional[TypeName] = builder.is_instance_type
        self.and_arguments: Tuple["ContractEffectExpression", ...] = tuple(builder.and_arguments)
        self.or_arguments: Tuple["ContractEffectExpression", ...] = tuple(builder.or_arguments)
        self._tag_map = TagMap(builder.tags)

        if self.parameter_index is not None:
            _require_parameter_index(self.parameter_index)
        predicates = [
            name for name, active in (
                ("null check", self.is_null_check_predicate),
                ("constant value", self.constant_value is not None),
                ("instance check", self.is_instance_type is not None),
            ) if active
        ]
        if len(predicates) > 1:
            raise ValueError(f"an effect expression can only have one predicate but received "
                             f"{' and '.join(predicates)}")
        if self.parameter_index is None and self.constant_value is None:
            raise ValueError("an effect expression without a parameter_index requires a constant_value")
        self._freeze()

    def render(self, function=None, suppress_enclosing_parens: bool = False) -> str:
        return EffectRenderer(function).render_expression(self, suppress_enclosing_parens)

    def _canonical_text(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ContractEffectExpression({self._canonical_text()!r})"

    def to_builder(self) -> "ContractEffectExpression.Builder":
        builder = ContractEffectExpression.Builder()
        builder.is_negated = self.is_negated
        builder.is_null_check_predicate = self.is_null_check_predicate
        builder.parameter_index = self.parameter_index
        builder.constant_value = self.constant_value
        builder.is_instance_type = self.is_instance_type
        builder.and_arguments.extend(self.and_arguments)
        builder.or_arguments.extend(self.or_arguments)
        builder.tags.update(self._tag_map.tags)
        return builder

    def and_(self, and_argument: "ContractEffectExpression") -> "ContractEffectExpression":
        return self.to_builder().add_and_argument(and_argument).build()

    def or_(self, or_argument: "ContractEffectExpression") -> "ContractEffectExpression":
        return self.to_builder().add_or_argument(or_argument).build()

    __and__ = and_
    __or__ = or_

    class Builder:
        """Mutable staging area; build() snapshots it"""

        def __init__(self):
            self.tags: Dict[type, Any] = {}
            self.is_negated = False
            self.is_null_check_predicate = False
            self.parameter_index: Optional[int] = None
            self.constant_value: Optional[str] = None
            self.is_instance_type: Optional[TypeName] = None
            self.and_arguments: List["ContractEffectExpression"] = []
            self.or_arguments: List["ContractEffectExpression"] = []

        def negated(self, is_negated: bool = True) -> "ContractEffectExpression.Builder":
            self.is_negated = is_negated
            return self

        def null_check_predicate(self, is_null_check_predicate: bool = True) -> "ContractEffectExpression.Builder":
            self.is_null_check_predicate = is_null_check_predicate
            return self

        def parameter(self, parameter_index: Optional[int]) -> "ContractEffectExpression.Builder":
            self.parameter_index = parameter_index
            return self

        def constant(self, value: Any) -> "ContractEffectExpression.Builder":
            self.constant_value = value if value is None or isinstance(value, str) else literal(value)
            return self

        def instance_type(self, type_name: Optional[TypeName]) -> "ContractEffectExpression.Builder":
            self.is_instance_type = type_name
            return self

        def add_and_argument(self, argument: "ContractEffectExpression") -> "ContractEffectExpression.Builder":
            self.and_arguments.append(argument)
            return self

        def add_and_arguments(self, arguments: Iterable["ContractEffectExpression"]) -> "ContractEffectExpression.Builder":
            self.and_arguments.extend(arguments)
            return self

        def add_or_argument(self, argument: "ContractEffectExpression") -> "ContractEffectExpression.Builder":
            self.or_arguments.append(argument)
            return self

        def add_or_arguments(self, arguments: Iterable["ContractEffectExpression"]) -> "ContractEffectExpression.Builder":
            self.or_arguments.extend(arguments)
            return self

        def tag(self, tag_type: type, value: Any) -> "ContractEffectExpression.Builder":
            self.tags[tag_type] = value
            return self

        def build(self) -> "ContractEffectExpression":
            return ContractEffectExpression(self)

    @staticmethod
    def builder() -> "ContractEffectExpression.Builder":
        return ContractEffectExpression.Builder()

    @staticmethod
    def constant_value(value: Any,
                       parameter_index: Optional[int] = None,
                       is_negated: bool = False) -> "ContractEffectExpression":
        """
        Constant value expression.

        Without a parameter_index this is a bare literal, e.g. true for
        functions with a Boolean receiver or the value inside returns(...).
        With one, it compares that parameter (1-based, 0 is the receiver)
        against the value.
        """
        if parameter_index is None:
            return ContractEffectExpression.builder().constant(value).build()
        _require_parameter_index(parameter_index)
        if literal(value).strip() == NULL_LITERAL:
            raise ValueError("use the null_check() function for null-checked predicates")
        return (ContractEffectExpression.builder()
                .constant(value)
                .parameter(parameter_index)
                .negated(is_negated)
                .build())

    @staticmethod
    def parameter_reference(parameter: Union[ParameterSpec, str]) -> "ContractEffectExpression":
        """Reference to a parameter by name, used in callsInPlace()"""
        name = parameter.name if isinstance(parameter, ParameterSpec) else parameter
        return ContractEffectExpression.builder().constant(name).build()

    @staticmethod
    def is_instance(type_name: TypeName,
                    parameter_index: int,
                    is_negated: bool = False) -> "ContractEffectExpression":
        """Instance check of a parameter (1-based, 0 is the receiver)"""
        _require_parameter_index(parameter_index)
        return (ContractEffectExpression.builder()
                .instance_type(type_name)
                .parameter(parameter_index)
                .negated(is_negated)
                .build())

    @staticmethod
    def null_check(parameter_index: int, is_negated: bool = False) -> "ContractEffectExpression":
        """Null check of a parameter (1-based, 0 is the receiver)"""
        _require_parameter_index(parameter_index)
        return (ContractEffectExpression.builder()
                .null_check_predicate(True)
                .parameter(parameter_index)
                .negated(is_negated)
                .build())
