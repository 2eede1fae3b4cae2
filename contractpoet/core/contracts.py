"""
Contracts: ordered effects rendered as a contract block at the top of a function
"""

from typing import Any, Dict, Iterable, Iterator, List, Tuple

from .base import TagMap, TaggableSpec
from .effects import ContractEffect
from .expressions import ContractEffectExpression
from .models import ContractEffectType
from ..poet.functions import FunSpec
from ..translators.effects import EffectRenderer


class Contract(TaggableSpec):
    """A contract of a function: one or more effects"""

    def __init__(self, builder: "Contract.Builder"):
        self.effects: Tuple[ContractEffect, ...] = tuple(builder.effects)
        self._tag_map = TagMap(builder.tags)
        if not self.effects:
            raise ValueError("Contract must have at least one effect!")
        self._freeze()

    @property
    def has_calls_in_place(self) -> bool:
        return any(effect.type == ContractEffectType.CALLS for effect in self.effects)

    def render(self, function: FunSpec) -> str:
        """Render the contract block for the given function"""
        return EffectRenderer(function).render_contract(self)

    def _canonical_text(self) -> str:
        return EffectRenderer().render_contract(self)

    def __repr__(self) -> str:
        return f"Contract({self._canonical_text()!r})"

    def to_builder(self) -> "Contract.Builder":
        builder = Contract.Builder()
        builder.add_effects(self.effects)
        builder.tags.update(self._tag_map.tags)
        return builder

    class Builder:
        """Mutable staging area; build() requires at least one effect"""

        def __init__(self):
            self.tags: Dict[type, Any] = {}
            self.effects: List[ContractEffect] = []

        def add_effect(self, effect: ContractEffect) -> "Contract.Builder":
            self.effects.append(effect)
            return self

        def add_effects(self, effects: Iterable[ContractEffect]) -> "Contract.Builder":
            self.effects.extend(effects)
            return self

        def tag(self, tag_type: type, value: Any) -> "Contract.Builder":
            self.tags[tag_type] = value
            return self

        def build(self) -> "Contract":
            return Contract(self)

    @staticmethod
    def builder() -> "Contract.Builder":
        return Contract.Builder()


def _walk(expression: ContractEffectExpression) -> Iterator[ContractEffectExpression]:
    yield expression
    for argument in expression.and_arguments + expression.or_arguments:
        yield from _walk(argument)


def referenced_parameter_indices(contract: Contract) -> List[int]:
    """All parameter indices referenced by the contract's expressions, sorted"""
    indices = set()
    for effect in contract.effects:
        roots = list(effect.constructor_arguments)
        if effect.conclusion is not None:
            roots.append(effect.conclusion)
        for root in roots:
            indices.update(e.parameter_index for e in _walk(root) if e.parameter_index is not None)
    return sorted(indices)


def with_contract(function: FunSpec, contract: Contract) -> FunSpec:
    """
    Return a copy of function whose body starts with the rendered contract.

    Raises:
        ValueError: If the contract has callsInPlace effects and the function
            is not inline, or if it references a parameter the function
            doesn't declare
    """
    if contract.has_calls_in_place and not function.is_inline:
        raise ValueError("functions with callsInPlace effects must be inline!")

    for index in referenced_parameter_indices(contract):
        if index > len(function.parameters):
            raise ValueError(f"contract references parameter {index} but {function.name} "
                             f"declares {len(function.parameters)} parameter(s)")

    contract_code = contract.render(function)
    builder = FunSpec.builder(function.name)
    builder.add_parameters(function.parameters)
    builder.add_modifiers(*function.modifiers)
    builder.receiver(function.receiver).returns(function.returns)
    builder.add_code(contract_code)
    for code in function.body:
        builder.add_code(code)
    return builder.build()
