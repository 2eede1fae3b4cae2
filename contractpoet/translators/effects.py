"""
Contract model translation to source text
"""

from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from ..core.config import (
    AND_SEPARATOR,
    CALLS_IN_PLACE_KEYWORD,
    CONTRACT_MEMBER,
    EQUALS_OPERATOR,
    IMPLIES_KEYWORD,
    INDENT,
    INSTANCE_OPERATOR,
    NULL_LITERAL,
    OR_SEPARATOR,
    PLACEHOLDER_PARAMETER,
    RECEIVER_PREFIX,
    RETURNS_KEYWORD,
    RETURNS_NOT_NULL_KEYWORD,
)
from ..core.models import ContractEffectType

if TYPE_CHECKING:
    from ..core.contracts import Contract
    from ..core.effects import ContractEffect
    from ..core.expressions import ContractEffectExpression
    from ..poet.functions import FunSpec


class EffectRenderer:
    """
    Renders expressions, effects and contracts against one function.

    With no function bound, parameters render as positional placeholders
    ($1, $2, ...) and the receiver as a bare "this@". That form is the
    canonical text used for equality.
    """

    def __init__(self, function: Optional["FunSpec"] = None):
        self.function = function
        self._effect_emitters: Dict[ContractEffectType, Callable[["ContractEffect"], str]] = {
            ContractEffectType.RETURNS_CONSTANT: self._emit_returns,
            ContractEffectType.CALLS: self._emit_calls,
            ContractEffectType.RETURNS_NOT_NULL: self._emit_returns_not_null,
        }

    def parameter_token(self, parameter_index: int) -> str:
        if self.function is None:
            if parameter_index == 0:
                return RECEIVER_PREFIX
            return PLACEHOLDER_PARAMETER.format(index=parameter_index)
        if parameter_index == 0:
            return f"{RECEIVER_PREFIX}{self.function.name}"
        parameters = self.function.parameters
        if parameter_index > len(parameters):
            raise ValueError(f"contract references parameter {parameter_index} but {self.function.name} "
                             f"declares {len(parameters)} parameter(s)")
        return parameters[parameter_index - 1].name

    def render_expression(self, expression: "ContractEffectExpression",
                          suppress_enclosing_parens: bool = False) -> str:
        parts: List[str] = []
        if not suppress_enclosing_parens:
            parts.append("(")

        if expression.parameter_index is not None:
            parameter = self.parameter_token(expression.parameter_index)
            if expression.is_null_check_predicate:
                parts.append(f"{parameter} {EQUALS_OPERATOR[expression.is_negated]} {NULL_LITERAL}")
            elif expression.constant_value is not None:
                parts.append(f"{parameter} {EQUALS_OPERATOR[expression.is_negated]} {expression.constant_value}")
            elif expression.is_instance_type is not None:
                parts.append(f"{parameter} {INSTANCE_OPERATOR[expression.is_negated]} "
                             f"{expression.is_instance_type.render()}")
            else:
                # Boolean parameter used directly as the proposition
                parts.append(parameter)

            # and-arguments always precede or-arguments, whatever the call order
            for argument in expression.and_arguments:
                parts.append(AND_SEPARATOR)
                parts.append(self.render_expression(argument))
            for argument in expression.or_arguments:
                parts.append(OR_SEPARATOR)
                parts.append(self.render_expression(argument))
        else:
            # Boolean receiver constant, returns() value, or callsInPlace() parameter name
            parts.append(expression.constant_value)

        if not suppress_enclosing_parens:
            parts.append(")")
        return "".join(parts)

    def render_effect(self, effect: "ContractEffect") -> str:
        text = self._effect_emitters[effect.type](effect)
        if effect.conclusion is not None:
            text += IMPLIES_KEYWORD + self.render_expression(effect.conclusion)
        return text

    def render_contract(self, contract: "Contract") -> str:
        lines = [f"{CONTRACT_MEMBER} {{"]
        lines.extend(INDENT + self.render_effect(effect) for effect in contract.effects)
        lines.append("}")
        return "\n".join(lines) + "\n"

    def _emit_returns(self, effect: "ContractEffect") -> str:
        if effect.constructor_arguments:
            return RETURNS_KEYWORD + self.render_expression(effect.constructor_arguments[0])
        return f"{RETURNS_KEYWORD}()"

    def _emit_calls(self, effect: "ContractEffect") -> str:
        target = self.render_expression(effect.constructor_arguments[0], suppress_enclosing_parens=True)
        return f"{CALLS_IN_PLACE_KEYWORD}({target}, {effect.invocation_kind.token})"

    def _emit_returns_not_null(self, effect: "ContractEffect") -> str:
        return RETURNS_NOT_NULL_KEYWORD
