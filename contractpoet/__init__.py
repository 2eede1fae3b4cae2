"""
contractpoet: builders for function contracts and their source rendering
"""

from .core.models import ContractEffectType, ContractInvocationKind
from .core.expressions import ContractEffectExpression
from .core.effects import ContractEffect
from .core.contracts import Contract, with_contract
from .poet.types import ClassName, LambdaTypeName, TypeName
from .poet.functions import FunSpec, KModifier, ParameterSpec

__version__ = "0.1.0"
__all__ = [
    "Contract",
    "ContractEffect",
    "ContractEffectExpression",
    "ContractEffectType",
    "ContractInvocationKind",
    "with_contract",
    "ClassName",
    "LambdaTypeName",
    "TypeName",
    "FunSpec",
    "KModifier",
    "ParameterSpec"
]
