"""
Shapes of contracts as stored in compiled metadata, and a reader for JSON dumps of them.

Dump format:
    {
        "effects": [
            {
                "type": "RETURNS_CONSTANT" | "CALLS" | "RETURNS_NOT_NULL",
                "invocation_kind": "AT_MOST_ONCE" | "EXACTLY_ONCE" | "AT_LEAST_ONCE" | null,
                "constructor_arguments": [<expression>, ...],
                "conclusion": <expression> | null
            }
        ]
    }

    <expression>:
        {
            "flags": int,                    # bit 0 negated, bit 1 null check
            "parameter_index": int | null,
            "constant_value": {"value": any} | null,
            "is_instance_type": {"classifier": {"kind": "class" | "type_parameter" | "type_alias", ...},
                                 "nullable": bool} | null,
            "and_arguments": [<expression>, ...],
            "or_arguments": [<expression>, ...]
        }
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, ValidationError

IS_NEGATED = 1 << 0
IS_NULL_CHECK_PREDICATE = 1 << 1


class KmEffectType(str, Enum):
    RETURNS_CONSTANT = "RETURNS_CONSTANT"
    CALLS = "CALLS"
    RETURNS_NOT_NULL = "RETURNS_NOT_NULL"


class KmEffectInvocationKind(str, Enum):
    AT_MOST_ONCE = "AT_MOST_ONCE"
    EXACTLY_ONCE = "EXACTLY_ONCE"
    AT_LEAST_ONCE = "AT_LEAST_ONCE"


@dataclass
class KmClassifierClass:
    name: str  # e.g. "kotlin/String" or "org/foo/Bar.Nested"


@dataclass
class KmClassifierTypeParameter:
    id: int


@dataclass
class KmClassifierTypeAlias:
    name: str


KmClassifier = Union[KmClassifierClass, KmClassifierTypeParameter, KmClassifierTypeAlias]


@dataclass
class KmType:
    classifier: KmClassifier
    nullable: bool = False


@dataclass
class KmConstantValue:
    value: Any


@dataclass
class KmEffectExpression:
    flags: int = 0
    parameter_index: Optional[int] = None
    constant_value: Optional[KmConstantValue] = None
    is_instance_type: Optional[KmType] = None
    and_arguments: List["KmEffectExpression"] = field(default_factory=list)
    or_arguments: List["KmEffectExpression"] = field(default_factory=list)

    @property
    def is_negated(self) -> bool:
        return bool(self.flags & IS_NEGATED)

    @property
    def is_null_check_predicate(self) -> bool:
        return bool(self.flags & IS_NULL_CHECK_PREDICATE)


@dataclass
class KmEffect:
    type: KmEffectType
    invocation_kind: Optional[KmEffectInvocationKind] = None
    constructor_arguments: List[KmEffectExpression] = field(default_factory=list)
    conclusion: Optional[KmEffectExpression] = None


@dataclass
class KmContract:
    effects: List[KmEffect] = field(default_factory=list)


# ============================================================================
# JSON dump documents
# ============================================================================

class ClassClassifierDump(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["class"]
    name: str


class TypeParameterClassifierDump(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["type_parameter"]
    id: int


class TypeAliasClassifierDump(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["type_alias"]
    name: str


ClassifierDump = Annotated[
    Union[ClassClassifierDump, TypeParameterClassifierDump, TypeAliasClassifierDump],
    Field(discriminator="kind")
]


class TypeDump(BaseModel):
    classifier: ClassifierDump
    nullable: bool = False


class ConstantValueDump(BaseModel):
    value: Union[StrictBool, StrictInt, float, str, None]


class ExpressionDump(BaseModel):
    flags: StrictInt = 0
    parameter_index: Optional[StrictInt] = None
    constant_value: Optional[ConstantValueDump] = None
    is_instance_type: Optional[TypeDump] = None
    and_arguments: List["ExpressionDump"] = Field(default_factory=list)
    or_arguments: List["ExpressionDump"] = Field(default_factory=list)


class EffectDump(BaseModel):
    type: KmEffectType
    invocation_kind: Optional[KmEffectInvocationKind] = None
    constructor_arguments: List[ExpressionDump] = Field(default_factory=list)
    conclusion: Optional[ExpressionDump] = None


class ContractDump(BaseModel):
    effects: List[EffectDump] = Field(default_factory=list)


ExpressionDump.model_rebuild()


def _to_classifier(dump: ClassifierDump) -> KmClassifier:
    if isinstance(dump, ClassClassifierDump):
        return KmClassifierClass(name=dump.name)
    if isinstance(dump, TypeParameterClassifierDump):
        return KmClassifierTypeParameter(id=dump.id)
    return KmClassifierTypeAlias(name=dump.name)


def _to_expression(dump: ExpressionDump) -> KmEffectExpression:
    instance_type = dump.is_instance_type
    return KmEffectExpression(
        flags=dump.flags,
        parameter_index=dump.parameter_index,
        constant_value=KmConstantValue(dump.constant_value.value) if dump.constant_value is not None else None,
        is_instance_type=(KmType(_to_classifier(instance_type.classifier), instance_type.nullable)
                          if instance_type is not None else None),
        and_arguments=[_to_expression(e) for e in dump.and_arguments],
        or_arguments=[_to_expression(e) for e in dump.or_arguments]
    )


def _to_effect(dump: EffectDump) -> KmEffect:
    return KmEffect(
        type=dump.type,
        invocation_kind=dump.invocation_kind,
        constructor_arguments=[_to_expression(e) for e in dump.constructor_arguments],
        conclusion=_to_expression(dump.conclusion) if dump.conclusion is not None else None
    )


def read_contract(data: Any) -> KmContract:
    """
    Read a JSON dump of a compiled contract.

    Raises:
        ValueError: If the dump doesn't match the format above
    """
    try:
        dump = ContractDump.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid contract metadata: {e}") from e
    return KmContract(effects=[_to_effect(e) for e in dump.effects])
