"""
Document models for describing functions and contracts as JSON
"""
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from contractpoet.core.models import ContractEffectType, ContractInvocationKind
from contractpoet.poet.functions import KModifier


class ClassTypeDocument(BaseModel):
    """A class type, e.g. {"class_name": "kotlin.String", "nullable": true}"""
    model_config = ConfigDict(extra="forbid")

    class_name: str
    nullable: bool = False


class LambdaTypeDocument(BaseModel):
    """A function type, e.g. (kotlin.String) -> kotlin.String"""
    model_config = ConfigDict(extra="forbid")

    parameters: List["TypeDocument"] = Field(default_factory=list)
    returns: Optional["TypeDocument"] = None
    receiver: Optional["TypeDocument"] = None
    nullable: bool = False


# A bare string is shorthand for a class type: "kotlin.String?"
TypeDocument = Union[str, ClassTypeDocument, LambdaTypeDocument]


class ParameterDocument(BaseModel):
    name: str
    type: TypeDocument
    modifiers: List[KModifier] = Field(default_factory=list)


class FunctionDocument(BaseModel):
    name: str
    modifiers: List[KModifier] = Field(default_factory=list)
    receiver: Optional[TypeDocument] = None
    returns: Optional[TypeDocument] = None
    parameters: List[ParameterDocument] = Field(default_factory=list)
    body: List[str] = Field(default_factory=list)


class ExpressionDocument(BaseModel):
    """
    An effect expression.

    Exactly one of null_check / constant_value / instance_type is expected
    when parameter_index is set; without it, constant_value is emitted verbatim.
    """
    model_config = ConfigDict(populate_by_name=True)

    parameter_index: Optional[int] = None
    negated: bool = False
    null_check: bool = False
    constant_value: Optional[Union[bool, int, float, str]] = None
    instance_type: Optional[TypeDocument] = None
    and_arguments: List["ExpressionDocument"] = Field(default_factory=list, alias="and")
    or_arguments: List["ExpressionDocument"] = Field(default_factory=list, alias="or")


class EffectDocument(BaseModel):
    """
    A contract effect.

    Either give the raw type/constructor_arguments/conclusion/invocation_kind,
    or use "calls": "<parameter name>" to reference a lambda parameter of the
    function, which is then type-checked.
    """
    type: Optional[ContractEffectType] = None
    calls: Optional[str] = None
    invocation_kind: Optional[ContractInvocationKind] = None
    constructor_arguments: List[ExpressionDocument] = Field(default_factory=list)
    conclusion: Optional[ExpressionDocument] = None


class ContractDocument(BaseModel):
    effects: List[EffectDocument] = Field(default_factory=list)


class RenderDocument(BaseModel):
    """A function together with the contract to attach to it"""
    function: FunctionDocument
    contract: ContractDocument


LambdaTypeDocument.model_rebuild()
ExpressionDocument.model_rebuild()
