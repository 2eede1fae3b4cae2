"""
Function and parameter declarations that contracts are attached to
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from .types import TypeName

if TYPE_CHECKING:
    from ..core.contracts import Contract


class KModifier(str, Enum):
    """Declaration modifiers, listed in emission order"""
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    INTERNAL = "internal"
    OVERRIDE = "override"
    TAILREC = "tailrec"
    SUSPEND = "suspend"
    INLINE = "inline"
    INFIX = "infix"
    OPERATOR = "operator"
    VARARG = "vararg"
    NOINLINE = "noinline"
    CROSSINLINE = "crossinline"

    @classmethod
    def sorted(cls, modifiers: Iterable["KModifier"]) -> Tuple["KModifier", ...]:
        order = list(cls)
        return tuple(sorted(set(modifiers), key=order.index))


@dataclass(frozen=True)
class ParameterSpec:
    """A declared function parameter"""
    name: str
    type: TypeName
    modifiers: Tuple[KModifier, ...] = ()

    def __post_init__(self):
        if not self.name:
            raise ValueError("parameter name must not be empty")
        object.__setattr__(self, "modifiers", KModifier.sorted(self.modifiers))


@dataclass(frozen=True)
class FunSpec:
    """
    A function declaration.

    body holds code fragments in order; each fragment is emitted verbatim
    and is expected to end with a newline.
    """
    name: str
    parameters: Tuple[ParameterSpec, ...] = ()
    modifiers: Tuple[KModifier, ...] = ()
    receiver: Optional[TypeName] = None
    returns: Optional[TypeName] = None
    body: Tuple[str, ...] = field(default=())

    @property
    def is_inline(self) -> bool:
        return KModifier.INLINE in self.modifiers

    @property
    def code(self) -> str:
        return "".join(self.body)

    @staticmethod
    def builder(name: str) -> "FunSpec.Builder":
        return FunSpec.Builder(name)

    def to_builder(self) -> "FunSpec.Builder":
        builder = FunSpec.Builder(self.name)
        builder.parameters.extend(self.parameters)
        builder.modifiers.extend(self.modifiers)
        builder.receiver_type = self.receiver
        builder.return_type = self.returns
        builder.body.extend(self.body)
        return builder

    def with_contract(self, contract: "Contract") -> "FunSpec":
        from ..core.contracts import with_contract
        return with_contract(self, contract)

    def __str__(self) -> str:
        from ..generators.kotlin import generate_function_source
        return generate_function_source(self)

    class Builder:
        """Mutable staging area for a FunSpec"""

        def __init__(self, name: str):
            self.name = name
            self.parameters: List[ParameterSpec] = []
            self.modifiers: List[KModifier] = []
            self.receiver_type: Optional[TypeName] = None
            self.return_type: Optional[TypeName] = None
            self.body: List[str] = []

        def add_modifiers(self, *modifiers: KModifier) -> "FunSpec.Builder":
            self.modifiers.extend(modifiers)
            return self

        def add_parameter(self, parameter: ParameterSpec) -> "FunSpec.Builder":
            self.parameters.append(parameter)
            return self

        def add_parameters(self, parameters: Iterable[ParameterSpec]) -> "FunSpec.Builder":
            self.parameters.extend(parameters)
            return self

        def receiver(self, receiver_type: Optional[TypeName]) -> "FunSpec.Builder":
            self.receiver_type = receiver_type
            return self

        def returns(self, return_type: Optional[TypeName]) -> "FunSpec.Builder":
            self.return_type = return_type
            return self

        def add_code(self, code: str) -> "FunSpec.Builder":
            if code:
                self.body.append(code)
            return self

        def add_statement(self, statement: str) -> "FunSpec.Builder":
            return self.add_code(statement + "\n")

        def build(self) -> "FunSpec":
            names = [p.name for p in self.parameters]
            duplicates = sorted({n for n in names if names.count(n) > 1})
            if duplicates:
                raise ValueError(f"duplicate parameter names: {', '.join(duplicates)}")
            return FunSpec(
                name=self.name,
                parameters=tuple(self.parameters),
                modifiers=KModifier.sorted(self.modifiers),
                receiver=self.receiver_type,
                returns=self.return_type,
                body=tuple(self.body)
            )
