"""
Type references for generated function signatures
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple


class TypeName:
    """Base class for renderable type references"""

    nullable: bool = False

    def copy(self, nullable: Optional[bool] = None) -> "TypeName":
        return replace(self, nullable=self.nullable if nullable is None else nullable)

    def render(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class ClassName(TypeName):
    """Fully-qualified class reference, e.g. kotlin.String"""
    package_name: str
    simple_names: Tuple[str, ...]
    nullable: bool = False

    def __post_init__(self):
        if not self.simple_names:
            raise ValueError("ClassName requires at least one simple name")
        object.__setattr__(self, "simple_names", tuple(self.simple_names))

    @classmethod
    def of(cls, package_name: str, *simple_names: str, nullable: bool = False) -> "ClassName":
        return cls(package_name, tuple(simple_names), nullable)

    @property
    def simple_name(self) -> str:
        return self.simple_names[-1]

    @property
    def canonical_name(self) -> str:
        names = ".".join(self.simple_names)
        return f"{self.package_name}.{names}" if self.package_name else names

    def render(self) -> str:
        return self.canonical_name + ("?" if self.nullable else "")

    @classmethod
    def best_guess(cls, name: str) -> "ClassName":
        """
        Guess a ClassName from a dotted name. Segments starting with an
        uppercase letter are treated as class names.

            "kotlin.String" -> ClassName("kotlin", ("String",))
            "java.util.Map.Entry" -> ClassName("java.util", ("Map", "Entry"))
        """
        parts = name.split(".")
        split_at = next((i for i, part in enumerate(parts) if part[:1].isupper()), None)
        if split_at is None:
            raise ValueError(f"couldn't make a guess for {name}")
        return cls(".".join(parts[:split_at]), tuple(parts[split_at:]))

    @classmethod
    def from_metadata_name(cls, metadata_name: str) -> "ClassName":
        """
        Best-guess a ClassName from a compiled metadata name, where package
        segments are separated by '/' and nested classes by '.'.

        For example: "org/foo/bar/Baz.Nested".
        """
        if metadata_name.startswith("."):
            raise ValueError("Local/anonymous classes are not supported!")
        package_name, _, class_part = metadata_name.rpartition("/")
        return cls(package_name.replace("/", "."), tuple(class_part.split(".")))


@dataclass(frozen=True)
class LambdaTypeName(TypeName):
    """Function type, e.g. (kotlin.String) -> kotlin.String"""
    parameters: Tuple[TypeName, ...] = ()
    return_type: TypeName = field(default=None)
    receiver: Optional[TypeName] = None
    nullable: bool = False

    def __post_init__(self):
        object.__setattr__(self, "parameters", tuple(self.parameters))
        if self.return_type is None:
            object.__setattr__(self, "return_type", UNIT)

    def render(self) -> str:
        params = ", ".join(p.render() for p in self.parameters)
        text = f"({params}) -> {self.return_type.render()}"
        if self.receiver is not None:
            receiver = self.receiver.render()
            if isinstance(self.receiver, LambdaTypeName):
                receiver = f"({receiver})"
            text = f"{receiver}.{text}"
        if self.nullable:
            return f"({text})?"
        return text


ANY = ClassName.of("kotlin", "Any")
BOOLEAN = ClassName.of("kotlin", "Boolean")
INT = ClassName.of("kotlin", "Int")
LONG = ClassName.of("kotlin", "Long")
STRING = ClassName.of("kotlin", "String")
UNIT = ClassName.of("kotlin", "Unit")
NOTHING = ClassName.of("kotlin", "Nothing")
