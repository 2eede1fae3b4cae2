"""
Kotlin function source generation
"""

import textwrap

from ..core.config import INDENT, MAX_INLINE_PARAMETERS
from ..poet.functions import FunSpec, ParameterSpec
from ..poet.types import UNIT, LambdaTypeName


def indent_block(text: str, prefix: str = INDENT) -> str:
    """Indent every non-empty line of a block"""
    return textwrap.indent(text, prefix)


def render_parameter(parameter: ParameterSpec) -> str:
    modifiers = "".join(f"{m.value} " for m in parameter.modifiers)
    return f"{modifiers}{parameter.name}: {parameter.type.render()}"


def generate_function_source(function: FunSpec) -> str:
    """
    Generate the source of a function declaration.

    Args:
        function: The function to emit

    Returns:
        Source text ending with a newline
    """
    header = "".join(f"{m.value} " for m in function.modifiers) + "fun "

    if function.receiver is not None:
        receiver = function.receiver.render()
        if isinstance(function.receiver, LambdaTypeName) and not function.receiver.nullable:
            receiver = f"({receiver})"
        header += f"{receiver}."
    header += function.name

    params = [render_parameter(p) for p in function.parameters]
    if len(params) > MAX_INLINE_PARAMETERS:
        header += "(\n" + indent_block(",\n".join(params)) + "\n)"
    else:
        header += "(" + ", ".join(params) + ")"

    if function.returns is not None and function.returns != UNIT:
        header += f": {function.returns.render()}"

    return f"{header} {{\n{indent_block(function.code)}}}\n"
