"""
Parser for JSON documents describing a function and its contract.
"""

import json
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from contractpoet.api_models import (
    ClassTypeDocument,
    EffectDocument,
    ExpressionDocument,
    FunctionDocument,
    RenderDocument,
    TypeDocument,
)
from contractpoet.core.contracts import Contract
from contractpoet.core.effects import ContractEffect
from contractpoet.core.expressions import ContractEffectExpression
from contractpoet.metadata import read_contract, to_contract
from contractpoet.poet.functions import FunSpec, ParameterSpec
from contractpoet.poet.types import ClassName, LambdaTypeName, TypeName


class ContractDocumentParser:
    """
    Build FunSpec/Contract pairs from documents.

    A document has a "function" and either a "contract" (see api_models) or
    a "metadata" entry holding a compiled-metadata dump (see metadata.models).
    """

    def parse_file(self, file_path: str) -> List[Tuple[FunSpec, Contract]]:
        """
        Parse a JSON file holding one document or a list of documents.

        Raises:
            ValueError: If the file isn't valid JSON or a document is invalid
        """
        with open(file_path, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {file_path}: {e}") from e
        documents = data if isinstance(data, list) else [data]
        return [self.parse(document) for document in documents]

    def parse(self, data: Dict[str, Any]) -> Tuple[FunSpec, Contract]:
        if not isinstance(data, dict):
            raise ValueError(f"Invalid document: expected a JSON object but got {type(data).__name__}")
        if "metadata" in data:
            function = self.parse_function(data.get("function"))
            return function, to_contract(read_contract(data["metadata"]))

        try:
            document = RenderDocument.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid contract document: {e}") from e
        return self.build(document)

    def parse_function(self, data: Optional[Dict[str, Any]]) -> FunSpec:
        try:
            document = FunctionDocument.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid function document: {e}") from e
        return self.build_function(document)

    def build(self, document: RenderDocument) -> Tuple[FunSpec, Contract]:
        function = self.build_function(document.function)
        builder = Contract.builder()
        for effect in document.contract.effects:
            builder.add_effect(self.build_effect(effect, function))
        return function, builder.build()

    def build_type(self, document: TypeDocument) -> TypeName:
        if isinstance(document, str):
            nullable = document.endswith("?")
            return ClassName.best_guess(document.rstrip("?")).copy(nullable=nullable)
        if isinstance(document, ClassTypeDocument):
            return ClassName.best_guess(document.class_name).copy(nullable=document.nullable)
        return LambdaTypeName(
            parameters=tuple(self.build_type(p) for p in document.parameters),
            return_type=self.build_type(document.returns) if document.returns is not None else None,
            receiver=self.build_type(document.receiver) if document.receiver is not None else None,
            nullable=document.nullable
        )

    def build_function(self, document: FunctionDocument) -> FunSpec:
        builder = FunSpec.builder(document.name).add_modifiers(*document.modifiers)
        if document.receiver is not None:
            builder.receiver(self.build_type(document.receiver))
        if document.returns is not None:
            builder.returns(self.build_type(document.returns))
        for parameter in document.parameters:
            builder.add_parameter(ParameterSpec(
                name=parameter.name,
                type=self.build_type(parameter.type),
                modifiers=tuple(parameter.modifiers)
            ))
        for statement in document.body:
            builder.add_statement(statement)
        return builder.build()

    def build_expression(self, document: ExpressionDocument) -> ContractEffectExpression:
        if document.parameter_index is not None and document.constant_value is not None:
            # Comparisons go through the factory so "null" is rejected
            builder = ContractEffectExpression.constant_value(
                document.constant_value, document.parameter_index, document.negated).to_builder()
        else:
            builder = (ContractEffectExpression.builder()
                       .parameter(document.parameter_index)
                       .negated(document.negated))
            if document.constant_value is not None:
                builder.constant(document.constant_value)
        builder.null_check_predicate(document.null_check)
        if document.instance_type is not None:
            builder.instance_type(self.build_type(document.instance_type))
        builder.add_and_arguments(self.build_expression(e) for e in document.and_arguments)
        builder.add_or_arguments(self.build_expression(e) for e in document.or_arguments)
        return builder.build()

    def build_effect(self, document: EffectDocument, function: FunSpec) -> ContractEffect:
        if document.calls is not None:
            if document.invocation_kind is None:
                raise ValueError(f"calls effect for '{document.calls}' requires an invocation_kind")
            parameter = next((p for p in function.parameters if p.name == document.calls), None)
            if parameter is None:
                raise ValueError(f"Function '{function.name}' has no parameter named '{document.calls}'")
            return ContractEffect.calls(parameter, document.invocation_kind)

        if document.type is None:
            raise ValueError("effect requires either a type or a calls parameter")
        conclusion = document.conclusion
        return (ContractEffect.builder(document.type)
                .with_invocation_kind(document.invocation_kind)
                .add_constructor_arguments(self.build_expression(e) for e in document.constructor_arguments)
                .with_conclusion(self.build_expression(conclusion) if conclusion is not None else None)
                .build())
