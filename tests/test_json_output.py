#!/usr/bin/env python3
"""
Test the JSON report and its integrity hashes.
"""

import json

import pytest

from contractpoet import Contract, ContractEffect, ContractEffectExpression, FunSpec, ParameterSpec
from contractpoet.output import RenderJSONFormatter
from contractpoet.poet.types import STRING
from contractpoet.utils.hashing import ArtifactHasher


def rendered():
    function = (FunSpec.builder("check")
                .add_parameter(ParameterSpec("value", STRING.copy(nullable=True)))
                .build())
    contract = (Contract.builder()
                .add_effect(ContractEffect.returns(ContractEffectExpression.null_check(1, True)))
                .build())
    return function, contract, str(function.with_contract(contract))


def test_report_structure():
    function, contract, source = rendered()
    formatter = RenderJSONFormatter("doc.json")
    formatter.add_result(function, contract, source)

    data = json.loads(formatter.to_json_string())
    assert data["schema_version"] == RenderJSONFormatter.SCHEMA_VERSION
    assert data["metadata"]["source_file"] == "doc.json"
    assert data["summary"] == {"total_functions": 1, "total_effects": 1}

    [result] = data["results"]
    assert result["function"] == {"name": "check", "parameters": ["value"], "modifiers": []}
    assert result["contract"]["effects"] == ["returns() implies (value != null)"]
    assert result["source"] == source


def test_verify_integrity():
    """Test hashes match the artifacts and catch tampering"""
    function, contract, source = rendered()
    formatter = RenderJSONFormatter("doc.json")
    formatter.add_result(function, contract, source)
    [result] = formatter.generate()["results"]

    assert ArtifactHasher.verify_integrity(result, contract.render(function), source)["valid"]

    tampered = ArtifactHasher.verify_integrity(result, contract.render(function), source + "// edited\n")
    assert not tampered["valid"]
    assert tampered["contract_match"]
    assert not tampered["source_match"]


def test_save_to_file(tmp_path):
    function, contract, source = rendered()
    formatter = RenderJSONFormatter(str(tmp_path / "doc.json"))
    formatter.add_result(function, contract, source)

    path = tmp_path / "nested" / "report.json"
    formatter.save_to_file(str(path))

    data = json.loads(path.read_text())
    assert data["summary"]["total_functions"] == 1
    assert data["metadata"]["source_file_hash"] is None


def test_report_fingerprints_source_document(tmp_path):
    """Test the report records the hash of the document it was rendered from"""
    document = tmp_path / "doc.json"
    document.write_text('{"function": {"name": "check"}}')
    function, contract, source = rendered()
    formatter = RenderJSONFormatter(str(document))
    formatter.add_result(function, contract, source)

    metadata = formatter.generate()["metadata"]
    assert metadata["source_file_hash"] == ArtifactHasher.hash_string(document.read_text())
    assert ArtifactHasher.hash_file(str(tmp_path / "missing.json")) is None
    assert ArtifactHasher.hash_file(str(tmp_path)) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
