"""
JSON output formatter for rendered contracts.
Generates structured JSON with integrity hashing.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from contractpoet import __version__
from contractpoet.core.contracts import Contract
from contractpoet.poet.functions import FunSpec
from contractpoet.utils.hashing import ArtifactHasher


class RenderJSONFormatter:
    """
    Formats rendering results as structured JSON with integrity hashes.
    """

    SCHEMA_VERSION = "1.0.0"

    def __init__(self, source_file: str):
        """
        Initialize formatter.

        Args:
            source_file: Path to the document the functions were read from
        """
        self.source_file = source_file
        self.results: List[Dict[str, Any]] = []

    def add_result(self, function: FunSpec, contract: Contract, function_source: str) -> None:
        """
        Add a rendered function.

        Args:
            function: The function the contract was attached to (without the contract)
            contract: The attached contract
            function_source: Source of the function with its contract
        """
        contract_text = contract.render(function)
        contract_hash = ArtifactHasher.hash_string(contract_text)
        source_hash = ArtifactHasher.hash_string(function_source)

        self.results.append({
            "function": {
                "name": function.name,
                "parameters": [p.name for p in function.parameters],
                "modifiers": [m.value for m in function.modifiers]
            },
            "contract": {
                "effects": [effect.render(function) for effect in contract.effects],
                "text": contract_text
            },
            "source": function_source,
            "artifacts": {
                "contract_hash": contract_hash,
                "source_hash": source_hash,
                "combined_hash": ArtifactHasher.compute_combined_hash(contract_hash, source_hash)
            }
        })

    def generate(self) -> Dict[str, Any]:
        """
        Generate the complete JSON output structure.

        Returns:
            Dictionary representing the JSON structure
        """
        return {
            "schema_version": self.SCHEMA_VERSION,
            "metadata": {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "source_file": self.source_file,
                "source_file_hash": ArtifactHasher.hash_file(self.source_file),
                "renderer_version": f"contractpoet-{__version__}"
            },
            "summary": {
                "total_functions": len(self.results),
                "total_effects": sum(len(r["contract"]["effects"]) for r in self.results)
            },
            "results": self.results
        }

    def to_json_string(self, indent: int = 2) -> str:
        return json.dumps(self.generate(), indent=indent)

    def save_to_file(self, output_path: str, indent: int = 2) -> None:
        """
        Save JSON to file.

        Args:
            output_path: Path to output JSON file
            indent: Number of spaces for indentation
        """
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(self.generate(), f, indent=indent)
