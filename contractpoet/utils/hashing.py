"""
SHA-256 fingerprints of rendered contracts, function sources and input documents.
"""

import hashlib
from pathlib import Path
from typing import Optional


class ArtifactHasher:
    """
    Fingerprints the artifacts recorded in a render report.
    """

    @staticmethod
    def hash_string(content: str) -> str:
        """Hex SHA-256 of the UTF-8 encoded text"""
        return hashlib.sha256(content.encode("utf-8")).hexdigest()

    @staticmethod
    def hash_file(file_path: str) -> Optional[str]:
        """
        Fingerprint a document on disk.

        Returns:
            Hex SHA-256 of the file's text, or None when it can't be read
        """
        path = Path(file_path)
        if not path.is_file():
            return None
        return ArtifactHasher.hash_string(path.read_text(encoding="utf-8"))

    @staticmethod
    def compute_combined_hash(contract_hash: str, source_hash: str) -> str:
        """
        Compute combined hash from the contract and function source hashes.

        Args:
            contract_hash: SHA-256 hash of the rendered contract block
            source_hash: SHA-256 hash of the function source

        Returns:
            Combined SHA-256 hash
        """
        combined = f"{contract_hash}|{source_hash}"
        return hashlib.sha256(combined.encode('utf-8')).hexdigest()

    @staticmethod
    def verify_integrity(json_result: dict, contract_text: str, function_source: str) -> dict:
        """
        Verify a JSON result against the rendered artifacts.

        Args:
            json_result: Function result dict from JSON output
            contract_text: Rendered contract block
            function_source: Rendered function source

        Returns:
            {
                'valid': bool,
                'contract_match': bool,
                'source_match': bool,
                'combined_match': bool
            }
        """
        artifacts = json_result.get('artifacts', {})

        contract_match = ArtifactHasher.hash_string(contract_text) == artifacts.get('contract_hash')
        source_match = ArtifactHasher.hash_string(function_source) == artifacts.get('source_hash')

        combined_hash = ArtifactHasher.compute_combined_hash(
            artifacts.get('contract_hash', ''),
            artifacts.get('source_hash', '')
        )
        combined_match = combined_hash == artifacts.get('combined_hash')

        return {
            'valid': contract_match and source_match and combined_match,
            'contract_match': contract_match,
            'source_match': source_match,
            'combined_match': combined_match
        }
