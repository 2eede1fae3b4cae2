#!/usr/bin/env python3
"""
contractpoet CLI - render functions with their contracts from JSON documents
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from contractpoet.output import RenderJSONFormatter
from contractpoet.parser import ContractDocumentParser


def render_file(file_path: str, json_output: Optional[str] = None, verbose: bool = False) -> List[str]:
    """
    Render every function in a document file with its contract attached.

    Args:
        file_path: Path to a JSON document (or list of documents)
        json_output: Optional path for a JSON report
        verbose: Print progress

    Returns:
        Rendered function sources, in document order

    Raises:
        ValueError: If a document or contract is invalid
        NotImplementedError: If a metadata dump uses unsupported types
    """
    parser = ContractDocumentParser()
    documents = parser.parse_file(file_path)

    if verbose:
        print(f"[Render] Found {len(documents)} function(s) in {file_path}")

    formatter = RenderJSONFormatter(file_path)
    sources = []
    for function, contract in documents:
        source = str(function.with_contract(contract))
        if verbose:
            print(f"[Render] {function.name}: {len(contract.effects)} effect(s)")
        formatter.add_result(function, contract, source)
        sources.append(source)

    if json_output:
        formatter.save_to_file(json_output)
        if verbose:
            print(f"[Render] Wrote JSON report to {json_output}")

    return sources


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Render functions with their contract blocks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Print the function with its contract
    contractpoet examples/calls_in_place.json

    # Also write a JSON report with integrity hashes
    contractpoet examples/calls_in_place.json --json out/report.json -v
        """
    )

    parser.add_argument("file", help="JSON document describing a function and its contract")
    parser.add_argument("--json", dest="json_output", help="Write a JSON report to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    args = parser.parse_args(argv)

    if not Path(args.file).exists():
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return 1

    try:
        sources = render_file(args.file, args.json_output, args.verbose)
    except (ValueError, NotImplementedError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\n".join(sources), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
