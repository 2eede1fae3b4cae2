#!/usr/bin/env python3
"""
contractpoet FastAPI Server
Provides a REST API for rendering and validating contracts
"""
from typing import Any, Dict, List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from contractpoet import __version__
from contractpoet.parser import ContractDocumentParser
from contractpoet.utils.hashing import ArtifactHasher


# ============================================================================
# Request/Response Models
# ============================================================================

class RenderRequest(BaseModel):
    function: Dict[str, Any]
    contract: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None


class RenderResponse(BaseModel):
    success: bool
    source: Optional[str] = None
    contract: Optional[str] = None
    effects: List[str] = []
    contract_hash: Optional[str] = None
    error: Optional[str] = None


class ValidateResponse(BaseModel):
    valid: bool
    errors: List[str] = []


class HealthResponse(BaseModel):
    status: str
    version: str


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="contractpoet API",
    description="Render function contracts as source",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

document_parser = ContractDocumentParser()


def to_document(request: RenderRequest) -> Dict[str, Any]:
    """Rebuild the raw document, keeping only the sections that were sent"""
    document = {"function": request.function}
    if request.contract is not None:
        document["contract"] = request.contract
    if request.metadata is not None:
        document["metadata"] = request.metadata
    return document


# ============================================================================
# Endpoints
# ============================================================================

@app.get("/", response_model=HealthResponse)
async def health():
    """Health check endpoint"""
    return {
        "status": "ok",
        "version": __version__
    }


@app.post("/api/render", response_model=RenderResponse)
async def render(request: RenderRequest):
    """
    Render a function with its contract attached.

    Example:
        POST /api/render
        {
            "function": {"name": "test", "modifiers": ["inline"],
                         "parameters": [{"name": "body", "type": {"parameters": ["kotlin.String"],
                                                                   "returns": "kotlin.String"}}]},
            "contract": {"effects": [{"calls": "body", "invocation_kind": "EXACTLY_ONCE"}]}
        }
    """
    try:
        function, contract = document_parser.parse(to_document(request))
        source = str(function.with_contract(contract))
        contract_text = contract.render(function)
    except (ValueError, NotImplementedError) as e:
        print(f"[Server] Render failed: {e}")
        return {
            "success": False,
            "error": str(e)
        }

    print(f"[Server] Rendered {function.name} with {len(contract.effects)} effect(s)")
    return {
        "success": True,
        "source": source,
        "contract": contract_text,
        "effects": [effect.render(function) for effect in contract.effects],
        "contract_hash": ArtifactHasher.hash_string(contract_text)
    }


@app.post("/api/validate", response_model=ValidateResponse)
async def validate(request: RenderRequest):
    """
    Check that a contract is well formed and can be attached to its function.
    """
    try:
        function, contract = document_parser.parse(to_document(request))
        function.with_contract(contract)
    except (ValueError, NotImplementedError) as e:
        return {
            "valid": False,
            "errors": [str(e)]
        }

    return {
        "valid": True,
        "errors": []
    }


# ============================================================================
# Run Server
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    from dotenv import load_dotenv

    load_dotenv()
    from contractpoet.core.config import DEFAULT_HOST, DEFAULT_PORT

    print("=" * 60)
    print("contractpoet API Server")
    print("=" * 60)
    print(f"Starting server on http://{DEFAULT_HOST}:{DEFAULT_PORT}")
    print(f"API docs: http://{DEFAULT_HOST}:{DEFAULT_PORT}/docs")
    print("=" * 60)

    uvicorn.run(app, host=DEFAULT_HOST, port=DEFAULT_PORT)
