"""
Threadline HTTP API (FastAPI)

HTTP surface for the verifier UI and the feed UI:
- POST /commit - Compute the root of an evidence chain
- POST /proof - Build an inclusion proof for one evidence item
- POST /verify/proof - Check an inclusion proof
- POST /verify/traceability - Re-verify a chain against a root
- POST /anchors, GET /anchors/{chain_id} - Store / read anchored roots
- POST /verify/anchored - Re-verify a chain against its anchored root
- POST /verify/statement - Verify a signed post or comment
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
