"""
Threadline CLI

Command-line interface for Threadline evidence commitments and signed
statements.

Usage:
    python -m threadline_cli root chiapas mill-001 artisan-001
    python -m threadline_cli prove --index 1 --file chain.json --out proof.json
    python -m threadline_cli verify-proof --item mill-001 --proof proof.json --root 0x...
    python -m threadline_cli verify --chain-id garment-123 --file chain.json --root 0x...
    python -m threadline_cli anchor --chain-id garment-123 --file chain.json --anchor-file anchors.json
    python -m threadline_cli verify-statement --content ... --context-id ... --timestamp ... \\
        --signature ... --public-key ...
"""

__version__ = "0.1.0"
