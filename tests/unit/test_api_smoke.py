"""
API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health and GET / return ok
2. POST /commit and POST /proof return roots and proofs
3. POST /verify/proof and POST /verify/traceability fail closed
4. POST /anchors, GET /anchors/{chain_id}, POST /verify/anchored
5. POST /verify/statement for valid, edited and garbage signatures
6. Engine errors map to 400 / 404 ErrorResponse bodies, broken server state to 500
"""

import pytest
from fastapi.testclient import TestClient

from api.app import app
from api.deps import reset_dependencies
from api.errors import status_for_code
from core.config.runtime import MerkleConfig, RuntimeConfig
from core.crypto.hashing import to_hex
from provenance.anchor import InMemoryLedgerAnchor, JsonFileLedgerAnchor

from fixtures.common import CHIAPAS_ITEMS, make_signed_statement, reference_root


# Create test client
client = TestClient(app)

CHIAPAS_ROOT_HEX = to_hex(reference_root([i.encode() for i in CHIAPAS_ITEMS]))


@pytest.fixture(autouse=True)
def fresh_dependencies():
    """Default config and an empty in-memory anchor for every test."""
    reset_dependencies(config=RuntimeConfig(), anchor=InMemoryLedgerAnchor())
    yield
    reset_dependencies()


class TestHealth:
    def test_health(self):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "service": "threadline-api", "version": "v1"}

    def test_root(self):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["ok"] is True


class TestCommit:
    def test_commit_chiapas(self):
        response = client.post(
            "/commit", json={"chain_id": "garment-123", "items": CHIAPAS_ITEMS}
        )

        assert response.status_code == 200
        commitment = response.json()["commitment"]
        assert commitment["root"] == CHIAPAS_ROOT_HEX
        assert commitment["leaf_count"] == 3
        assert commitment["proof_depth"] == 2

    def test_commit_structured_items(self):
        items = [
            "chiapas",
            {"kind": "process", "payload": "mill-001", "timestamp": 1772323200000},
        ]
        response = client.post("/commit", json={"chain_id": "g", "items": items})
        assert response.status_code == 200

    def test_domain_separated_override(self):
        response = client.post(
            "/commit",
            json={"chain_id": "g", "items": CHIAPAS_ITEMS, "domain_separated": True},
        )
        expected = to_hex(
            reference_root([i.encode() for i in CHIAPAS_ITEMS], domain_separated=True)
        )
        assert response.json()["commitment"]["root"] == expected
        assert response.json()["commitment"]["domain_separated"] is True

    def test_server_config_mode(self):
        reset_dependencies(
            config=RuntimeConfig(merkle=MerkleConfig(domain_separated=True)),
            anchor=InMemoryLedgerAnchor(),
        )
        response = client.post("/commit", json={"chain_id": "g", "items": CHIAPAS_ITEMS})
        assert response.json()["commitment"]["domain_separated"] is True

    def test_empty_chain_is_400(self):
        response = client.post("/commit", json={"chain_id": "g", "items": []})

        assert response.status_code == 400
        body = response.json()
        assert body["ok"] is False
        assert body["error"]["code"] == "EMPTY_INPUT"

    def test_invalid_body_is_422(self):
        response = client.post("/commit", json={"items": CHIAPAS_ITEMS})
        assert response.status_code == 422


class TestProofs:
    def test_proof_then_verify(self):
        proof_response = client.post("/proof", json={"items": CHIAPAS_ITEMS, "index": 1})
        assert proof_response.status_code == 200
        body = proof_response.json()
        assert body["root"] == CHIAPAS_ROOT_HEX
        assert len(body["proof"]["steps"]) == 2

        verify_response = client.post(
            "/verify/proof",
            json={"item": "mill-001", "proof": body["proof"], "root": body["root"]},
        )
        assert verify_response.status_code == 200
        assert verify_response.json() == {"ok": True}

    def test_wrong_item_not_ok(self):
        proof = client.post("/proof", json={"items": CHIAPAS_ITEMS, "index": 1}).json()["proof"]
        response = client.post(
            "/verify/proof",
            json={"item": "mill-999", "proof": proof, "root": CHIAPAS_ROOT_HEX},
        )
        assert response.json() == {"ok": False}

    def test_malformed_proof_not_ok(self):
        response = client.post(
            "/verify/proof",
            json={"item": "chiapas", "proof": {"index": "zero"}, "root": CHIAPAS_ROOT_HEX},
        )
        assert response.status_code == 200
        assert response.json() == {"ok": False}

    def test_malformed_root_not_ok(self):
        proof = client.post("/proof", json={"items": CHIAPAS_ITEMS, "index": 0}).json()["proof"]
        response = client.post(
            "/verify/proof", json={"item": "chiapas", "proof": proof, "root": "0xabc"}
        )
        assert response.json() == {"ok": False}

    def test_leaf_count_from_proof_response(self):
        body = client.post("/proof", json={"items": CHIAPAS_ITEMS, "index": 2}).json()
        payload = {"item": CHIAPAS_ITEMS[2], "proof": body["proof"], "root": body["root"]}

        ok = client.post("/verify/proof", json={**payload, "leaf_count": body["leaf_count"]})
        assert ok.json() == {"ok": True}

        short = client.post("/verify/proof", json={**payload, "leaf_count": 2})
        assert short.json() == {"ok": False}

    def test_out_of_range_index_is_400(self):
        response = client.post("/proof", json={"items": CHIAPAS_ITEMS, "index": 3})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INDEX_OUT_OF_RANGE"


class TestTraceability:
    def test_verified(self):
        response = client.post(
            "/verify/traceability",
            json={"chain_id": "garment-123", "items": CHIAPAS_ITEMS, "expected_root": CHIAPAS_ROOT_HEX},
        )

        body = response.json()
        assert body["ok"] is True
        assert body["status"] == "verified"
        assert body["result"]["proof_depth"] == 2

    def test_swapped_not_verified(self):
        swapped = [CHIAPAS_ITEMS[1], CHIAPAS_ITEMS[0], CHIAPAS_ITEMS[2]]
        response = client.post(
            "/verify/traceability",
            json={"chain_id": "garment-123", "items": swapped, "expected_root": CHIAPAS_ROOT_HEX},
        )

        assert response.status_code == 200
        assert response.json()["ok"] is False
        assert response.json()["status"] == "not verified"

    def test_garbage_root_not_verified(self):
        response = client.post(
            "/verify/traceability",
            json={"chain_id": "g", "items": CHIAPAS_ITEMS, "expected_root": "zz"},
        )
        assert response.status_code == 200
        assert response.json()["ok"] is False


class TestAnchors:
    def test_anchor_read_and_verify(self):
        anchor_response = client.post(
            "/anchors", json={"chain_id": "garment-123", "items": CHIAPAS_ITEMS}
        )
        assert anchor_response.status_code == 200
        assert anchor_response.json()["receipt"]["root"] == CHIAPAS_ROOT_HEX
        assert anchor_response.json()["receipt"]["replaced"] is False

        get_response = client.get("/anchors/garment-123")
        assert get_response.json() == {
            "ok": True,
            "chain_id": "garment-123",
            "root": CHIAPAS_ROOT_HEX,
        }

        verify_response = client.post(
            "/verify/anchored", json={"chain_id": "garment-123", "items": CHIAPAS_ITEMS}
        )
        assert verify_response.json()["ok"] is True

    def test_tampered_chain_against_anchor(self):
        client.post("/anchors", json={"chain_id": "garment-123", "items": CHIAPAS_ITEMS})
        response = client.post(
            "/verify/anchored",
            json={"chain_id": "garment-123", "items": ["chiapas", "mill-002", "artisan-001"]},
        )
        assert response.json()["ok"] is False

    def test_unknown_chain_is_404(self):
        response = client.get("/anchors/garment-404")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ANCHOR_NOT_FOUND"

    def test_verify_unknown_chain_is_404(self):
        response = client.post(
            "/verify/anchored", json={"chain_id": "garment-404", "items": CHIAPAS_ITEMS}
        )
        assert response.status_code == 404


class TestServerSideErrors:
    """Broken server state answers 500, not a client error."""

    def test_bad_server_config_is_500(self, monkeypatch):
        monkeypatch.setenv("THREADLINE_MESSAGE_FORMAT", "xml")
        reset_dependencies(anchor=InMemoryLedgerAnchor())

        response = client.post("/commit", json={"chain_id": "g", "items": CHIAPAS_ITEMS})
        assert response.status_code == 500
        assert response.json()["error"]["code"] == "CONFIG_ERROR"

    def test_corrupt_anchor_file_is_500(self, tmp_path):
        path = tmp_path / "anchors.json"
        path.write_text("{\"garment-123\": ")
        reset_dependencies(config=RuntimeConfig(), anchor=JsonFileLedgerAnchor(path))

        response = client.get("/anchors/garment-123")
        assert response.status_code == 500
        body = response.json()
        assert body["ok"] is False
        assert body["error"]["code"] == "ANCHOR_STORE_ERROR"

    def test_status_for_code(self):
        assert status_for_code("ANCHOR_NOT_FOUND") == 404
        assert status_for_code("CONFIG_ERROR") == 500
        assert status_for_code("MALFORMED_PROOF") == 400


class TestStatements:
    def test_valid_statement(self):
        statement = make_signed_statement()
        response = client.post("/verify/statement", json=statement.model_dump())

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["status"] == "verified_valid"
        assert body["context_id"] == statement.context_id

    def test_edited_statement(self):
        statement = make_signed_statement()
        payload = statement.model_dump()
        payload["content"] = "Machine-made."

        body = client.post("/verify/statement", json=payload).json()
        assert body["ok"] is False
        assert body["status"] == "verified_invalid"

    def test_garbage_signature(self):
        payload = make_signed_statement().model_dump()
        payload["signature"] = "not-a-signature!"

        response = client.post("/verify/statement", json=payload)
        assert response.status_code == 200
        assert response.json()["ok"] is False

    def test_unsigned_statement(self):
        payload = make_signed_statement().model_dump()
        payload["signature"] = None

        assert client.post("/verify/statement", json=payload).json()["ok"] is False

    def test_oversized_public_key_rejected(self):
        payload = make_signed_statement().model_dump()
        payload["public_key"] = "2" * 60000

        response = client.post("/verify/statement", json=payload)
        assert response.status_code == 422

    def test_oversized_signature_rejected(self):
        payload = make_signed_statement().model_dump()
        payload["signature"] = "A" * 10000

        assert client.post("/verify/statement", json=payload).status_code == 422

    def test_overlong_base58_key_not_ok(self):
        """Within the field limit but longer than any 32-byte base58 key."""
        payload = make_signed_statement().model_dump()
        payload["public_key"] = "2" * 60

        response = client.post("/verify/statement", json=payload)
        assert response.status_code == 200
        assert response.json()["ok"] is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
