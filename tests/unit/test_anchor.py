"""
Ledger Anchor Unit Tests
Tests for provenance/anchor.py

Covers:
- InMemoryLedgerAnchor and JsonFileLedgerAnchor storage semantics
- anchor_evidence followed by verify_against_anchor
- AnchorNotFoundError for chains that were never anchored
- anchor_from_config selection
"""
import json
import threading

import pytest

from core.config.runtime import AnchorConfig, RuntimeConfig
from core.crypto.hashing import sha256, to_hex
from core.merkle.merkle_tree import DOMAIN_SEPARATED_HASHER
from core.schemas.errors import (
    AnchorNotFoundError,
    AnchorStoreError,
    ErrorCodes,
    SchemaValidationException,
)
from provenance.anchor import (
    InMemoryLedgerAnchor,
    JsonFileLedgerAnchor,
    anchor_evidence,
    anchor_from_config,
    verify_against_anchor,
)


@pytest.fixture(params=["memory", "file"])
def anchor(request, tmp_path):
    if request.param == "memory":
        return InMemoryLedgerAnchor()
    return JsonFileLedgerAnchor(tmp_path / "anchors.json")


class TestLedgerAnchorContract:
    """Both implementations behave the same."""

    def test_missing_chain_returns_none(self, anchor):
        assert anchor.get_root("garment-404") is None

    def test_put_then_get(self, anchor):
        root = sha256(b"root")
        receipt = anchor.put_root("garment-123", root)

        assert anchor.get_root("garment-123") == root
        assert receipt.chain_id == "garment-123"
        assert receipt.root == to_hex(root)
        assert receipt.replaced is False
        assert receipt.anchored_at.tzinfo is not None

    def test_second_put_reports_replacement(self, anchor):
        anchor.put_root("garment-123", sha256(b"first"))
        receipt = anchor.put_root("garment-123", sha256(b"second"))

        assert receipt.replaced is True
        assert anchor.get_root("garment-123") == sha256(b"second")

    @pytest.mark.parametrize("root", [b"short", "0x" + "ab" * 32, None])
    def test_non_digest_root_rejected(self, anchor, root):
        with pytest.raises(SchemaValidationException):
            anchor.put_root("garment-123", root)


class TestInMemoryLedgerAnchor:
    def test_concurrent_puts(self):
        anchor = InMemoryLedgerAnchor()

        def put(n):
            anchor.put_root(f"garment-{n}", sha256(str(n).encode()))

        threads = [threading.Thread(target=put, args=(n,)) for n in range(50)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(anchor) == 50


class TestJsonFileLedgerAnchor:
    def test_file_holds_hex_roots(self, tmp_path):
        path = tmp_path / "anchors.json"
        JsonFileLedgerAnchor(path).put_root("garment-123", sha256(b"root"))

        assert json.loads(path.read_text()) == {"garment-123": to_hex(sha256(b"root"))}

    def test_roots_survive_new_instance(self, tmp_path):
        path = tmp_path / "anchors.json"
        JsonFileLedgerAnchor(path).put_root("garment-123", sha256(b"root"))

        assert JsonFileLedgerAnchor(path).get_root("garment-123") == sha256(b"root")

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "anchors.json"
        JsonFileLedgerAnchor(path).put_root("g", sha256(b"root"))
        assert path.exists()

    def test_no_temp_files_left(self, tmp_path):
        anchor = JsonFileLedgerAnchor(tmp_path / "anchors.json")
        anchor.put_root("g", sha256(b"root"))
        assert [p.name for p in tmp_path.iterdir()] == ["anchors.json"]

    def test_non_object_file_rejected(self, tmp_path):
        path = tmp_path / "anchors.json"
        path.write_text("[]")
        with pytest.raises(AnchorStoreError):
            JsonFileLedgerAnchor(path).get_root("g")

    def test_corrupt_root_rejected(self, tmp_path):
        path = tmp_path / "anchors.json"
        path.write_text(json.dumps({"g": "0x1234"}))
        with pytest.raises(AnchorStoreError):
            JsonFileLedgerAnchor(path).get_root("g")

    def test_unparseable_file_rejected(self, tmp_path):
        path = tmp_path / "anchors.json"
        path.write_text("{\"g\": ")
        with pytest.raises(AnchorStoreError) as exc_info:
            JsonFileLedgerAnchor(path).get_root("g")
        assert exc_info.value.code == ErrorCodes.ANCHOR_STORE_ERROR

    def test_unparseable_file_blocks_put(self, tmp_path):
        path = tmp_path / "anchors.json"
        path.write_text("not json")
        with pytest.raises(AnchorStoreError):
            JsonFileLedgerAnchor(path).put_root("g", sha256(b"root"))
        assert path.read_text() == "not json"


class TestAnchorAndVerify:
    """anchor_evidence followed by verify_against_anchor."""

    def test_anchor_then_verify(self, anchor, chiapas_items):
        commitment, receipt = anchor_evidence("garment-123", chiapas_items, anchor)
        result = verify_against_anchor("garment-123", chiapas_items, anchor)

        assert receipt.root == commitment.root
        assert result.is_valid
        assert result.recomputed_root == commitment.root

    def test_tampered_chain_not_verified(self, anchor, chiapas_items):
        anchor_evidence("garment-123", chiapas_items, anchor)
        tampered = list(reversed(chiapas_items))

        assert not verify_against_anchor("garment-123", tampered, anchor).is_valid

    def test_unanchored_chain_raises(self, anchor, chiapas_items):
        with pytest.raises(AnchorNotFoundError) as exc_info:
            verify_against_anchor("garment-404", chiapas_items, anchor)
        assert exc_info.value.code == "ANCHOR_NOT_FOUND"

    def test_hasher_must_match(self, anchor, chiapas_items):
        anchor_evidence("garment-123", chiapas_items, anchor, DOMAIN_SEPARATED_HASHER)

        assert verify_against_anchor(
            "garment-123", chiapas_items, anchor, DOMAIN_SEPARATED_HASHER
        ).is_valid
        assert not verify_against_anchor("garment-123", chiapas_items, anchor).is_valid

    def test_reanchoring_replaces(self, anchor, chiapas_items):
        anchor_evidence("garment-123", chiapas_items[:2], anchor)
        _, receipt = anchor_evidence("garment-123", chiapas_items, anchor)

        assert receipt.replaced
        assert verify_against_anchor("garment-123", chiapas_items, anchor).is_valid


class TestAnchorFromConfig:
    def test_default_is_memory(self):
        assert isinstance(anchor_from_config(RuntimeConfig()), InMemoryLedgerAnchor)

    def test_path_selects_file_anchor(self, tmp_path):
        config = RuntimeConfig(anchor=AnchorConfig(path=str(tmp_path / "a.json")))
        anchor = anchor_from_config(config)

        assert isinstance(anchor, JsonFileLedgerAnchor)
        assert anchor.path == tmp_path / "a.json"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
