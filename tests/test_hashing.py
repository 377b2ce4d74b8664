"""Tests for hashing module."""

from __future__ import annotations

from dojo_marketplace.hashing import compute_sha256, digests_match, verify_sha256


class TestComputeSha256:
    """Tests for compute_sha256."""

    def test_known_digest(self) -> None:
        """Test digest of a known input."""
        assert (
            compute_sha256(b"hello world")
            == "b94d27b9934d3e08a52e52d7da7dabfac484efe37a5380ee9088f7ace2efcde9"
        )

    def test_deterministic(self) -> None:
        """Test the same input always yields the same digest."""
        data = b"test data"
        assert compute_sha256(data) == compute_sha256(data)

    def test_different_input(self) -> None:
        """Test different inputs produce different digests."""
        assert compute_sha256(b"aaa") != compute_sha256(b"bbb")

    def test_empty_input(self) -> None:
        """Test digest of empty content."""
        assert (
            compute_sha256(b"")
            == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )


class TestVerifySha256:
    """Tests for verify_sha256 and digests_match."""

    def test_match(self) -> None:
        """Test verification succeeds for matching digest."""
        data = b"archive"
        assert verify_sha256(data, compute_sha256(data)) is True

    def test_mismatch(self) -> None:
        """Test verification fails for another digest."""
        assert verify_sha256(b"archive", compute_sha256(b"other")) is False

    def test_case_insensitive(self) -> None:
        """Test uppercase declared digests are accepted."""
        data = b"archive"
        assert verify_sha256(data, compute_sha256(data).upper()) is True

    def test_surrounding_whitespace_ignored(self) -> None:
        """Test trailing newline in a declared digest is tolerated."""
        assert digests_match("abc123", " ABC123\n") is True

    def test_prefix_is_not_a_match(self) -> None:
        """Test a truncated digest does not match."""
        data = b"archive"
        assert verify_sha256(data, compute_sha256(data)[:32]) is False
