"""Unit tests for ArtifactSet."""

from pathlib import Path

from yao.models.artifact import ArtifactSet


class TestFromListing:
    """Tests for parsing makepkg listings."""

    def test_ignores_blank_lines_and_whitespace(self) -> None:
        """Blank lines are skipped and lines are stripped."""
        listing = "/p/a.pkg.tar.zst\n\n   \n  /p/b.pkg.tar.zst \n"

        artifacts = ArtifactSet.from_listing(listing)

        assert artifacts.paths == (Path("/p/a.pkg.tar.zst"), Path("/p/b.pkg.tar.zst"))

    def test_empty(self) -> None:
        """An empty listing is falsy."""
        artifacts = ArtifactSet.from_listing("\n")

        assert not artifacts
        assert len(artifacts) == 0


class TestPresence:
    """Tests for on-disk presence checks."""

    def test_all_exist(self, tmp_path: Path) -> None:
        """all_exist requires every file."""
        a, b = tmp_path / "a.pkg", tmp_path / "b.pkg"
        a.write_bytes(b"")

        artifacts = ArtifactSet.of([a, b])
        assert not artifacts.all_exist

        b.write_bytes(b"")
        assert artifacts.all_exist

    def test_empty_set_never_complete(self) -> None:
        """An empty set does not count as complete."""
        assert not ArtifactSet.of([]).all_exist

    def test_existing_and_missing_keep_order(self, tmp_path: Path) -> None:
        """Subsets preserve listing order."""
        paths = [tmp_path / f"{n}.pkg" for n in ("c", "a", "b")]
        paths[0].write_bytes(b"")
        paths[2].write_bytes(b"")

        artifacts = ArtifactSet.of(paths)

        assert artifacts.existing().paths == (paths[0], paths[2])
        assert artifacts.missing().paths == (paths[1],)
        assert artifacts.as_args() == [str(p) for p in paths]
        assert list(artifacts) == paths
