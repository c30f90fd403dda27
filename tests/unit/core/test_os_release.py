"""Unit tests for os-release parsing and installation names."""

from pathlib import Path
from unittest.mock import patch

import pytest
from sshimport.core.errors import SshReadError
from sshimport.core.os_release import DEFAULT_NAME, name_for, parse_os_release


class TestParseOsRelease:
    """Tests for parse_os_release."""

    def test_parses_key_values(self, tmp_path: Path) -> None:
        """Plain and quoted values are parsed, quotes stripped."""
        path = tmp_path / "os-release"
        path.write_text('NAME="openSUSE Leap"\nVERSION_ID=15.3\nID=opensuse-leap\n')

        result = parse_os_release(path)

        assert result == {"NAME": "openSUSE Leap", "VERSION_ID": "15.3", "ID": "opensuse-leap"}

    def test_skips_comments_and_blank_lines(self, tmp_path: Path) -> None:
        """Blank lines and # comments (also indented) are ignored."""
        path = tmp_path / "os-release"
        path.write_text('# a comment\n\n   # indented comment\n   \nNAME="Foo"\n')

        assert parse_os_release(path) == {"NAME": "Foo"}

    def test_splits_on_first_equal_sign(self, tmp_path: Path) -> None:
        """Values may contain '=' characters."""
        path = tmp_path / "os-release"
        path.write_text('HOME_URL="https://example.org/?a=b"\n')

        assert parse_os_release(path)["HOME_URL"] == "https://example.org/?a=b"

    def test_strips_only_one_quote_per_side(self, tmp_path: Path) -> None:
        """Only one leading and one trailing double quote are removed."""
        path = tmp_path / "os-release"
        path.write_text('NAME=""Foo""\n')

        assert parse_os_release(path)["NAME"] == '"Foo"'

    def test_single_quotes_are_kept(self, tmp_path: Path) -> None:
        """Quoting other than double quotes is passed through."""
        path = tmp_path / "os-release"
        path.write_text("NAME='Foo'\n")

        assert parse_os_release(path)["NAME"] == "'Foo'"

    def test_ignores_lines_without_equal_sign(self, tmp_path: Path) -> None:
        """Malformed lines are skipped."""
        path = tmp_path / "os-release"
        path.write_text("garbage\nNAME=Foo\n")

        assert parse_os_release(path) == {"NAME": "Foo"}

    def test_missing_file_raises_file_not_found(self, tmp_path: Path) -> None:
        """A missing file is reported as FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            parse_os_release(tmp_path / "missing")

    def test_read_failure_raises_read_error(self, tmp_path: Path) -> None:
        """Other I/O failures become SshReadError."""
        path = tmp_path / "os-release"
        path.write_text("NAME=Foo\n")

        with (
            patch.object(Path, "read_text", side_effect=PermissionError("denied")),
            pytest.raises(SshReadError, match="denied"),
        ):
            parse_os_release(path)


class TestNameFor:
    """Tests for name_for."""

    def _root(self, tmp_path: Path, content: str | None) -> Path:
        (tmp_path / "etc").mkdir()
        if content is not None:
            (tmp_path / "etc" / "os-release").write_text(content)
        return tmp_path

    def test_missing_os_release_gives_default(self, tmp_path: Path) -> None:
        """No etc/os-release yields "Linux"."""
        assert name_for(self._root(tmp_path, None)) == "Linux"
        assert DEFAULT_NAME == "Linux"

    def test_missing_etc_gives_default(self, tmp_path: Path) -> None:
        """A root without etc/ at all also yields "Linux"."""
        assert name_for(tmp_path) == "Linux"

    def test_pretty_name_is_preferred(self, tmp_path: Path) -> None:
        """PRETTY_NAME is used verbatim, quotes stripped."""
        root = self._root(
            tmp_path, 'NAME="openSUSE Leap"\nVERSION="15.3"\nPRETTY_NAME="openSUSE Leap 15.3"\n'
        )

        assert name_for(root) == "openSUSE Leap 15.3"

    def test_empty_pretty_name_concatenates_name_and_version(self, tmp_path: Path) -> None:
        """NAME and VERSION are joined without separator."""
        root = self._root(tmp_path, 'PRETTY_NAME=""\nNAME="Foo"\nVERSION="1.0"\n')

        assert name_for(root) == "Foo1.0"

    def test_generic_pretty_name_is_ignored(self, tmp_path: Path) -> None:
        """PRETTY_NAME equal to the default label falls back to NAME + VERSION."""
        root = self._root(tmp_path, 'PRETTY_NAME="Linux"\nNAME="Bar"\nVERSION="2"\n')

        assert name_for(root) == "Bar2"

    def test_missing_pretty_name_and_version(self, tmp_path: Path) -> None:
        """Without PRETTY_NAME and VERSION, NAME alone is used."""
        root = self._root(tmp_path, 'NAME="Baz"\n')

        assert name_for(root) == "Baz"

    def test_missing_name_uses_default_label(self, tmp_path: Path) -> None:
        """Without NAME, the default label is combined with VERSION."""
        root = self._root(tmp_path, 'VERSION="7"\n')

        assert name_for(root) == "Linux7"

    def test_empty_file_gives_default(self, tmp_path: Path) -> None:
        """An empty os-release yields the default label."""
        assert name_for(self._root(tmp_path, "")) == "Linux"

    def test_unreadable_file_propagates(self, tmp_path: Path) -> None:
        """Read failures other than a missing file are not hidden."""
        root = self._root(tmp_path, None)
        (root / "etc" / "os-release").mkdir()  # reading a directory fails

        with pytest.raises(SshReadError):
            name_for(root)
