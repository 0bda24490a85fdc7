from pathlib import Path

from filepane.configfile import read_toml, search_directories


def test_search_prefers_first_directory(tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "app.toml").write_text("")
    (second / "app.toml").write_text("")
    assert search_directories("app.toml", [first, second]) == first / "app.toml"


def test_search_skips_directories_without_file(tmp_path: Path) -> None:
    empty = tmp_path / "empty"
    full = tmp_path / "full"
    empty.mkdir()
    full.mkdir()
    (full / "app.toml").write_text("")
    assert search_directories("app.toml", [empty, full]) == full / "app.toml"


def test_search_returns_none_when_missing(tmp_path: Path) -> None:
    assert search_directories("app.toml", [tmp_path]) is None
    assert search_directories("app.toml", []) is None


def test_read_toml_parses_document(tmp_path: Path) -> None:
    (tmp_path / "app.toml").write_text('use_trash = false\n[display]\nshow_hidden = true\n')
    data = read_toml("app.toml", [tmp_path])
    assert data == {"use_trash": False, "display": {"show_hidden": True}}


def test_read_toml_missing_file(tmp_path: Path) -> None:
    assert read_toml("absent.toml", [tmp_path]) is None


def test_read_toml_invalid_reports_error(tmp_path: Path, capsys) -> None:
    (tmp_path / "bad.toml").write_text("this is = = not toml")
    assert read_toml("bad.toml", [tmp_path]) is None
    assert "Error parsing bad.toml file" in capsys.readouterr().err