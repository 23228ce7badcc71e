"""Tests for the command line entry point."""

from conftest import ASSETS_DIR
from pagebuilder.layout import LayoutLoader
from pagebuilder.main import main

HOME_PAGE = str(ASSETS_DIR / "pages" / "home.yaml")


def test_prints_compiled_tree(capsys):
    assert main([HOME_PAGE, "--select", "el_banner"]) == 0

    out = capsys.readouterr().out
    assert "Page contains 3 visible nodes (env: edit):" in out
    assert "- el_banner: View [edit] [overlay: 9 handles]" in out
    assert "  - el_logo: Image (default) [edit]" in out
    assert "el_promo" not in out


def test_preview_environment(capsys):
    assert main([HOME_PAGE, "--env", "preview"]) == 0

    out = capsys.readouterr().out
    assert "- el_footer: View\n" in out
    assert "[edit]" not in out


def test_writes_output(tmp_path, capsys):
    output = tmp_path / "home.json"
    assert main([HOME_PAGE, "-o", str(output)]) == 0
    assert LayoutLoader().load(output) == LayoutLoader().load(HOME_PAGE)


def test_unknown_component_exits_with_error(tmp_path):
    page = tmp_path / "page.yaml"
    page.write_text("- {el: a, name: Carousel}\n")
    assert main([str(page)]) == 1


def test_malformed_layout_exits_with_error(tmp_path):
    page = tmp_path / "page.yaml"
    page.write_text("- {el: a}\n")
    assert main([str(page)]) == 1
