"""Tests for expected-page completeness checks."""

from build_audit.structure import find_missing_pages


def test_pages_found_by_either_name(tmp_path):
    """Test that pages match with or without the Page suffix."""
    pages = tmp_path / "src" / "pages"
    pages.mkdir(parents=True)
    (pages / "HomePage.jsx").write_text("")
    (pages / "About.tsx").write_text("")
    (pages / "ContactUsPage.jsx").write_text("")

    missing = find_missing_pages(tmp_path, ["home", "about", "contact-us", "menu", "gallery_page"])

    assert missing == ["menu", "gallery_page"]


def test_non_page_files_ignored(tmp_path):
    """Test that stylesheets and other files do not count as pages."""
    pages = tmp_path / "src" / "pages"
    pages.mkdir(parents=True)
    (pages / "MenuPage.css").write_text("")

    assert find_missing_pages(tmp_path, ["menu"]) == ["menu"]


def test_missing_pages_dir(tmp_path):
    """Test that every page is missing when there is no pages directory."""
    assert find_missing_pages(tmp_path, ["home", "about"]) == ["home", "about"]


def test_nothing_expected(tmp_path):
    """Test that an empty expectation is always satisfied."""
    assert find_missing_pages(tmp_path, []) == []
