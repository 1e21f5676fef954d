"""Tests for pre-build rules and the pre-build remediator."""

from pathlib import Path

import pytest

from build_audit.prebuild import PreBuildRemediator
from build_audit.rules import MissingIconImportRule, NestedFontQuoteRule


class TestNestedFontQuoteRule:
    """Tests for removing redundant inner quotes from font lists."""

    def test_font_family_list(self):
        """Test the canonical nested-quote font list."""
        rule = NestedFontQuoteRule()

        fixed = rule.apply("fontFamily: \"'DM Sans', 'Inter', system-ui\"")

        assert fixed == 'fontFamily: "DM Sans, Inter, system-ui"'

    def test_idempotent(self):
        """Test that the rewritten declaration is a fixed point."""
        rule = NestedFontQuoteRule()
        once = rule.apply("fontFamily: \"'DM Sans', 'Inter', system-ui\"")

        assert rule.apply(once) == once

    def test_single_font(self):
        """Test a single quoted font name."""
        rule = NestedFontQuoteRule()

        assert rule.apply("fontFamily: \"'Playfair Display'\"") == 'fontFamily: "Playfair Display"'

    def test_theme_object_keys(self):
        """Test font lists inside theme objects."""
        rule = NestedFontQuoteRule()
        content = "const THEME = {\n  heading: \"'Playfair Display', Georgia, serif\",\n  body: \"'Inter', sans-serif\"\n};"

        fixed = rule.apply(content)

        assert 'heading: "Playfair Display, Georgia, serif"' in fixed
        assert 'body: "Inter, sans-serif"' in fixed

    def test_inverted_quotes(self):
        """Test double-quoted names inside a single-quoted value."""
        rule = NestedFontQuoteRule()

        assert rule.apply("fontFamily: '\"Inter\", sans-serif'") == "fontFamily: 'Inter, sans-serif'"

    @pytest.mark.parametrize(
        "content",
        [
            'fontFamily: "Inter, sans-serif"',
            "fontFamily: 'Inter'",
            "title: \"'Hello', she said\"",
            "fontFamily: \"'Inter\"",
            'primary: "#1a73e8"',
        ],
    )
    def test_leaves_other_strings_alone(self, content):
        """Test that correct or unrelated strings are not touched."""
        assert NestedFontQuoteRule().apply(content) == content


class TestMissingIconImportRule:
    """Tests for adding forgotten icon imports."""

    def test_extends_existing_import(self):
        """Test that missing icons are appended to the icon import."""
        content = "import { Star } from 'lucide-react';\nconst A = () => <div><Star /><Phone size={4} /></div>;\n"

        fixed = MissingIconImportRule().apply(content)

        assert "import { Star, Phone } from 'lucide-react';" in fixed

    def test_adds_import_before_first_import(self):
        """Test that an icon import is created when none exists."""
        content = "import React from 'react';\nexport default () => <Mail />;\n"

        fixed = MissingIconImportRule().apply(content)

        assert fixed.startswith("import { Mail } from 'lucide-react';\nimport React from 'react';")

    def test_ignores_names_imported_elsewhere(self):
        """Test that components from other packages are not treated as icons."""
        content = "import { Link } from 'react-router-dom';\nexport default () => <Link to=\"/\" />;\n"

        assert MissingIconImportRule().apply(content) == content

    def test_ignores_locally_defined_components(self):
        """Test that a locally defined component shadows the icon name."""
        content = "const Menu = () => null;\nexport default () => <Menu />;\n"

        assert MissingIconImportRule().apply(content) == content

    def test_idempotent(self):
        """Test that a second pass changes nothing."""
        rule = MissingIconImportRule()
        once = rule.apply("export default () => <Heart />;\n")

        assert rule.apply(once) == once

    def test_ignores_type_declarations_and_generics(self):
        """Test that TypeScript types named like icons are not imported."""
        content = (
            "import { useState } from 'react';\n"
            "interface User { name: string }\n"
            "export default () => { const [u] = useState<User | null>(null); return <p />; };\n"
        )

        assert MissingIconImportRule().apply(content) == content

    def test_ignores_type_alias_in_generic(self):
        """Test that a type alias used as a type argument is left alone."""
        content = "type Star = { rating: number };\nconst xs: Array<Star> = [];\n"

        assert MissingIconImportRule().apply(content) == content

    def test_generic_argument_is_not_a_tag(self):
        """Test that a type argument never counts as a rendered icon."""
        content = "import type { Item } from './types';\nconst m = new Map<Mail, Item>();\n"

        assert MissingIconImportRule().apply(content) == content


@pytest.fixture
def frontend(tmp_path: Path) -> Path:
    """A frontend tree with one nested-quote defect and one clean file."""
    src = tmp_path / "src"
    (src / "pages").mkdir(parents=True)
    (src / "theme.js").write_text(
        "export const THEME = { fontFamily: \"'DM Sans', 'Inter', system-ui\" };\n"
    )
    (src / "pages" / "HomePage.jsx").write_text(
        "import React from 'react';\nexport default () => <h1>Home</h1>;\n"
    )
    (src / "index.css").write_text("body { font-family: 'Inter', sans-serif; }\n")
    return tmp_path


class TestPreBuildRemediator:
    """Tests for the tree-wide pre-build pass."""

    def test_fixes_and_reports_files(self, frontend):
        """Test that changed files are counted and listed relative to the tree."""
        result = PreBuildRemediator().remediate(frontend)

        assert result.fixed == 1
        assert result.files == ["src/theme.js"]
        assert result.by_rule == {"NESTED_FONT_QUOTES": ["src/theme.js"]}
        assert 'fontFamily: "DM Sans, Inter, system-ui"' in (frontend / "src" / "theme.js").read_text()

    def test_second_run_changes_nothing(self, frontend):
        """Test that remediation reaches a fixed point after one pass."""
        remediator = PreBuildRemediator()
        remediator.remediate(frontend)
        snapshot = {p: p.read_text() for p in frontend.rglob("*") if p.is_file()}

        second = remediator.remediate(frontend)

        assert second.fixed == 0
        assert second.files == []
        assert {p: p.read_text() for p in frontend.rglob("*") if p.is_file()} == snapshot

    def test_stylesheets_untouched(self, frontend):
        """Test that only script files are rewritten."""
        PreBuildRemediator().remediate(frontend)

        assert (frontend / "src" / "index.css").read_text() == (
            "body { font-family: 'Inter', sans-serif; }\n"
        )

    def test_icon_rule_only_runs_on_jsx_files(self, frontend):
        """Test that plain script files never get icon imports."""
        helper = frontend / "src" / "icons.ts"
        helper.write_text("export const render = (h: any) => h(<Star />);\n")
        page = frontend / "src" / "pages" / "ContactPage.tsx"
        page.write_text("export default () => <Phone />;\n")

        result = PreBuildRemediator().remediate(frontend)

        assert helper.read_text() == "export const render = (h: any) => h(<Star />);\n"
        assert result.by_rule["MISSING_ICON_IMPORTS"] == ["src/pages/ContactPage.tsx"]
        assert page.read_text().startswith("import { Phone } from 'lucide-react';\n")

    def test_missing_src(self, tmp_path):
        """Test a tree without a src directory."""
        result = PreBuildRemediator().remediate(tmp_path)

        assert result.fixed == 0

    def test_unreadable_file_skipped(self, frontend):
        """Test that one undecodable file does not stop the pass."""
        (frontend / "src" / "binary.js").write_bytes(b"\xff\xfe\x00bad")

        result = PreBuildRemediator().remediate(frontend)

        assert result.files == ["src/theme.js"]
