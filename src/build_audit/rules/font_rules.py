"""Rewrite font-list declarations that carry a redundant inner layer of quotes."""

import re

from ..constants import SCRIPT_EXTENSIONS

# A font-ish property whose value is a quoted string literal
FONT_DECLARATION_RE = re.compile(
    r"""(?P<key>\b(?:fontFamily|fontHeading|fontBody|font|heading|body|display|primary|secondary|mono)\s*:\s*)"""
    r"""(?:"(?P<double>[^"\n]*)"|'(?P<single>[^'\n]*)')"""
)


def _unquote_font_list(match: re.Match[str]) -> str:
    if match.group("double") is not None:
        outer, inner, value = '"', "'", match.group("double")
    else:
        outer, inner, value = "'", '"', match.group("single")

    cleaned: list[str] = []
    quoted_any = False
    for item in (part.strip() for part in value.split(",")):
        name = item[1:-1].strip()
        if len(item) >= 2 and item[0] == inner and item[-1] == inner and name and inner not in name:
            cleaned.append(name)
            quoted_any = True
        elif item and inner not in item:
            cleaned.append(item)
        else:
            # Not a plain font list; leave it alone
            return match.group(0)

    if not quoted_any:
        return match.group(0)
    return f"{match.group('key')}{outer}{', '.join(cleaned)}{outer}"


class NestedFontQuoteRule:
    """Strips inner quotes from generated font lists.

    ``fontFamily: "'DM Sans', 'Inter', system-ui"`` becomes
    ``fontFamily: "DM Sans, Inter, system-ui"``. Output never matches again.
    """

    NAME = "NESTED_FONT_QUOTES"
    DESCRIPTION = "Fixed nested font quotes"
    EXTENSIONS = SCRIPT_EXTENSIONS

    def apply(self, content: str) -> str:
        """Rewrite every nested-quote font declaration in a file's content.

        Args:
            content: Source file content

        Returns:
            Corrected content (the same string when nothing matched)
        """
        return FONT_DECLARATION_RE.sub(_unquote_font_list, content)
