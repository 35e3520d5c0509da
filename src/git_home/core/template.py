"""Commit message template shown in the editor."""

from typing import List, Optional

COMMENT_CHAR = "#"


def gen_commit_template(
    staged: Optional[List[str]] = None, unstaged: Optional[List[str]] = None
) -> str:
    """Build the text the editor opens with when `commit` has no message."""
    lines = [
        "",
        "# Please enter the commit message for your changes. Lines starting",
        "# with '#' will be ignored, and an empty message aborts the commit.",
        "#",
    ]
    if staged:
        lines.append("# Changes to be committed:")
        lines.extend(f"#\t{path}" for path in staged)
        lines.append("#")
    if unstaged:
        lines.append("# Changes not staged for commit:")
        lines.extend(f"#\t{path}" for path in unstaged)
        lines.append("#")
    return "\n".join(lines) + "\n"


def strip_commit_template(text: Optional[str]) -> str:
    """Drop comment lines, trailing whitespace and surrounding blank lines."""
    if not text:
        return ""
    kept = [
        line.rstrip()
        for line in text.splitlines()
        if not line.startswith(COMMENT_CHAR)
    ]
    return "\n".join(kept).strip("\n")
