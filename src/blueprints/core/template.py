"""Stub template for new topic documents."""

from __future__ import annotations

from blueprints.core.models import CANONICAL_SECTIONS, CHANGELOG_HEADER

_SECTION_PLACEHOLDERS = {
    "Philosophy": "TODO: One paragraph on how {title} wants to be used.",
    "TL;DR": "- TODO: Five bullet points an assistant must never forget.",
    "Best Practices": "### TODO: Practice name\n\nTODO: Explanation and a short example.",
    "Anti-Patterns": "### TODO: Anti-pattern name\n\nTODO: What goes wrong and what to do instead.",
    "Changelog": f"{CHANGELOG_HEADER}\n|---------|------|-------------|\n| TODO | TODO | TODO |",
    "Quick Reference": "TODO: Commands, snippets and defaults worth memorising.",
    "Resources": "- TODO: Official documentation link",
}


def render_stub(title: str) -> str:
    """Render a stub draft for *title* with every canonical section as ``TODO``."""
    lines = [
        f"# {title} Best Practices",
        "",
        "**Last updated:** TODO",
        "**Versions:** TODO",
        "",
    ]
    for name in CANONICAL_SECTIONS:
        lines.append(f"## {name}")
        lines.append("")
        lines.append(_SECTION_PLACEHOLDERS[name].format(title=title))
        lines.append("")
    return "\n".join(lines)


def default_title(topic: str) -> str:
    """``react-native`` -> ``React Native``."""
    words = topic.replace("_", "-").replace(".", "-").split("-")
    return " ".join(w.capitalize() for w in words if w)


__all__ = ["default_title", "render_stub"]
