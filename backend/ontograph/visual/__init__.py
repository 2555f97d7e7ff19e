# Visual conventions module
# Resolves request styling into immutable per-view styles and label text

from ontograph.visual.visual_schema import ConventionStyle, EdgeKind, EdgeStyle, NodeKind, NodeStyle, NoteStyle
from ontograph.visual.visual_style import CONVENTION_PRESETS, build_convention_style
from ontograph.visual.style_resolver import StyleResolver

__all__ = [
    "ConventionStyle",
    "EdgeKind",
    "EdgeStyle",
    "NodeKind",
    "NodeStyle",
    "NoteStyle",
    "CONVENTION_PRESETS",
    "build_convention_style",
    "StyleResolver",
]
