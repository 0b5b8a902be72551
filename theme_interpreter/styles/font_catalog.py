"""Font catalog lookups with ordered fallback families."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..exceptions import UnresolvedFont
from ..models.values import FONT_STYLES, FontDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontCatalogEntry:
    family: str
    variants: Mapping[str, str] = field(default_factory=dict)

    def file_for(self, style: str) -> Optional[str]:
        return self.variants.get(style)


def resolve_font_path(file_name: str, font_dirs: Sequence[str] = ()) -> str:
    """
    Locate a catalog file reference in the configured font directories.

    Absolute paths and references not found in any directory are returned
    unchanged; loading the file is the renderer's business. The filesystem is
    only consulted when font directories are configured.
    """
    path = Path(file_name).expanduser()
    if path.is_absolute():
        return str(path)
    for directory in font_dirs:
        candidate = Path(directory).expanduser() / path
        if candidate.exists():
            return str(candidate)
    return file_name


class FontCatalog:
    """
    Logical font families and the process-wide fallback list.

    A requested (family, style) pair is taken from the family itself when it
    defines that style; otherwise the fallback families are checked, in order,
    for the same style. A missing style is never replaced by another style of
    the same family and an unknown family never gets a default substitute.
    """

    def __init__(
        self,
        entries: Iterable[FontCatalogEntry] = (),
        fallbacks: Sequence[str] = (),
        font_dirs: Sequence[str] = (),
    ):
        self.entries: Dict[str, FontCatalogEntry] = {entry.family: entry for entry in entries}
        self.fallbacks: List[str] = list(fallbacks)
        self.font_dirs: Tuple[str, ...] = tuple(str(directory) for directory in font_dirs)
        self._paths: Dict[str, str] = {}

    @classmethod
    def from_mapping(
        cls,
        catalog: Mapping[str, Mapping[str, str]],
        fallbacks: Sequence[str] = (),
        font_dirs: Sequence[str] = (),
    ) -> "FontCatalog":
        entries = [FontCatalogEntry(family, dict(variants)) for family, variants in catalog.items()]
        return cls(entries, fallbacks, font_dirs)

    def families(self) -> List[str]:
        return sorted(self.entries)

    def get_entry(self, family: str) -> Optional[FontCatalogEntry]:
        return self.entries.get(family)

    def font_path(self, file_name: str) -> str:
        """Locate a file reference, memoized for the lifetime of this catalog."""
        if file_name not in self._paths:
            self._paths[file_name] = resolve_font_path(file_name, self.font_dirs)
        return self._paths[file_name]

    def resolve(self, family: str, style: str = "normal") -> FontDescriptor:
        """
        Resolve a logical family and style to a font file.

        Args:
            family: Logical family name
            style: normal, bold, italic or bold_italic

        Returns:
            FontDescriptor; ``provided_by`` differs from ``family`` when a
            fallback family supplied the file

        Raises:
            UnresolvedFont: unknown family or style, or no fallback has the style
        """
        if style not in FONT_STYLES:
            raise UnresolvedFont(f"Unknown font style '{style}'", details=f"expected one of {', '.join(FONT_STYLES)}")

        entry = self.entries.get(family)
        if entry is None:
            raise UnresolvedFont(
                f"Font family '{family}' is not in the catalog",
                details=f"known families: {', '.join(self.families()) or '(none)'}",
            )

        file_name = entry.file_for(style)
        if file_name is not None:
            return FontDescriptor(family, style, self.font_path(file_name), family)

        for fallback in self.fallbacks:
            fallback_entry = self.entries.get(fallback)
            if fallback_entry is None:
                logger.debug(f"Fallback family '{fallback}' is not in the catalog")
                continue
            file_name = fallback_entry.file_for(style)
            if file_name is not None:
                logger.debug(f"Font '{family}' has no {style} variant, using fallback '{fallback}'")
                return FontDescriptor(family, style, self.font_path(file_name), fallback)

        raise UnresolvedFont(
            f"Font family '{family}' has no {style} variant",
            details=f"fallbacks checked: {', '.join(self.fallbacks) or '(none)'}",
        )
