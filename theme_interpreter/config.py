"""Resolver configuration."""

import os
from typing import Iterable, List, Optional

FONT_DIRS_ENV = "THEME_INTERPRETER_FONT_DIRS"
LOG_LEVEL_ENV = "THEME_INTERPRETER_LOG_LEVEL"


class ResolverConfig:
    """Options for one theme resolution."""

    def __init__(
        self,
        root_scope: str = "base",
        font_family_attribute: str = "font_family",
        font_style_attribute: str = "font_style",
        font_attribute: str = "font",
        font_dirs: Optional[Iterable[str]] = None,
        extra_fallbacks: Optional[Iterable[str]] = None,
        resolve_fonts: bool = True,
        log_level: str = "WARNING",
    ):
        """
        Initialize resolver options.

        Args:
            root_scope: Scope every top-level scope inherits from
            font_family_attribute: Attribute resolved through the font catalog
            font_style_attribute: Attribute holding the requested font style
            font_attribute: Derived attribute holding each scope's styled font
            font_dirs: Directories searched for relative font file references
            extra_fallbacks: Families appended to the theme's fallback list
            resolve_fonts: Whether font families are turned into font descriptors
            log_level: Level used by the command line interface
        """
        if not root_scope:
            raise ValueError("root_scope must be a non-empty string")
        self.root_scope = root_scope
        self.font_family_attribute = font_family_attribute
        self.font_style_attribute = font_style_attribute
        self.font_attribute = font_attribute
        self.font_dirs: List[str] = list(font_dirs or [])
        self.extra_fallbacks: List[str] = list(extra_fallbacks or [])
        self.resolve_fonts = resolve_fonts
        self.log_level = log_level

    @classmethod
    def from_env(cls, **overrides) -> "ResolverConfig":
        """Build options from THEME_INTERPRETER_* environment variables."""
        font_dirs = [path for path in os.environ.get(FONT_DIRS_ENV, "").split(os.pathsep) if path]
        options = {
            "font_dirs": font_dirs,
            "log_level": os.environ.get(LOG_LEVEL_ENV, "WARNING").upper(),
        }
        options.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**options)

    def __repr__(self) -> str:
        return (
            f"ResolverConfig(root_scope={self.root_scope!r}, font_dirs={self.font_dirs!r}, "
            f"extra_fallbacks={self.extra_fallbacks!r}, resolve_fonts={self.resolve_fonts!r})"
        )
