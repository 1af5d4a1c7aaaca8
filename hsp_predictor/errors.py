"""
Exception types raised by the HSP engine.
"""

from __future__ import annotations
from typing import Optional


class HSPError(Exception):
    def __init__(
        self,
        code: str,
        message: str,
        detail: Optional[dict] = None,
    ):
        self.code = code
        self.message = message
        self.detail = detail or {}
        super().__init__(message)


class SmilesParseError(HSPError):
    """Connectivity string could not be turned into a molecular graph."""

    def __init__(self, smiles: str):
        super().__init__("smiles_parse", f"Could not parse SMILES: {smiles!r}", {"smiles": smiles})


class PatternCompileError(HSPError):
    """A SMARTS pattern from the group table is malformed."""

    def __init__(self, smarts: str):
        super().__init__("pattern_compile", f"Invalid SMARTS pattern: {smarts!r}", {"smarts": smarts})


class UnknownMethodError(HSPError):
    def __init__(self, label):
        super().__init__("unknown_method", f"Unknown HSP method: {label!r}", {"label": label})


class ConfigError(HSPError):
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__("config", message, {"path": path} if path else None)
