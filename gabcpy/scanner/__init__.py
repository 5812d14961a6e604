"""Scanner."""

from gabcpy.scanner.scanner import Scanner, scan
from gabcpy.scanner.tokens import Fragment, FragmentKind

__all__ = ["Fragment", "FragmentKind", "Scanner", "scan"]
