"""
throwflow.core: shared value types used across the parser, codebase and analysis.

Modules:
  - span: best-effort source locations
  - diagnostics: Diagnostic record
  - issues: issue kinds and message templates
  - type_set: Type / TypeSet algebra
"""

__all__ = [
    "span",
    "diagnostics",
    "issues",
    "type_set",
]
