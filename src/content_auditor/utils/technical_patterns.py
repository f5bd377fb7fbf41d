# src/content_auditor/utils/technical_patterns.py
"""
Regular expressions that identify code and markup idioms inside text.
A text fragment matching any of them is considered technical, not editorial.
"""
import re

TECHNICAL_PATTERNS = [
    # function declarations and anonymous function expressions
    re.compile(r"\bfunction\s+[\w$]+\s*\(", re.IGNORECASE),
    re.compile(r"\bfunction\s*\([\w$,\s]*\)\s*\{", re.IGNORECASE),
    # variable declarations
    re.compile(r"\b(?:var|let|const)\s+[\w$]+\s*=", re.IGNORECASE),
    # arrow functions
    re.compile(r"(?:\([^()]*\)|\b[\w$]+)\s*=>"),
    # inline event handlers (onclick="...", onload=...)
    re.compile(r"\bon(?:click|load|change|submit|mouse\w+|key\w+|focus|blur|error|input)\s*=", re.IGNORECASE),
    re.compile(r"\baddEventListener\s*\(", re.IGNORECASE),
    # template literal interpolation and template placeholders
    re.compile(r"\$\{[^}]*\}"),
    re.compile(r"\{\{[^}]*\}\}"),
    # stray script/style tags
    re.compile(r"</?\s*(?:script|style)\b[^>]*>", re.IGNORECASE),
    # DOM / browser API calls
    re.compile(r"\bdocument\.(?:getElementById|getElementsBy\w+|querySelector(?:All)?|createElement|write)\s*\(", re.IGNORECASE),
    re.compile(r"\bwindow\.(?:location|addEventListener|onload|dataLayer|open)\b", re.IGNORECASE),
    re.compile(r"\bconsole\.(?:log|error|warn|info|debug)\s*\(", re.IGNORECASE),
    # return statements: after a block or statement boundary, or a single expression closed by ';'
    re.compile(r"[{;]\s*return\b"),
    re.compile(r"\breturn\s+(?:[\w$.]+\s*\([^()]*\)|[\w$.\[\]'\"]+)\s*;"),
    # module syntax
    re.compile(r"\bimport\s+[\w${}*,\s]+\s+from\s+['\"]", re.IGNORECASE),
    re.compile(r"\bexport\s+(?:default|const|function|class)\b", re.IGNORECASE),
    # CSS rule blocks: .selector { property: value }
    re.compile(r"[\w\-.#:\[\]=\"' >*]+\{\s*[\w-]+\s*:[^{}]*\}"),
]
