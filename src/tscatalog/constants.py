"""Shared constants for tscatalog.

Centralized configuration constants used across the syntax, runtime and tool
packages. Placing constants here avoids circular imports and provides a single
source of truth.

Constants are grouped by domain:
- Input limits: DoS prevention via size constraints
- Document format: values lupdate writes into .ts files
- Validation: thresholds used by the catalog checks
- Tools: merge and pseudo-localization defaults

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Input limits
    "MAX_SOURCE_SIZE",
    "MAX_PLACEHOLDER_NUMBER",
    # Document format
    "TS_FORMAT_VERSION",
    "TS_INDENT",
    "TS_DOCTYPE",
    "TS_XML_DECLARATION",
    # Locale
    "DEFAULT_LOCALE",
    "DEFAULT_NUMERUS_FORMS",
    # Tools
    "DEFAULT_FUZZY_THRESHOLD",
    "DEFAULT_PSEUDO_EXPANSION",
    "SOURCE_PREFIX_SEPARATOR",
    "SOURCE_COMMENT_SEPARATOR",
    # Logging
    "LOG_TRUNCATE_WARNING",
    "LOG_TRUNCATE_DEBUG",
]

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in bytes (10 MB).
# The largest real-world .ts files (full desktop suites) stay well below 5 MB.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# Highest argument marker understood by QString::arg() (%1 .. %99).
MAX_PLACEHOLDER_NUMBER: int = 99

# ============================================================================
# DOCUMENT FORMAT
# ============================================================================

# Format version written by lupdate since Qt 4.5.
TS_FORMAT_VERSION: str = "2.1"

# lupdate indents each nesting level by four spaces.
TS_INDENT: str = "    "

TS_XML_DECLARATION: str = '<?xml version="1.0" encoding="utf-8"?>'
TS_DOCTYPE: str = "<!DOCTYPE TS>"

# ============================================================================
# LOCALE
# ============================================================================

# Locale used when neither the caller nor the system provides one.
DEFAULT_LOCALE: str = "en_US"

# Qt's numerus form count for languages without CLDR data (singular, plural).
DEFAULT_NUMERUS_FORMS: int = 2

# ============================================================================
# TOOLS
# ============================================================================

# Minimum difflib ratio for reusing a translation of a changed source text.
DEFAULT_FUZZY_THRESHOLD: float = 0.8

# Pseudo-localized text grows by this ratio to expose truncation bugs.
DEFAULT_PSEUDO_EXPANSION: float = 0.3

# Source-text key convention: "Context --- text" and
# "Context -- comment --- text".
SOURCE_PREFIX_SEPARATOR: str = " --- "
SOURCE_COMMENT_SEPARATOR: str = " -- "

# ============================================================================
# LOGGING
# ============================================================================

# Warnings show more context as they're surfaced to users.
# Debug messages are high-volume, shorter keeps logs manageable.
LOG_TRUNCATE_WARNING: int = 100
LOG_TRUNCATE_DEBUG: int = 50
