"""tscatalog - Qt Linguist .ts translation catalog engine.

Parses and writes .ts documents byte-compatibly with lupdate, looks up
translations with Qt's semantics (contexts, disambiguation, numerus forms,
%n and %1 substitution), and ships the tooling around catalogs: a
validator, completion statistics, template merging and pseudo-localization.

Public API:
    TSTranslator - Single-locale translation lookup
    TSLocalization - Multi-locale lookup with fallback chains
    parse_ts - Parse a .ts document into a Catalog
    serialize_ts - Serialize a Catalog in lupdate's layout
    validate_catalog - Translation-quality checks

Exceptions:
    TSError - Base exception class
    TSSyntaxError - Malformed or rejected documents
    TSLookupError - Missing translations (returned, not raised)
    TSSubstitutionError - Argument mismatches (returned, not raised)
    TSCatalogError - Incompatible tool inputs

Submodules:
    tscatalog.syntax - Catalog model, parser, serializer
    tscatalog.introspection - Placeholder, markup and accelerator extraction
    tscatalog.diagnostics - Error types, formatter and validation results
    tscatalog.localization - Catalog loaders and load summaries
    tscatalog.analysis - Completion statistics
    tscatalog.tools - Merge and pseudo-localization
"""

from .diagnostics import (
    TSCatalogError,
    TSError,
    TSLookupError,
    TSSubstitutionError,
    TSSyntaxError,
)
from .localization import TSLocalization
from .runtime import TSTranslator
from .syntax import Catalog
from .syntax import parse as parse_ts
from .syntax import serialize as serialize_ts
from .validation import validate_catalog

# Version information - populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("tscatalog")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

# Qt Linguist TS format written and read by this package
__ts_format_version__ = "2.1"

__all__ = [
    "Catalog",
    "TSCatalogError",
    "TSError",
    "TSLocalization",
    "TSLookupError",
    "TSSubstitutionError",
    "TSSyntaxError",
    "TSTranslator",
    "__ts_format_version__",
    "__version__",
    "parse_ts",
    "serialize_ts",
    "validate_catalog",
]
