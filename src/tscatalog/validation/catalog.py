"""Catalog validation.

Standalone translation-quality checks for .ts catalogs. Useful for CI/CD
pipelines, translator tooling and pre-release gates, without creating a
translator instance.

Architecture:
    - validate_catalog(): Main entry point, orchestrates validation passes
    - _check_duplicates(): Pass 1 - Live messages sharing a lookup key
    - _check_message(): Pass 2 - Per-message state and translation checks
    - _check_obsolete(): Pass 3 - Obsolete/vanished entries (opt-in)

Only live messages with non-empty translations are compared against their
source text; unfinished or empty translations are reported once by their
own checks.

Python 3.13+.
"""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field, replace
from typing import TypeAlias

from tscatalog.diagnostics import (
    TSSyntaxError,
    ValidationError,
    ValidationResult,
    ValidationWarning,
)
from tscatalog.enums import TranslationType
from tscatalog.introspection import (
    MessageIntrospection,
    TextIntrospection,
    introspect_message,
    normalize_punctuation,
)
from tscatalog.runtime.plural_rules import numerus_form_count
from tscatalog.syntax import Catalog, Message, MessageKey, TSParser

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "ALL_CHECKS",
    "DEFAULT_CHECKS",
    "ValidationConfig",
    "validate_catalog",
]

logger = logging.getLogger(__name__)

# Checks that run unless disabled.
DEFAULT_CHECKS: frozenset[str] = frozenset(
    {
        "duplicate-key",
        "empty-source",
        "unfinished",
        "empty-translation",
        "placeholder-mismatch",
        "printf-mismatch",
        "markup-mismatch",
        "accelerator-mismatch",
        "punctuation-mismatch",
        "whitespace-mismatch",
        "numerus-form-count",
    }
)

# Checks that only run when requested.
_OPT_IN_CHECKS: frozenset[str] = frozenset({"source-prefix-mismatch", "obsolete-message"})

ALL_CHECKS: frozenset[str] = DEFAULT_CHECKS | _OPT_IN_CHECKS


@dataclass(frozen=True, slots=True)
class ValidationConfig:
    """Selection of catalog checks.

    Attributes:
        checks: Warning codes to report (default: all but the opt-in checks)
        source_prefix: Also check the ``Context --- text`` key convention
        obsolete: Also report obsolete and vanished entries

    Example:
        >>> config = ValidationConfig().without("unfinished")
        >>> config.is_enabled("unfinished")
        False
    """

    checks: frozenset[str] = field(default=DEFAULT_CHECKS)
    source_prefix: bool = False
    obsolete: bool = False

    def __post_init__(self) -> None:
        """Reject unknown check codes."""
        unknown = self.checks - ALL_CHECKS
        if unknown:
            msg = f"Unknown validation check(s): {', '.join(sorted(unknown))}"
            raise ValueError(msg)

    def is_enabled(self, code: str) -> bool:
        """True if warnings with this code are reported."""
        match code:
            case "source-prefix-mismatch":
                return self.source_prefix or code in self.checks
            case "obsolete-message":
                return self.obsolete or code in self.checks
            case _:
                return code in self.checks

    def without(self, *codes: str) -> "ValidationConfig":
        """Return a copy with the given checks disabled."""
        disabled = frozenset(codes)
        return replace(
            self,
            checks=self.checks - disabled,
            source_prefix=self.source_prefix and "source-prefix-mismatch" not in disabled,
            obsolete=self.obsolete and "obsolete-message" not in disabled,
        )


_Emit: TypeAlias = Callable[[str, str], None]


def _iter_live(catalog: Catalog) -> Iterator[tuple[str, Message]]:
    for context, message in catalog.iter_messages():
        if not message.is_obsolete:
            yield context, message


def _emitter(
    warnings: list[ValidationWarning], config: ValidationConfig, context: str, message: Message
) -> _Emit:
    """Build a callback appending warnings anchored at one message."""
    line = message.position.line if message.position else None
    column = message.position.column if message.position else None
    key = message.key(context)

    def emit(code: str, text: str) -> None:
        if config.is_enabled(code):
            warnings.append(
                ValidationWarning(
                    code=code,
                    message=text,
                    context=context,
                    line=line,
                    column=column,
                    key=key,
                )
            )

    return emit


def _check_duplicates(catalog: Catalog, config: ValidationConfig) -> list[ValidationWarning]:
    """Pass 1: live messages sharing (context, source, comment)."""
    warnings: list[ValidationWarning] = []
    seen: set[MessageKey] = set()
    for context, message in _iter_live(catalog):
        key = message.key(context)
        if key in seen:
            _emitter(warnings, config, context, message)(
                "duplicate-key",
                f"Duplicate message {message.source!r} in context {context!r}"
                + (f" ({message.comment})" if message.comment else "")
                + " (later definition will overwrite earlier)",
            )
        seen.add(key)
    return warnings


def _describe_numbers(numbers: frozenset[int]) -> str:
    return ", ".join(f"%{n}" for n in sorted(numbers)) or "none"


def _compare_texts(
    source: TextIntrospection, target: TextIntrospection, label: str, emit: _Emit
) -> None:
    """Compare one translated string against its source text."""
    source_args = source.arg_numbers()
    target_args = target.arg_numbers()
    if source_args != target_args:
        emit(
            "placeholder-mismatch",
            f"{label} uses {_describe_numbers(target_args)}, "
            f"source uses {_describe_numbers(source_args)}",
        )

    if source.printf_tokens() != target.printf_tokens():
        emit(
            "printf-mismatch",
            f"{label} has printf conversions {list(target.printf_tokens())}, "
            f"source has {list(source.printf_tokens())}",
        )

    if source.markup != target.markup:
        emit(
            "markup-mismatch",
            f"{label} has tags {list(target.markup)}, source has {list(source.markup)}",
        )

    if source.accelerators != target.accelerators:
        emit(
            "accelerator-mismatch",
            f"{label} has {target.accelerators} accelerator(s), "
            f"source has {source.accelerators}",
        )

    if normalize_punctuation(source.punctuation) != normalize_punctuation(target.punctuation):
        emit(
            "punctuation-mismatch",
            f"{label} ends with {target.punctuation!r}, source ends with {source.punctuation!r}",
        )

    if _edges(source.text) != _edges(target.text):
        emit(
            "whitespace-mismatch",
            f"{label} leading/trailing whitespace differs from source",
        )


def _edges(text: str) -> tuple[str, str]:
    """Leading and trailing whitespace of a string."""
    lead = len(text) - len(text.lstrip())
    trail = len(text) - len(text.rstrip())
    return text[:lead], text[len(text) - trail :]


def _check_translation(
    message: Message, info: MessageIntrospection, locale: str | None, emit: _Emit
) -> None:
    if not message.numerus:
        _compare_texts(info.source, info.translations[0], "Translation", emit)
        return

    for index, form in enumerate(info.translations):
        # Singular forms may spell the count out ("one file"), so %n is checked
        # across all forms below instead of per form.
        _compare_texts(info.source, form, f"Numerus form {index + 1}", emit)

    if info.source.has_numerus_marker() and not any(
        form.has_numerus_marker() for form in info.translations
    ):
        emit("placeholder-mismatch", "No numerus form contains %n")

    if locale:
        expected = numerus_form_count(locale)
        actual = len(message.translation.forms)
        if actual != expected:
            emit(
                "numerus-form-count",
                f"Translation has {actual} numerus form(s), {locale} needs {expected}",
            )


def _check_message(
    context: str,
    message: Message,
    config: ValidationConfig,
    locale: str | None,
) -> list[ValidationWarning]:
    """Pass 2: state and translation checks for one live message."""
    warnings: list[ValidationWarning] = []
    emit = _emitter(warnings, config, context, message)
    info = introspect_message(message)

    if not message.source:
        emit("empty-source", "Message has an empty source text")

    if config.is_enabled("source-prefix-mismatch") and info.prefix is not None:
        if info.prefix.context != context:
            emit(
                "source-prefix-mismatch",
                f"Source prefix names context {info.prefix.context!r}",
            )
        if info.prefix.comment is not None and info.prefix.comment != message.comment:
            emit(
                "source-prefix-mismatch",
                f"Source prefix names comment {info.prefix.comment!r}, "
                f"message comment is {message.comment!r}",
            )

    translation = message.translation
    if translation.type == TranslationType.UNFINISHED:
        emit("unfinished", f"Translation of {message.source!r} is unfinished")
        return warnings

    if translation.is_empty:
        emit("empty-translation", f"Finished translation of {message.source!r} is empty")
        return warnings

    _check_translation(message, info, locale, emit)
    return warnings


def _check_obsolete(catalog: Catalog, config: ValidationConfig) -> list[ValidationWarning]:
    """Pass 3: entries lupdate kept after their source string disappeared."""
    warnings: list[ValidationWarning] = []
    for context, message in catalog.iter_messages():
        if message.is_obsolete:
            _emitter(warnings, config, context, message)(
                "obsolete-message",
                f"{message.translation.type.capitalize()} entry {message.source!r} "
                "can be removed",
            )
    return warnings


def validate_catalog(
    source: str | bytes | Catalog,
    *,
    locale: str | None = None,
    config: ValidationConfig | None = None,
    parser: TSParser | None = None,
) -> ValidationResult:
    """Validate a .ts catalog.

    Validation passes:
    1. Parsing: critical failures become errors, structural problems annotations
    2. Duplicates: live messages sharing a lookup key
    3. Messages: state, placeholders, markup, accelerators, punctuation,
       whitespace, numerus forms, source-prefix convention
    4. Obsolete entries (opt-in)

    Args:
        source: Document content or an already parsed Catalog
        locale: Locale for numerus checks (default: the catalog's language)
        config: Check selection (default: ValidationConfig())
        parser: Optional parser instance (creates default if not provided)

    Returns:
        ValidationResult with parse errors, annotations and quality warnings

    Example:
        >>> result = validate_catalog(document)
        >>> for warning in result.warnings:
        ...     print(warning.format())

    Thread Safety:
        Thread-safe. Creates isolated parser if not provided.
    """
    if config is None:
        config = ValidationConfig()

    if isinstance(source, Catalog):
        catalog = source
    else:
        if parser is None:
            parser = TSParser()
        try:
            catalog = parser.parse(source)
        except TSSyntaxError as e:
            logger.error("Critical validation error: %s", e)
            span = e.diagnostic.span if e.diagnostic else None
            error = ValidationError(
                code="critical-parse-error",
                message=e.diagnostic.message if e.diagnostic else str(e),
                content=str(e),
                line=span.line if span else None,
                column=span.column if span else None,
            )
            return ValidationResult(errors=(error,), warnings=(), annotations=())

    effective_locale = locale or catalog.language

    warnings = _check_duplicates(catalog, config)
    for context, message in _iter_live(catalog):
        warnings.extend(_check_message(context, message, config, effective_locale))
    if config.is_enabled("obsolete-message"):
        warnings.extend(_check_obsolete(catalog, config))

    logger.debug(
        "Validated catalog: %d annotation(s), %d warning(s)",
        len(catalog.annotations),
        len(warnings),
    )
    return ValidationResult(errors=(), warnings=tuple(warnings), annotations=catalog.annotations)
