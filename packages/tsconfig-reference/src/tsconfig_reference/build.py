from __future__ import annotations

from pathlib import Path

from .assembler import AssembledDocument, assemble_document
from .catalog import ORDERED_CATEGORIES, Catalog, load_catalog
from .context import BuildContext
from .emitter import emit, raise_on_drift, render_language, render_languages_index
from .errors import BuildError
from .exit_codes import ERR_CONTENT
from .locale import LocaleResolver
from .logging import log_event
from .rules import DEFAULT_RULES, MembershipRules
from .sections import Section, build_sections, classify, compiler_categories


def discover_languages(copy_dir: Path) -> list[str]:
    if not copy_dir.is_dir():
        raise BuildError(
            f"content directory not found: {copy_dir}", ERR_CONTENT, kind="missing_content", path=str(copy_dir)
        )
    return sorted(p.name for p in copy_dir.iterdir() if p.is_dir() and not p.name.startswith("."))


def build_language(
    ctx: BuildContext,
    language: str,
    sections: tuple[Section, ...],
    catalog: Catalog,
    rules: MembershipRules = DEFAULT_RULES,
) -> AssembledDocument:
    resolver = LocaleResolver.for_language(ctx.copy_dir, language, ctx.fallback_language)
    document = assemble_document(sections, catalog, resolver, rules)
    log_event(
        ctx,
        "info",
        "assembler",
        "language",
        language=language,
        categories=len(document.categories),
        options=len(document.options),
    )
    return document


def run_build(ctx: BuildContext, rules: MembershipRules = DEFAULT_RULES) -> list[str]:
    """Generate every language's reference outputs; returns the processed languages."""
    catalog = load_catalog(ctx.data_dir, ORDERED_CATEGORIES)
    classify(catalog, rules, compiler_categories(ORDERED_CATEGORIES))
    sections = build_sections(rules, ORDERED_CATEGORIES)
    log_event(ctx, "info", "catalog", "loaded", options=len(catalog.options), categories=len(catalog.categories))

    languages = discover_languages(ctx.copy_dir)
    if ctx.fallback_language not in languages:
        raise BuildError(
            f"fallback language `{ctx.fallback_language}` has no directory under {ctx.copy_dir}",
            ERR_CONTENT,
            kind="missing_content",
            language=ctx.fallback_language,
            path=str(ctx.copy_dir / ctx.fallback_language),
        )

    touched: list[str] = []
    for language in languages:
        document = build_language(ctx, language, sections, catalog, rules)
        touched.extend(emit(ctx, render_language(language, document)))
    touched.extend(emit(ctx, render_languages_index(languages)))
    if ctx.check:
        raise_on_drift(touched)
    return languages
