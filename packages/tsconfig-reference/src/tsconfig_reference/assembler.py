"""Assemble one language's reference document.

Traversal is sections -> categories -> options in declaration order. Each
step returns a fresh ``AssembledDocument``; nothing is shared between calls,
so a single section can be assembled and inspected on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Iterable

from . import markup
from .catalog import Catalog, OptionDescriptor
from .errors import BuildError
from .exit_codes import ERR_CATALOG, ERR_METADATA
from .locale import ContentFile, LocaleResolver, read_markdown_file
from .rules import DEFAULT_RULES, MembershipRules
from .sections import OptionListSection, Section, compiler_option_pool, options_for_category, options_for_list


@dataclass(frozen=True)
class OptionSummary:
    id: str
    display: str
    oneliner: str
    category_id: str
    category_display: str

    def to_json(self) -> dict[str, str]:
        return {
            "id": self.id,
            "display": self.display,
            "oneliner": self.oneliner,
            "categoryID": self.category_id,
            "categoryDisplay": self.category_display,
        }


@dataclass(frozen=True)
class CategorySummary:
    display: str
    anchor: str
    options: tuple[tuple[str, str], ...]

    def to_json(self) -> dict[str, object]:
        return {
            "display": self.display,
            "anchor": self.anchor,
            "options": [{"name": name, "anchor": anchor} for name, anchor in self.options],
        }


@dataclass(frozen=True)
class AssembledDocument:
    fragments: tuple[str, ...] = ()
    anchors: tuple[str, ...] = ()
    categories: tuple[CategorySummary, ...] = ()
    options: tuple[OptionSummary, ...] = ()

    def extend(self, other: "AssembledDocument") -> "AssembledDocument":
        return AssembledDocument(
            fragments=self.fragments + other.fragments,
            anchors=self.anchors + other.anchors,
            categories=self.categories + other.categories,
            options=self.options + other.options,
        )


def _require(content: ContentFile, key: str, message: str, language: str) -> str:
    value = content.front_matter.get(key)
    if value is None or value == "":
        raise BuildError(
            message,
            ERR_METADATA,
            kind="missing_front_matter",
            language=language,
            path=str(content.path) if content.path is not None else None,
        )
    return str(value)


def _load_category(resolver: LocaleResolver, key: str) -> tuple[str, ContentFile]:
    content = resolver.load(str(PurePosixPath("categories") / f"{key}.md"))
    display = _require(content, "display", f"No display data for category: {key}", resolver.language)
    return display, content


def assemble_option(
    option: OptionDescriptor,
    section_name: str,
    category_id: str,
    category_display: str,
    resolver: LocaleResolver,
) -> AssembledDocument:
    md_path = str(PurePosixPath("options") / f"{option.name}.md")
    scoped_path = str(PurePosixPath("options") / section_name / f"{option.name}.md")

    option_path = resolver.resolve(md_path, optional=True)
    scoped_option_path = resolver.resolve(scoped_path, optional=True)
    chosen = scoped_option_path or option_path
    content = read_markdown_file(chosen) if chosen is not None else ContentFile()
    hint = "" if chosen is not None else markup.missing_option_hint(option, str(resolver.locale_root / md_path))

    display = _require(
        content,
        "display",
        f"Could not find a 'display' for option: {option.name} in {resolver.language}{hint}",
        resolver.language,
    )
    oneline = _require(
        content,
        "oneline",
        f"Could not find a 'oneline' for option: {option.name} in {resolver.language}{hint}",
        resolver.language,
    )

    fragments = [
        "<section class='compiler-option'>",
        markup.option_title(option.name, display),
        "<div class='compiler-content'>",
        "<div class='markdown'>",
        content.body,
        "</div>",
    ]
    # A section-scoped page brings its own presentation, so it gets no metadata table.
    if scoped_option_path is None:
        fragments.append(markup.metadata_table(markup.metadata_rows(option)))
    fragments.append("</div></section>")

    summary = OptionSummary(
        id=option.name,
        display=display,
        oneliner=oneline,
        category_id=category_id,
        category_display=category_display,
    )
    return AssembledDocument(fragments=tuple(fragments), anchors=(option.name,), options=(summary,))


def assemble_category(
    section: Section,
    category_id: str,
    catalog: Catalog,
    resolver: LocaleResolver,
    rules: MembershipRules = DEFAULT_RULES,
) -> AssembledDocument:
    category = catalog.category(category_id)
    category_name = category_id
    result = AssembledDocument()
    if category is not None:
        category_name, content = _load_category(resolver, category_id)
        result = AssembledDocument(
            fragments=(
                "<div class='category'>",
                markup.category_title(category_id, category_name),
                content.body,
                "</div>",
            ),
            anchors=(category_id,),
        )

    if isinstance(section, OptionListSection):
        members = options_for_list(catalog, section.options)
    elif category is not None:
        members = options_for_category(compiler_option_pool(catalog.options, rules), category)
    else:
        raise BuildError(
            f"Could not find options for {category_id} in section {section.name}",
            ERR_CATALOG,
            kind="catalog_mismatch",
        )

    entries: list[tuple[str, str]] = []
    for option in members:
        part = assemble_option(option, section.name, category_id, category_name, resolver)
        entries.append((part.options[0].display, option.name))
        result = result.extend(part)
    summary = CategorySummary(display=category_name, anchor=category_id, options=tuple(entries))
    return result.extend(AssembledDocument(categories=(summary,)))


def assemble_section(
    section: Section,
    catalog: Catalog,
    resolver: LocaleResolver,
    rules: MembershipRules = DEFAULT_RULES,
) -> AssembledDocument:
    category_ids = section.category_ids
    intro = resolver.load(str(PurePosixPath("sections") / f"{section.name}.md"))
    fragments = [markup.section_open(section.name), "\n" + intro.body + "\n"]

    if len(category_ids) > 1:
        nav = [(key, _load_category(resolver, key)[0]) for key in category_ids]
        fragments.extend(markup.category_nav(nav))

    fragments.append("<div>")
    result = AssembledDocument(fragments=tuple(fragments), anchors=(section.name,))
    for category_id in category_ids:
        result = result.extend(assemble_category(section, category_id, catalog, resolver, rules))
    return result.extend(AssembledDocument(fragments=("</div>", markup.section_close())))


def assemble_document(
    sections: Iterable[Section],
    catalog: Catalog,
    resolver: LocaleResolver,
    rules: MembershipRules = DEFAULT_RULES,
) -> AssembledDocument:
    document = AssembledDocument()
    for section in sections:
        document = document.extend(assemble_section(section, catalog, resolver, rules))
    check_unique_anchors(document, resolver.language)
    return document


def check_unique_anchors(document: AssembledDocument, language: str) -> None:
    seen: set[str] = set()
    repeated: list[str] = []
    for anchor in document.anchors:
        if anchor in seen and anchor not in repeated:
            repeated.append(anchor)
        seen.add(anchor)
    if repeated:
        raise BuildError(
            f"duplicate anchors in {language} document: {', '.join(repeated)}",
            ERR_METADATA,
            kind="duplicate_anchor",
            language=language,
        )
