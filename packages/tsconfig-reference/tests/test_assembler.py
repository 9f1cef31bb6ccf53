from __future__ import annotations

from pathlib import Path

import pytest

from helpers import categories_payload, md, write_files
from tsconfig_reference.assembler import (
    AssembledDocument,
    assemble_document,
    assemble_section,
    check_unique_anchors,
)
from tsconfig_reference.catalog import parse_catalog
from tsconfig_reference.errors import BuildError
from tsconfig_reference.exit_codes import ERR_METADATA
from tsconfig_reference.locale import LocaleResolver
from tsconfig_reference.rules import MembershipRules
from tsconfig_reference.sections import CategoryListSection, OptionListSection

STRICT = "Strict_Type_Checking_Options_6173"
RULES = MembershipRules(root=("files",), watch=(), type_acquisition=(), build=())


@pytest.fixture
def catalog():
    return parse_catalog(
        {
            "options": [
                {"name": "strict", "categoryCode": 6173, "defaultValue": "false"},
                {"name": "files", "categoryCode": 0},
            ]
        },
        categories_payload(),
    )


def _resolver(tmp_path: Path, files: dict[str, str], language: str = "en") -> LocaleResolver:
    write_files(tmp_path / language, files)
    (tmp_path / "en").mkdir(exist_ok=True)
    return LocaleResolver.for_language(tmp_path, language, "en")


BASE_FILES = {
    "sections/compilerOptions.md": md(None, body="Compiler intro\n"),
    f"categories/{STRICT}.md": md("Type Checking", body="Category copy\n"),
    "options/strict.md": md("Strict", "Enable all strict checks", "Strict body\n"),
}


def test_single_category_section_has_one_option_anchor(tmp_path: Path, catalog) -> None:
    resolver = _resolver(tmp_path, BASE_FILES)
    section = CategoryListSection("compilerOptions", (STRICT,))
    doc = assemble_document([section], catalog, resolver, RULES)

    assert doc.anchors.count("strict") == 1
    assert sum(fragment.count("id='strict'") for fragment in doc.fragments) == 1
    assert [o.id for o in doc.options] == ["strict"]
    assert doc.options[0].category_id == STRICT
    assert doc.options[0].category_display == "Type Checking"
    assert doc.options[0].oneliner == "Enable all strict checks"
    assert [c.to_json() for c in doc.categories] == [
        {"display": "Type Checking", "anchor": STRICT, "options": [{"name": "Strict", "anchor": "strict"}]}
    ]


def test_fragment_order_and_containers(tmp_path: Path, catalog) -> None:
    resolver = _resolver(tmp_path, BASE_FILES)
    doc = assemble_section(CategoryListSection("compilerOptions", (STRICT,)), catalog, resolver, RULES)
    fragments = list(doc.fragments)
    assert fragments[0].startswith('<div class="tsconfig raised main-content-block markdown">')
    assert "Compiler intro" in fragments[1]
    assert '<nav id="sticky"><ul>' not in fragments
    assert fragments.index("<div class='category'>") < fragments.index("<section class='compiler-option'>")
    assert fragments[-2:] == ["</div>", "</article></div>"]
    assert any(f.startswith("<ul class='compiler-option-md'>") for f in fragments)


def test_multiple_categories_emit_navigation(tmp_path: Path, catalog) -> None:
    basic = "Basic_Options_6172"
    files = dict(BASE_FILES)
    files[f"categories/{basic}.md"] = md("Basic", body="")
    resolver = _resolver(tmp_path, files)
    doc = assemble_section(CategoryListSection("compilerOptions", (basic, STRICT)), catalog, resolver, RULES)
    nav_start = doc.fragments.index('<nav id="sticky"><ul>')
    assert doc.fragments[nav_start + 1] == '<li><a href="#Basic_Options_6172">Basic</a></li>'
    assert doc.fragments[nav_start + 2] == f'<li><a href="#{STRICT}">Type Checking</a></li>'
    assert [c.anchor for c in doc.categories] == [basic, STRICT]
    assert doc.categories[0].options == ()


def test_option_list_section_uses_section_name_as_category(tmp_path: Path, catalog) -> None:
    files = {
        "sections/Top Level.md": md(None, body="Top\n"),
        "options/files.md": md("Files", "Include a list of files"),
    }
    resolver = _resolver(tmp_path, files)
    doc = assemble_section(OptionListSection("Top Level", ("files",)), catalog, resolver, RULES)
    assert doc.options[0].category_id == "Top Level"
    assert doc.options[0].category_display == "Top Level"
    assert "<div class='category'>" not in doc.fragments


def test_scoped_option_page_wins_and_drops_table(tmp_path: Path, catalog) -> None:
    files = {
        "sections/Top Level.md": md(None, body="Top\n"),
        "options/files.md": md("Files", "Unscoped"),
        "options/Top Level/files.md": md("Files (root)", "Scoped", "Scoped body\n"),
    }
    resolver = _resolver(tmp_path, files)
    doc = assemble_section(OptionListSection("Top Level", ("files",)), catalog, resolver, RULES)
    assert doc.options[0].oneliner == "Scoped"
    assert "Scoped body\n" in doc.fragments
    assert not any("compiler-option-md" in f for f in doc.fragments)


def test_scoped_fallback_page_wins_over_unscoped_translation(tmp_path: Path, catalog) -> None:
    write_files(
        tmp_path / "en",
        {
            "sections/Top Level.md": md(None, body="Top\n"),
            "options/Top Level/files.md": md("Files (root)", "Scoped", "Scoped body\n"),
        },
    )
    write_files(tmp_path / "ja", {"options/files.md": md("ファイル", "Unscoped")})
    resolver = LocaleResolver.for_language(tmp_path, "ja", "en")
    doc = assemble_section(OptionListSection("Top Level", ("files",)), catalog, resolver, RULES)
    assert doc.options[0].display == "Files (root)"
    assert doc.options[0].oneliner == "Scoped"
    assert not any("compiler-option-md" in f for f in doc.fragments)


def test_translation_falls_back_per_file(tmp_path: Path, catalog) -> None:
    write_files(tmp_path / "en", BASE_FILES)
    write_files(tmp_path / "ja", {"options/strict.md": md("厳格", "すべて有効")})
    resolver = LocaleResolver.for_language(tmp_path, "ja", "en")
    doc = assemble_document([CategoryListSection("compilerOptions", (STRICT,))], catalog, resolver, RULES)
    assert doc.options[0].display == "厳格"
    assert doc.options[0].category_display == "Type Checking"


def test_missing_option_file_fails_on_front_matter(tmp_path: Path, catalog) -> None:
    files = {k: v for k, v in BASE_FILES.items() if not k.startswith("options/")}
    resolver = _resolver(tmp_path, files)
    with pytest.raises(BuildError) as exc:
        assemble_section(CategoryListSection("compilerOptions", (STRICT,)), catalog, resolver, RULES)
    assert exc.value.kind == "missing_front_matter"
    assert exc.value.code == ERR_METADATA
    assert "Could not find a 'display' for option: strict in en" in str(exc.value)
    assert "oneline" in str(exc.value)


def test_missing_oneline_fails(tmp_path: Path, catalog) -> None:
    files = dict(BASE_FILES)
    files["options/strict.md"] = md("Strict")
    resolver = _resolver(tmp_path, files)
    with pytest.raises(BuildError, match="Could not find a 'oneline' for option: strict"):
        assemble_section(CategoryListSection("compilerOptions", (STRICT,)), catalog, resolver, RULES)


def test_category_without_display_fails(tmp_path: Path, catalog) -> None:
    files = dict(BASE_FILES)
    files[f"categories/{STRICT}.md"] = md(None, body="copy")
    resolver = _resolver(tmp_path, files)
    with pytest.raises(BuildError, match=f"No display data for category: {STRICT}"):
        assemble_section(CategoryListSection("compilerOptions", (STRICT,)), catalog, resolver, RULES)


def test_missing_section_intro_fails(tmp_path: Path, catalog) -> None:
    resolver = _resolver(tmp_path, {})
    with pytest.raises(BuildError) as exc:
        assemble_section(OptionListSection("watchOptions", ()), catalog, resolver, RULES)
    assert exc.value.kind == "missing_content"
    assert "sections/watchOptions.md" in str(exc.value)


def test_duplicate_anchors_rejected() -> None:
    doc = AssembledDocument(anchors=("Top Level", "files", "files"))
    with pytest.raises(BuildError) as exc:
        check_unique_anchors(doc, "en")
    assert exc.value.kind == "duplicate_anchor"
    assert "files" in str(exc.value)


def test_yaml_word_values_are_kept_as_text(tmp_path: Path, catalog) -> None:
    files = dict(BASE_FILES)
    files["options/strict.md"] = "---\ndisplay: on\noneline: no\n---\nbody\n"
    resolver = _resolver(tmp_path, files)
    doc = assemble_section(CategoryListSection("compilerOptions", (STRICT,)), catalog, resolver, RULES)
    assert doc.options[0].display == "on"
    assert doc.options[0].oneliner == "no"


def test_missing_front_matter_error_names_file_and_language(tmp_path: Path, catalog) -> None:
    files = dict(BASE_FILES)
    files["options/strict.md"] = md("Strict", oneline="")
    resolver = _resolver(tmp_path, files)
    with pytest.raises(BuildError) as exc:
        assemble_section(CategoryListSection("compilerOptions", (STRICT,)), catalog, resolver, RULES)
    assert exc.value.kind == "missing_front_matter"
    assert exc.value.language == "en"
    assert exc.value.path == str(tmp_path / "en" / "options" / "strict.md")
