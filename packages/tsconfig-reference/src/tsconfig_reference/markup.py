"""HTML fragments emitted into the reference page."""

from __future__ import annotations

import markdown

from .catalog import OptionDescriptor

RELEASE_NOTES_URL = "/docs/handbook/release-notes/typescript-{version}.html"


def render_markdown(text: str) -> str:
    return markdown.markdown(text)


def metadata_rows(option: OptionDescriptor) -> list[tuple[str, str]]:
    rows: list[tuple[str, str]] = []
    if option.deprecated:
        rows.append(("Status", "Deprecated"))
    if option.recommended:
        rows.append(("Recommended", "True"))
    if option.default_value:
        value = option.default_value if " " in option.default_value else f"`{option.default_value}`"
        rows.append(("Default", value))
    if option.allowed_values is not None:
        rows.append(("Allowed", ",<br/>".join(option.allowed_values)))
    if option.related is not None:
        links = (
            f"<a href='#{name}' aria-label=\"Jump to compiler option info for {name}\" ><code>{name}</code></a>"
            for name in option.related
        )
        rows.append(("Related", ", ".join(links)))
    if option.internal:
        rows.append(("Status", "internal"))
    if option.release_version:
        link = RELEASE_NOTES_URL.format(version=option.release_version.replace(".", "-", 1))
        rows.append(
            (
                "Released",
                f'<a aria-label="Release notes for TypeScript {option.release_version}" href="{link}">'
                f"{option.release_version}</a>",
            )
        )
    return rows


def metadata_table(rows: list[tuple[str, str]]) -> str:
    items = "\n".join(f"<li><span>{label}:</span>{render_markdown(value)}</li>" for label, value in rows)
    return f"<ul class='compiler-option-md'>{items}</ul>"


def section_open(name: str) -> str:
    return f"<div class=\"tsconfig raised main-content-block markdown\"><article id='{name}'>"


def section_close() -> str:
    return "</article></div>"


def category_nav(entries: list[tuple[str, str]]) -> list[str]:
    items = [f'<li><a href="#{anchor}">{display}</a></li>' for anchor, display in entries]
    return ['<nav id="sticky"><ul>', *items, "</ul></nav>"]


def category_title(key: str, display: str) -> str:
    return (
        f"<h2 id='{key}' ><a href='#{key}' name='{key}' aria-label=\"Link to the section {display}\" "
        f"aria-labelledby='{key}'>#</a>{display}</h2>"
    )


def option_title(name: str, display: str) -> str:
    link = (
        f"<a aria-label=\"Link to the compiler option: {name}\" id='{name}' href='#{name}' "
        f"name='{name}' aria-labelledby=\"{name}-config\">#</a>"
    )
    return f"<h3 id='{name}-config'>{link} {display} - <code>{name}</code></h3>"


def missing_option_hint(option: OptionDescriptor, path: str) -> str:
    message = option.description or ""
    return (
        "\n\n\n Run:\n"
        f"    echo '---\\ndisplay: \"{option.name}\"\\noneline: \"Does something\"\\n---\\n{message}\\n' > {path}\n\n"
        "Then add some docs and rebuild the reference.\n\n"
    )
