from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .catalog import NON_COMPILER_CATEGORIES, ORDERED_CATEGORIES, Catalog, Category, OptionDescriptor
from .errors import BuildError
from .exit_codes import ERR_CATALOG
from .rules import DEFAULT_RULES, MembershipRules


@dataclass(frozen=True)
class OptionListSection:
    name: str
    options: tuple[str, ...]

    @property
    def category_ids(self) -> tuple[str, ...]:
        # Option-list sections carry one pseudo-category named after the section.
        return (self.name,)


@dataclass(frozen=True)
class CategoryListSection:
    name: str
    categories: tuple[str, ...]

    @property
    def category_ids(self) -> tuple[str, ...]:
        return self.categories


Section = Union[OptionListSection, CategoryListSection]


def compiler_categories(ordered: tuple[str, ...] = ORDERED_CATEGORIES) -> tuple[str, ...]:
    return tuple(key for key in ordered if key not in NON_COMPILER_CATEGORIES)


def build_sections(rules: MembershipRules = DEFAULT_RULES, ordered: tuple[str, ...] = ORDERED_CATEGORIES) -> tuple[Section, ...]:
    return (
        OptionListSection("Top Level", rules.root),
        CategoryListSection("compilerOptions", compiler_categories(ordered)),
        OptionListSection("watchOptions", rules.watch),
        OptionListSection("typeAcquisition", rules.type_acquisition),
    )


def compiler_option_pool(options: tuple[OptionDescriptor, ...], rules: MembershipRules = DEFAULT_RULES) -> tuple[OptionDescriptor, ...]:
    excluded = rules.excluded_from_compiler_options()
    return tuple(option for option in options if option.name not in excluded)


def options_for_category(pool: tuple[OptionDescriptor, ...], category: Category) -> tuple[OptionDescriptor, ...]:
    return tuple(option for option in pool if option.category_code == category.code)


def options_for_list(catalog: Catalog, names: tuple[str, ...]) -> tuple[OptionDescriptor, ...]:
    return tuple(catalog.option(name) for name in names)


def classify(
    catalog: Catalog,
    rules: MembershipRules = DEFAULT_RULES,
    categories: tuple[str, ...] | None = None,
) -> dict[str, str]:
    """Map every catalog option to the single group it is documented under.

    Groups are the named lists (``root``, ``watch``, ``typeAcquisition``,
    ``build``) or a compiler-option category key. An option claimed by two
    groups, or a compiler option whose category code matches none of the
    declared categories, is an error.
    """
    category_keys = compiler_categories() if categories is None else categories
    known = {option.name for option in catalog.options}
    assigned: dict[str, str] = {}
    for group, names in rules.named_groups().items():
        for name in names:
            if name not in known:
                continue
            if name in assigned:
                raise BuildError(
                    f"option `{name}` is listed in both `{assigned[name]}` and `{group}`",
                    ERR_CATALOG,
                    kind="classification",
                )
            assigned[name] = group

    codes: dict[str, str] = {}
    for key in category_keys:
        category = catalog.category(key)
        if category is None:
            raise BuildError(f"no catalog category for key `{key}`", ERR_CATALOG, kind="catalog_mismatch")
        codes[category.code] = key

    for option in compiler_option_pool(catalog.options, rules):
        key = codes.get(option.category_code or "")
        if key is None:
            raise BuildError(
                f"compiler option `{option.name}` has category code `{option.category_code}` "
                "which matches no compiler-option category",
                ERR_CATALOG,
                kind="classification",
            )
        assigned[option.name] = key
    return assigned
