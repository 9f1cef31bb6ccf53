"""Static membership lists for options that do not live in `compilerOptions`."""

from __future__ import annotations

from dataclasses import dataclass

ROOT_OPTION_NAMES: tuple[str, ...] = ("files", "extends", "include", "exclude", "references")

WATCH_OPTION_NAMES: tuple[str, ...] = (
    "watchFile",
    "watchDirectory",
    "fallbackPolling",
    "synchronousWatchDirectory",
    "excludeDirectories",
    "excludeFiles",
)

TYPE_ACQUISITION_OPTION_NAMES: tuple[str, ...] = ("enable", "disableFilenameBasedTypeAcquisition")

BUILD_OPTION_NAMES: tuple[str, ...] = ("build", "verbose", "dry", "force", "clean")


@dataclass(frozen=True)
class MembershipRules:
    root: tuple[str, ...] = ROOT_OPTION_NAMES
    watch: tuple[str, ...] = WATCH_OPTION_NAMES
    type_acquisition: tuple[str, ...] = TYPE_ACQUISITION_OPTION_NAMES
    build: tuple[str, ...] = BUILD_OPTION_NAMES

    def named_groups(self) -> dict[str, tuple[str, ...]]:
        return {
            "root": self.root,
            "watch": self.watch,
            "typeAcquisition": self.type_acquisition,
            "build": self.build,
        }

    def excluded_from_compiler_options(self) -> frozenset[str]:
        return frozenset(self.root) | frozenset(self.watch) | frozenset(self.type_acquisition) | frozenset(self.build)


DEFAULT_RULES = MembershipRules()
