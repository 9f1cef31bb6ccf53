__version__ = "0.1.0"

__all__ = [
    "__version__",
    "assembler",
    "build",
    "catalog",
    "cli",
    "context",
    "emitter",
    "errors",
    "exit_codes",
    "locale",
    "logging",
    "markup",
    "rules",
    "sections",
]
