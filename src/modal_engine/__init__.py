"""Modal (Normal/Insert/Visual) key-dispatch engine for host text editors."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "config",
    "keys",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
