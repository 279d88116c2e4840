"""Host-agnostic auto-growing text input sizing engine."""

__all__ = [
    "adapters",
    "engine",
    "runtime",
    "scheduling",
    "sizing",
    "surface",
]

__version__ = "0.1.0"
