"""
Commandes CLI de MediaSort.

- sort : scan, resolution et placement (avec surveillance optionnelle)
- scan : decouverte des fichiers seule
"""

from mediasort.adapters.cli.commands.sort_commands import scan, sort

__all__ = [
    "scan",
    "sort",
]
