"""
Entités métier avec identité.

Exports :
- Candidate : Fichier découvert en attente de tri
- SortRun, RunStats : État d'un passage de tri
"""

from mediasort.core.entities.candidate import Candidate
from mediasort.core.entities.sort_run import RunStats, SortRun

__all__ = [
    "Candidate",
    "RunStats",
    "SortRun",
]
