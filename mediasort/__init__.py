"""
MediaSort - Rangement automatique de fichiers médias.

Ce package fournit les fonctionnalités pour scanner des répertoires,
identifier les films et séries (guessit + TMDB), calculer un chemin
canonique et déplacer chaque fichier (et ses sous-titres) dans
l'arborescence adaptée. Un mode surveillance relance le tri à chaque
changement sur le disque.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur, erreurs)
- services/ : Couche application (scan, résolution, placement, orchestration)
- adapters/ : Couche infrastructure (CLI, système de fichiers, clients API)
"""

__version__ = "0.1.0"
