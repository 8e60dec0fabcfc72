"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites), objets valeur
et la taxonomie d'erreurs. Cette couche n'a AUCUNE dépendance vers
l'infrastructure (adapters, frameworks).

Sous-packages :
- entities/ : Entités métier (Candidate, SortRun)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur immutables (SortConfig, ResolvedMatch, ParsedFilename)
"""
