"""
Localisation des instructions dans un document SQL.

Trouve les en-têtes d'instructions (INSERT ... VALUES, CREATE TABLE) situés
dans le code, c'est-à-dire hors chaînes et hors commentaires, et réinsère
les clauses reformatées dans le texte d'origine.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .scanner import CharContext, context_mask
from .statements import StatementKind


@dataclass
class StatementMatch:
    """Un en-tête d'instruction trouvé dans le document."""
    kind: StatementKind
    start: int          # Début de l'en-tête
    body_start: int     # Début de la clause (après VALUES ou avant la parenthèse)
    header: str         # En-tête tel qu'écrit
    keyword: Optional[str] = None

    def __repr__(self):
        return f"StatementMatch({self.kind.name}, start={self.start}, body_start={self.body_start})"


@dataclass
class Replacement:
    """Remplacement d'une plage [start, end) du document."""
    start: int
    end: int
    text: str


def find_statements(sql: str, kinds: Sequence[StatementKind]) -> List[StatementMatch]:
    """
    Trouve tous les en-têtes d'instructions du document.

    Un en-tête n'est retenu que s'il commence dans le code et ne contient
    aucun commentaire ; un INSERT écrit dans une chaîne ou un commentaire
    est donc ignoré.

    Args:
        sql: Document SQL
        kinds: Types d'instructions à rechercher

    Returns:
        Liste de StatementMatch triée par position
    """
    if not sql:
        return []

    mask = context_mask(sql)
    matches = []

    for kind in kinds:
        for m in kind.pattern.finditer(sql):
            start, body_start = m.start(), m.end()
            if mask[start] != CharContext.CODE:
                continue
            if any(ctx == CharContext.COMMENT for ctx in mask[start:body_start]):
                continue
            if body_start < len(sql) and mask[body_start] == CharContext.STRING:
                continue
            matches.append(StatementMatch(kind, start, body_start, m.group('header'),
                                          m.groupdict().get('keyword')))

    matches.sort(key=lambda match: match.start)
    return matches


def drop_overlapping(replacements: Sequence[Replacement]) -> List[Replacement]:
    """Écarte les remplacements qui chevauchent un remplacement antérieur."""
    kept = []
    for replacement in sorted(replacements, key=lambda r: r.start):
        if kept and replacement.start < kept[-1].end:
            continue
        kept.append(replacement)
    return kept


def splice(sql: str, replacements: Sequence[Replacement]) -> str:
    """
    Applique les remplacements au document.

    Les remplacements sont appliqués de la fin vers le début, de sorte
    qu'un remplacement ne décale jamais les positions de ceux qui restent.

    Args:
        sql: Document d'origine
        replacements: Remplacements sans chevauchement

    Returns:
        Document modifié
    """
    result = sql
    for replacement in sorted(replacements, key=lambda r: r.start, reverse=True):
        result = result[:replacement.start] + replacement.text + result[replacement.end:]
    return result
