"""
Types d'instructions reconnus.

Chaque type décrit l'en-tête à rechercher et la forme de la clause qui le
suit ; le même segmenteur et le même rendu servent à tous les types.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern

from .segmenter import ClauseShape


# Nom de table : identifiant simple, qualifié ou quoté (`t`, [dbo].[t], "s"."t")
TARGET = r'[\w.`\[\]"]+'


@dataclass(frozen=True)
class StatementKind:
    """Description d'un type d'instruction."""

    # Nom court (insert, create_table)
    name: str

    # Motif de l'en-tête ; groupes nommés header, target et éventuellement keyword
    pattern: Pattern

    # Forme de la clause qui suit l'en-tête
    shape: ClauseShape

    # Mot-clé de la clause (VALUES) ; None si la clause suit directement l'en-tête
    clause_keyword: Optional[str] = None


INSERT_VALUES = StatementKind(
    name="insert",
    pattern=re.compile(
        r'(?P<header>\b(?:INSERT(?:\s+IGNORE)?|REPLACE)\s+INTO\s+(?P<target>' + TARGET + r')'
        r'(?:\s*\((?P<columns>[^)]*)\))?)'
        r'\s*(?P<keyword>\bVALUES\b)\s*',
        re.IGNORECASE,
    ),
    shape=ClauseShape.ROWS,
    clause_keyword="VALUES",
)

CREATE_TABLE = StatementKind(
    name="create_table",
    pattern=re.compile(
        r'(?P<header>\bCREATE\s+(?:(?:GLOBAL|LOCAL)\s+)?(?:(?:TEMPORARY|TEMP)\s+)?TABLE\s+'
        r'(?:IF\s+NOT\s+EXISTS\s+)?(?P<target>' + TARGET + r'))'
        r'\s*(?=\()',
        re.IGNORECASE,
    ),
    shape=ClauseShape.FLAT_LIST,
)


STATEMENT_KINDS = (INSERT_VALUES, CREATE_TABLE)


def get_statement_kinds(format_inserts: bool = True, format_create_tables: bool = True) -> List[StatementKind]:
    """
    Retourne les types d'instructions actifs.

    Args:
        format_inserts: Aligner les clauses INSERT ... VALUES
        format_create_tables: Aligner les listes de colonnes CREATE TABLE

    Returns:
        Liste de StatementKind
    """
    kinds = []
    if format_inserts:
        kinds.append(INSERT_VALUES)
    if format_create_tables:
        kinds.append(CREATE_TABLE)
    return kinds
