"""
Classification des colonnes.

Attribue à chaque valeur une nature (chaîne, nombre, NULL, fonction,
opaque) qui détermine la politique d'alignement de sa colonne.
"""

import re
from enum import Enum
from typing import List, Sequence

from .scanner import SQLScanner


NUMBER_PATTERN = re.compile(r'^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$')


class ColumnKind(Enum):
    """Nature d'une colonne."""
    STRING_LITERAL = "string_literal"
    NUMERIC = "numeric"
    NULL = "null"
    FUNCTION_OR_EXPRESSION = "function_or_expression"
    OPAQUE = "opaque"

    @property
    def right_aligned(self) -> bool:
        return self in (ColumnKind.NUMERIC, ColumnKind.NULL)

    @property
    def padded(self) -> bool:
        return self != ColumnKind.FUNCTION_OR_EXPRESSION


def is_string_literal(value: str) -> bool:
    """
    Vrai si la valeur est une seule chaîne '...' complète.

    'a' || 'b' commence et finit par une apostrophe mais n'est pas un
    littéral unique : la chaîne ouverte au premier caractère doit se
    fermer exactement sur le dernier.
    """
    if len(value) < 2 or value[0] != "'" or value[-1] != "'":
        return False

    # Apostrophes doublées ('it''s') : fermeture puis réouverture immédiate
    scanner = SQLScanner(value)
    if not all(event.in_string for event in scanner.scan()):
        return False
    return not scanner.unterminated


def classify_value(value: str) -> ColumnKind:
    """
    Classe une valeur (déjà débarrassée de ses espaces).

    Args:
        value: Valeur brute d'une colonne

    Returns:
        ColumnKind
    """
    value = value.strip()
    if is_string_literal(value):
        return ColumnKind.STRING_LITERAL
    if NUMBER_PATTERN.match(value):
        return ColumnKind.NUMERIC
    if value.upper() == 'NULL':
        return ColumnKind.NULL
    if '(' in value and ')' in value:
        return ColumnKind.FUNCTION_OR_EXPRESSION
    return ColumnKind.OPAQUE


def combine_kinds(kinds: Sequence[ColumnKind]) -> ColumnKind:
    """
    Combine les natures observées d'une même colonne sur toutes les lignes.

    Une fonction ou expression l'emporte toujours ; nombres et NULL se
    combinent en NUMERIC ; tout autre mélange donne OPAQUE.
    """
    observed = set(kinds)
    if not observed:
        return ColumnKind.OPAQUE
    if ColumnKind.FUNCTION_OR_EXPRESSION in observed:
        return ColumnKind.FUNCTION_OR_EXPRESSION
    if len(observed) == 1:
        return observed.pop()
    if observed <= {ColumnKind.NUMERIC, ColumnKind.NULL}:
        return ColumnKind.NUMERIC
    return ColumnKind.OPAQUE


def classify_column(values: Sequence[str]) -> ColumnKind:
    """Classe une colonne à partir de toutes ses valeurs."""
    return combine_kinds([classify_value(value) for value in values])


def classify_columns(rows: Sequence[Sequence[str]]) -> List[ColumnKind]:
    """
    Classe chaque index de colonne.

    Args:
        rows: Lignes de même arité

    Returns:
        Une nature par index de colonne
    """
    if not rows:
        return []
    width = len(rows[0])
    return [classify_column([row[i] for row in rows]) for i in range(width)]
