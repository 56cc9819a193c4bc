"""
Modèle de largeur et rendu des clauses.

Calcule la largeur de chaque colonne sur toutes les lignes puis produit le
texte aligné. Le rendu ne modifie jamais une valeur : seuls des espaces et
des retours à la ligne sont ajoutés autour.
"""

import re
from typing import List, Optional, Sequence

from .classifier import ColumnKind, classify_columns
from .scanner import SQLScanner
from .segmenter import Row, SegmentedClause


# Contraintes de table émises telles quelles dans un CREATE TABLE
TABLE_CONSTRAINT_KEYWORDS = {
    'primary', 'foreign', 'unique', 'key', 'index', 'constraint',
    'check', 'fulltext', 'spatial', 'exclude', 'period',
}

# Types de colonnes : « key VARCHAR(10) » est une colonne, pas un index
COLUMN_TYPES = {
    'int', 'integer', 'tinyint', 'smallint', 'mediumint', 'bigint',
    'decimal', 'numeric', 'float', 'double', 'real', 'bit',
    'char', 'varchar', 'nchar', 'nvarchar', 'character', 'binary',
    'varbinary', 'text', 'tinytext', 'mediumtext', 'longtext', 'blob',
    'enum', 'set', 'date', 'time', 'datetime', 'timestamp', 'year',
    'interval', 'json', 'jsonb', 'uuid', 'boolean', 'bool', 'money',
    'bytea', 'serial', 'bigserial', 'geometry', 'point',
}

_LEADING_WORD = re.compile(r'(\w+)\s*(.*)', re.DOTALL)
_INDEX_BODY = re.compile(r'(`[^`]*`|"[^"]*"|\w+)(\s+USING\s+\w+)?\s*\(', re.IGNORECASE)


def compute_column_widths(rows: Sequence[Sequence[str]]) -> Optional[List[int]]:
    """
    Largeur maximale de chaque index de colonne.

    Args:
        rows: Valeurs de chaque ligne

    Returns:
        Une largeur par colonne, ou None si les lignes n'ont pas toutes
        la même arité
    """
    if not rows:
        return []
    arity = len(rows[0])
    if any(len(row) != arity for row in rows):
        return None
    return [max(len(row[i]) for row in rows) for i in range(arity)]


def render_value(value: str, kind: ColumnKind, width: int) -> str:
    """Aligne une valeur selon la nature de sa colonne."""
    if not kind.padded:
        return value
    if kind.right_aligned:
        return value.rjust(width)
    return value.ljust(width)


def render_row(values: Sequence[str], kinds: Sequence[ColumnKind], widths: Sequence[int]) -> str:
    """Rend une ligne : (v1, v2, ...)."""
    fields = [render_value(value, kind, width) for value, kind, width in zip(values, kinds, widths)]
    return "(" + ", ".join(fields) + ")"


def render_rows(header: str,
                keyword: str,
                clause: SegmentedClause,
                indent: str = "    ") -> Optional[str]:
    """
    Rend une clause VALUES alignée.

    Args:
        header: En-tête de l'instruction (INSERT INTO t (a, b)), peut être vide
        keyword: Mot-clé de la clause, tel qu'écrit dans la source
        clause: Clause segmentée
        indent: Indentation des lignes

    Returns:
        Le texte de remplacement, ou None si la clause ne doit pas être
        modifiée (lignes irrégulières)
    """
    rows = [row.values for row in clause.rows]
    widths = compute_column_widths(rows)
    if widths is None:
        return None
    kinds = classify_columns(rows)

    lines = []
    if header:
        lines.append(header)
    lines.append(keyword)

    last = len(clause.rows) - 1
    for i, row in enumerate(clause.rows):
        for comment in row.leading_comments:
            lines.append(indent + comment)
        line = indent + render_row(row.values, kinds, widths)
        if i < last:
            line += ","
        lines.append(line)

    for comment in clause.trailing_comments:
        lines.append(indent + comment)

    result = "\n".join(lines)
    if clause.terminator:
        if clause.trailing_comments:
            result += "\n"
        result += clause.terminator
    return result


def split_definition(definition: str):
    """
    Sépare le nom d'une définition de colonne du reste.

    Le nom s'arrête au premier espace hors chaîne, pour que les
    identifiants quotés ("first name") restent entiers.

    Returns:
        (nom, reste)
    """
    for event in SQLScanner(definition).scan():
        if event.is_code and event.char.isspace():
            return definition[:event.position], definition[event.position:].strip()
    return definition, ""


def _names_index(rest: str) -> bool:
    """Vrai si rest a la forme « [nom] [USING type] (colonnes) »."""
    if rest.startswith('('):
        return True
    m = _INDEX_BODY.match(rest)
    return bool(m) and m.group(1).lower() not in COLUMN_TYPES


def is_table_constraint(definition: str) -> bool:
    """
    Vrai si la définition est une contrainte de table plutôt qu'une colonne.

    Le premier mot ne suffit pas : key, index ou check sont aussi des noms
    de colonnes courants. On regarde donc ce qui suit.
    """
    m = _LEADING_WORD.match(definition)
    if not m or m.group(1).lower() not in TABLE_CONSTRAINT_KEYWORDS:
        return False
    first, rest = m.group(1).lower(), m.group(2)

    if first == 'constraint':
        return True
    if first in ('primary', 'foreign'):
        return bool(re.match(r'key\b', rest, re.IGNORECASE))
    if first == 'check':
        return rest.startswith('(')
    if first == 'exclude':
        return rest.startswith('(') or bool(re.match(r'using\b', rest, re.IGNORECASE))
    if first == 'period':
        return bool(re.match(r'for\b', rest, re.IGNORECASE))
    if first in ('unique', 'fulltext', 'spatial'):
        if re.match(r'(key|index)\b', rest, re.IGNORECASE):
            return True
    return _names_index(rest)


def render_flat_list(header: str,
                     row: Row,
                     terminator: str = "",
                     indent: str = "    ") -> str:
    """
    Rend une liste de définitions (CREATE TABLE), une par ligne.

    Les noms de colonnes sont alignés à gauche sur le plus long ; les
    contraintes de table sont émises telles quelles.
    """
    columns = [split_definition(d) for d in row.values if not is_table_constraint(d)]
    name_width = max((len(name) for name, rest in columns if rest), default=0)

    lines = []
    for definition in row.values:
        if is_table_constraint(definition):
            lines.append(indent + definition)
            continue
        name, rest = split_definition(definition)
        if rest:
            lines.append(indent + name.ljust(name_width) + " " + rest)
        else:
            lines.append(indent + name)

    return header + " (\n" + ",\n".join(lines) + "\n)" + terminator
