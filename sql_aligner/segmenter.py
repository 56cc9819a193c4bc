"""
Segmenteur de clauses.

Découpe le texte qui suit un mot-clé VALUES (ou le corps d'un CREATE TABLE)
en lignes, et chaque ligne en colonnes, en s'appuyant sur le scanner pour
ignorer les virgules et parenthèses situées dans les chaînes ou les
commentaires.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .scanner import SQLScanner, ScanEvent


class ClauseShape(Enum):
    """Forme d'une clause."""
    ROWS = "rows"              # (a, b), (c, d), ...
    FLAT_LIST = "flat_list"    # (def1, def2, ...)


@dataclass
class Row:
    """Un tuple parenthésé de valeurs."""
    values: List[str] = field(default_factory=list)
    leading_comments: List[str] = field(default_factory=list)
    has_inline_comment: bool = False

    def __len__(self):
        return len(self.values)


@dataclass
class ClauseExtent:
    """Étendue d'une clause dans le texte analysé."""
    end: int                 # Position après le dernier caractère de la clause
    terminator: str = ""     # ';', ',' ou ''

    def text(self, source: str) -> str:
        return source[:self.end]


@dataclass
class SegmentedClause:
    """Résultat de la segmentation d'une clause."""
    rows: List[Row] = field(default_factory=list)
    trailing_comments: List[str] = field(default_factory=list)
    terminator: str = ""

    @property
    def arities(self) -> List[int]:
        return [len(row) for row in self.rows]

    @property
    def is_ragged(self) -> bool:
        return len(set(self.arities)) > 1

    @property
    def has_inline_comments(self) -> bool:
        return any(row.has_inline_comment for row in self.rows)


def _skip_comment(events: List[ScanEvent], i: int) -> int:
    """Retourne l'index qui suit le commentaire commençant à i."""
    while i < len(events) and events[i].in_comment:
        i += 1
    return i


def starts_with_group(text: str) -> bool:
    """Vrai si le premier caractère significatif (hors espaces et commentaires) est '('."""
    for event in SQLScanner(text).scan():
        if event.in_comment or (event.is_code and event.char.isspace()):
            continue
        return event.is_syntax and event.char == '('
    return False


def find_clause_extent(text: str, shape: ClauseShape = ClauseShape.ROWS) -> Optional[ClauseExtent]:
    """
    Localise la fin d'une clause.

    Le texte n'est parcouru que jusqu'à la fin de la clause : le reste du
    document n'est pas scanné.

    Args:
        text: Texte commençant juste après le mot-clé (espaces/commentaires permis)
        shape: Forme attendue de la clause

    Returns:
        L'étendue de la clause, ou None si aucune ligne ne la commence ou
        si le scan se termine dans une chaîne ou avec une parenthèse ouverte
    """
    scanner = SQLScanner(text)
    events = scanner.scan()

    rows_seen = 0
    last_row_end = None     # Position après la dernière parenthèse fermante de niveau 0
    pending_comma = None    # Position de la virgule qui suit la dernière ligne

    for event in events:
        if event.in_comment:
            continue

        if event.depth > 0:
            if event.is_syntax and event.char == ')' and event.depth == 1:
                last_row_end = event.position + 1
                pending_comma = None
                rows_seen += 1
                if shape == ClauseShape.FLAT_LIST:
                    return _close_flat_list(events, last_row_end)
            continue

        char = event.char
        if not event.is_syntax:
            break
        if char.isspace():
            continue

        if char == '(':
            if rows_seen and pending_comma is None:
                # Deux groupes sans séparateur : ce n'est plus notre clause
                break
            continue

        if char == ',' and rows_seen and pending_comma is None:
            pending_comma = event.position
            continue

        if char == ';' and rows_seen and pending_comma is None:
            return ClauseExtent(event.position + 1, ';')

        break
    else:
        # Fin du texte : un groupe ouvert ou une chaîne ouverte invalide la clause
        if scanner.unterminated:
            return None

    if not rows_seen:
        return None
    if pending_comma is not None:
        return ClauseExtent(pending_comma + 1, ',')
    return ClauseExtent(last_row_end, '')


def _close_flat_list(events: Iterator[ScanEvent], end: int) -> ClauseExtent:
    """Inclut un ';' qui suit immédiatement (aux espaces près) la liste."""
    for event in events:
        if event.is_code and event.char.isspace():
            continue
        if event.is_syntax and event.char == ';':
            return ClauseExtent(event.position + 1, ';')
        break
    return ClauseExtent(end, '')


def split_rows(extent_text: str) -> Optional[SegmentedClause]:
    """
    Découpe une clause (déjà délimitée) en lignes et colonnes.

    Une ligne commence au passage de la profondeur 0 à 1 et se termine au
    passage de 1 à 0. Une virgule de niveau 1 hors chaîne sépare deux
    colonnes. Les commentaires entre les lignes sont conservés.

    Args:
        extent_text: Texte de la clause, terminateur compris

    Returns:
        SegmentedClause, ou None si une fermeture ou une virgule de niveau 1
        arrive hors de toute ligne
    """
    clause = SegmentedClause()
    events = list(SQLScanner(extent_text).scan())

    pending_comments: List[str] = []
    current: Optional[Row] = None
    column: List[str] = []
    i = 0

    while i < len(events):
        event = events[i]
        char = event.char

        if event.in_comment:
            end = _skip_comment(events, i)
            comment = extent_text[event.position:events[end - 1].position + 1]
            if current is None:
                pending_comments.append(comment.rstrip())
            else:
                current.has_inline_comment = True
                column.append(comment)
            i = end
            continue

        if event.is_syntax and char == '(' and event.depth == 0:
            current = Row(leading_comments=pending_comments)
            pending_comments = []
            clause.terminator = ''
            column = []
        elif event.is_syntax and char == ')' and event.depth == 1:
            if current is None:
                return None
            value = ''.join(column).strip()
            if value or current.values:
                current.values.append(value)
            clause.rows.append(current)
            current = None
        elif event.is_syntax and char == ',' and event.depth == 1:
            if current is None:
                return None
            current.values.append(''.join(column).strip())
            column = []
        elif event.depth >= 1:
            column.append(char)
        elif event.is_syntax and char in (';', ','):
            clause.terminator = char

        i += 1

    clause.trailing_comments = pending_comments
    return clause


def segment_clause(text: str, shape: ClauseShape = ClauseShape.ROWS):
    """
    Localise puis découpe une clause.

    Returns:
        (ClauseExtent, SegmentedClause), ou None si la clause est introuvable
        ou ne se découpe pas
    """
    extent = find_clause_extent(text, shape)
    if extent is None:
        return None
    clause = split_rows(extent.text(text))
    if clause is None:
        return None
    clause.terminator = extent.terminator
    return extent, clause
