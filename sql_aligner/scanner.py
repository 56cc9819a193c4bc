"""
Scanner (Analyseur de caractères) pour fragments SQL.

Parcourt le texte caractère par caractère en suivant les chaînes de
caractères, les échappements, les commentaires et la profondeur de
parenthèses. Le scanner ne lève jamais d'exception : un fragment qui se
termine dans une chaîne ou avec des parenthèses déséquilibrées est signalé
comme non terminé, et c'est à l'appelant de l'ignorer.
"""

from enum import Enum
from dataclasses import dataclass
from typing import List, Optional, Iterator


QUOTE_CHARS = ("'", '"', '`')


class CharContext(Enum):
    """Contexte lexical d'un caractère."""
    CODE = "code"
    STRING = "string"
    COMMENT = "comment"


@dataclass
class ScanState:
    """État transitoire du scanner."""
    in_string: bool = False
    string_delimiter: Optional[str] = None
    escaped: bool = False
    paren_depth: int = 0
    in_line_comment: bool = False
    in_block_comment: bool = False

    @property
    def in_comment(self) -> bool:
        return self.in_line_comment or self.in_block_comment

    @property
    def unterminated(self) -> bool:
        """Vrai si une chaîne ou un commentaire bloc reste ouvert, ou si les parenthèses sont déséquilibrées."""
        return self.in_string or self.in_block_comment or self.paren_depth != 0


@dataclass
class ScanEvent:
    """Un caractère et son contexte."""
    position: int
    char: str
    in_string: bool
    in_comment: bool
    depth: int  # Profondeur avant consommation du caractère
    escaped: bool = False  # Caractère pris littéralement après un antislash

    @property
    def context(self) -> CharContext:
        if self.in_string:
            return CharContext.STRING
        if self.in_comment:
            return CharContext.COMMENT
        return CharContext.CODE

    @property
    def is_code(self) -> bool:
        return not self.in_string and not self.in_comment

    @property
    def is_syntax(self) -> bool:
        """Vrai pour un caractère de code non échappé, seul à porter la structure."""
        return self.is_code and not self.escaped

    def __repr__(self):
        return f"ScanEvent({self.position}, {self.char!r}, {self.context.name}, depth={self.depth})"


class SQLScanner:
    """Machine à états caractère par caractère."""

    def __init__(self, sql: str, state: Optional[ScanState] = None):
        """
        Initialise le scanner.

        Args:
            sql: Le fragment SQL à parcourir
            state: État de départ (état neutre si None)
        """
        self.sql = sql
        self.state = state if state is not None else ScanState()
        self.pos = 0

    def _current_char(self) -> Optional[str]:
        """Retourne le caractère courant ou None si fin de chaîne."""
        if self.pos >= len(self.sql):
            return None
        return self.sql[self.pos]

    def _peek(self, offset: int = 1) -> Optional[str]:
        """Regarde le caractère à offset positions devant."""
        pos = self.pos + offset
        if pos >= len(self.sql):
            return None
        return self.sql[pos]

    def _event(self, char: str, in_string: bool, in_comment: bool, depth: int,
               escaped: bool = False) -> ScanEvent:
        return ScanEvent(self.pos, char, in_string, in_comment, depth, escaped)

    def _step(self) -> List[ScanEvent]:
        """Consomme un caractère (deux pour un délimiteur de commentaire)."""
        state = self.state
        char = self._current_char()
        depth = state.paren_depth

        # Caractère échappé : consommé tel quel
        if state.escaped:
            state.escaped = False
            event = self._event(char, state.in_string, state.in_comment, depth, escaped=True)
            self.pos += 1
            return [event]

        # Commentaire sur une ligne : fermé par le retour à la ligne (inclus)
        if state.in_line_comment:
            event = self._event(char, False, True, depth)
            if char == '\n':
                state.in_line_comment = False
            self.pos += 1
            return [event]

        # Commentaire bloc : fermé par */ (inclus)
        if state.in_block_comment:
            if char == '*' and self._peek() == '/':
                events = [self._event(char, False, True, depth)]
                self.pos += 1
                events.append(self._event('/', False, True, depth))
                self.pos += 1
                state.in_block_comment = False
                return events
            event = self._event(char, False, True, depth)
            self.pos += 1
            return [event]

        if char == '\\':
            state.escaped = True
            event = self._event(char, state.in_string, False, depth)
            self.pos += 1
            return [event]

        if state.in_string:
            event = self._event(char, True, False, depth)
            if char == state.string_delimiter:
                state.in_string = False
                state.string_delimiter = None
            self.pos += 1
            return [event]

        # Ouverture de commentaire
        two_char = char + (self._peek() or '')
        if two_char in ('--', '/*'):
            events = [self._event(char, False, True, depth)]
            self.pos += 1
            events.append(self._event(self._current_char(), False, True, depth))
            self.pos += 1
            if two_char == '--':
                state.in_line_comment = True
            else:
                state.in_block_comment = True
            return events

        if char in QUOTE_CHARS:
            state.in_string = True
            state.string_delimiter = char
            event = self._event(char, True, False, depth)
            self.pos += 1
            return [event]

        event = self._event(char, False, False, depth)
        if char == '(':
            state.paren_depth += 1
        elif char == ')':
            state.paren_depth -= 1
        self.pos += 1
        return [event]

    def scan(self) -> Iterator[ScanEvent]:
        """
        Parcourt tout le fragment.

        Yields:
            Un ScanEvent par caractère, dans l'ordre
        """
        while self.pos < len(self.sql):
            yield from self._step()

    @property
    def unterminated(self) -> bool:
        return self.state.unterminated


def scan(sql: str, state: Optional[ScanState] = None) -> List[ScanEvent]:
    """
    Fonction utilitaire pour scanner un fragment SQL.

    Args:
        sql: Le fragment à parcourir
        state: État de départ

    Returns:
        Liste d'événements, un par caractère
    """
    return list(SQLScanner(sql, state).scan())


def is_terminated(sql: str) -> bool:
    """Vrai si le fragment ne laisse ni chaîne, ni commentaire bloc, ni parenthèse ouverte."""
    scanner = SQLScanner(sql)
    for _ in scanner.scan():
        pass
    return not scanner.unterminated


def context_mask(sql: str) -> List[CharContext]:
    """
    Retourne le contexte lexical de chaque position du texte.

    Args:
        sql: Le document SQL

    Returns:
        Liste de CharContext de même longueur que sql
    """
    return [event.context for event in SQLScanner(sql).scan()]
