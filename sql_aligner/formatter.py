"""
SQL Aligner - Formateur conservateur.

Aligne en colonnes les clauses VALUES des INSERT et les listes de colonnes
des CREATE TABLE, sans jamais modifier une valeur, un identifiant ou un
commentaire. Une clause ambiguë (chaîne non terminée, parenthèses
déséquilibrées, lignes d'arités différentes) est laissée intacte.

Usage:
    from sql_aligner.formatter import format_sql, SQLAligner, FormatOptions

    # Formatage simple
    formatted = format_sql("INSERT INTO t (a, b) VALUES (1, 'x'), (22, 'yy');")

    # Configuration
    aligner = SQLAligner(FormatOptions(indent_size=2, format_create_tables=False))
    formatted = aligner.format(sql)

    # Une seule clause
    result = format_clause("(1, 'x'), (22, 'yy');", header="INSERT INTO t (a, b)")
    if result.formatted:
        print(result.text)
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional

from .segmenter import ClauseShape, segment_clause, starts_with_group
from .renderer import render_rows, render_flat_list
from .statements import StatementKind, INSERT_VALUES, get_statement_kinds
from .locator import Replacement, find_statements, drop_overlapping, splice


class UnchangedReason(Enum):
    """Raisons pour lesquelles une clause est laissée intacte."""
    EMPTY = "empty input"
    NO_CLAUSE = "no parenthesized clause"
    UNTERMINATED = "unterminated string or parenthesis"
    RAGGED_ROWS = "rows have different column counts"
    NO_COLUMNS = "no columns"
    INLINE_COMMENT = "comment inside a row"
    EMPTY_DEFINITION = "empty definition"


@dataclass
class ClauseFormatResult:
    """Résultat du formatage d'une clause."""
    text: Optional[str] = None
    span_end: int = 0                       # Longueur du texte consommé
    reason: Optional[UnchangedReason] = None

    @property
    def formatted(self) -> bool:
        return self.text is not None

    @classmethod
    def unchanged(cls, reason: UnchangedReason) -> 'ClauseFormatResult':
        return cls(reason=reason)

    def unwrap_or(self, default: str) -> str:
        return self.text if self.text is not None else default


@dataclass
class FormatOptions:
    """Options de formatage."""

    # Indentation des lignes de la clause
    indent_size: int = 4
    indent_char: str = " "

    # Types d'instructions traités
    format_inserts: bool = True
    format_create_tables: bool = True

    @property
    def indent(self) -> str:
        return self.indent_char * self.indent_size


@dataclass
class ClauseReport:
    """Trace du traitement d'une instruction du document."""
    statement: str
    start: int
    result: ClauseFormatResult


@dataclass
class FormatReport:
    """Document formaté et trace de chaque instruction rencontrée."""
    sql: str
    clauses: List[ClauseReport] = field(default_factory=list)

    @property
    def formatted_count(self) -> int:
        return sum(1 for clause in self.clauses if clause.result.formatted)

    @property
    def skipped(self) -> List[ClauseReport]:
        return [clause for clause in self.clauses if not clause.result.formatted]


def format_clause(text: str,
                  header: str = "",
                  keyword: Optional[str] = None,
                  statement: StatementKind = INSERT_VALUES,
                  options: Optional[FormatOptions] = None) -> ClauseFormatResult:
    """
    Formate une clause.

    Ne lève jamais d'exception : toute clause qui ne peut pas être découpée
    sans ambiguïté donne un résultat inchangé.

    Args:
        text: Texte qui suit le mot-clé de la clause (ou commence à la
              parenthèse pour un CREATE TABLE)
        header: En-tête de l'instruction, réémis tel quel
        keyword: Mot-clé de la clause tel qu'écrit (VALUES par défaut)
        statement: Type d'instruction
        options: Options de formatage

    Returns:
        ClauseFormatResult ; span_end indique la longueur de text remplacée

    Examples:
        >>> format_clause("(1, 'x'), (22, 'yy');").text
        "VALUES\\n    ( 1, 'x' ),\\n    (22, 'yy');"
    """
    options = options or FormatOptions()

    if not text or not text.strip():
        return ClauseFormatResult.unchanged(UnchangedReason.EMPTY)
    if not starts_with_group(text):
        return ClauseFormatResult.unchanged(UnchangedReason.NO_CLAUSE)

    segmented = segment_clause(text, statement.shape)
    if segmented is None:
        return ClauseFormatResult.unchanged(UnchangedReason.UNTERMINATED)
    extent, clause = segmented

    if not clause.rows:
        return ClauseFormatResult.unchanged(UnchangedReason.NO_CLAUSE)
    if clause.has_inline_comments:
        return ClauseFormatResult.unchanged(UnchangedReason.INLINE_COMMENT)
    if clause.is_ragged:
        return ClauseFormatResult.unchanged(UnchangedReason.RAGGED_ROWS)
    if not clause.rows[0].values:
        return ClauseFormatResult.unchanged(UnchangedReason.NO_COLUMNS)

    if statement.shape == ClauseShape.FLAT_LIST:
        row = clause.rows[0]
        if len(clause.rows) != 1:
            return ClauseFormatResult.unchanged(UnchangedReason.NO_CLAUSE)
        if not all(row.values):
            return ClauseFormatResult.unchanged(UnchangedReason.EMPTY_DEFINITION)
        rendered = render_flat_list(header, row, clause.terminator, options.indent)
        return ClauseFormatResult(rendered, extent.end)

    rendered = render_rows(header, keyword or statement.clause_keyword, clause, options.indent)
    if rendered is None:
        return ClauseFormatResult.unchanged(UnchangedReason.RAGGED_ROWS)
    return ClauseFormatResult(rendered, extent.end)


class SQLAligner:
    """
    Formateur de documents SQL.

    Localise chaque instruction reconnue, formate sa clause et réinsère le
    résultat ; tout le reste du document est conservé à l'octet près.
    """

    def __init__(self, options: FormatOptions = None):
        """
        Initialise le formateur.

        Args:
            options: Options de formatage (valeurs par défaut si None)
        """
        self.options = options or FormatOptions()
        self.statement_kinds = get_statement_kinds(
            format_inserts=self.options.format_inserts,
            format_create_tables=self.options.format_create_tables,
        )

    def format_with_report(self, sql: str) -> FormatReport:
        """
        Formate un document et retourne la trace de chaque instruction.

        Args:
            sql: Document SQL

        Returns:
            FormatReport
        """
        report = FormatReport(sql)
        replacements = []

        matches = find_statements(sql, self.statement_kinds)
        for i, match in enumerate(matches):
            # Une clause ne s'étend jamais au-delà de l'en-tête suivant
            limit = matches[i + 1].start if i + 1 < len(matches) else len(sql)
            result = format_clause(
                sql[match.body_start:limit],
                header=match.header,
                keyword=match.keyword,
                statement=match.kind,
                options=self.options,
            )
            report.clauses.append(ClauseReport(match.kind.name, match.start, result))
            if result.formatted:
                replacements.append(Replacement(match.start, match.body_start + result.span_end, result.text))

        report.sql = splice(sql, drop_overlapping(replacements))
        return report

    def format(self, sql: str) -> str:
        """
        Formate un document SQL.

        Args:
            sql: Code SQL à formater

        Returns:
            Code SQL formaté (identique à l'entrée si rien n'est à aligner)
        """
        return self.format_with_report(sql).sql

    def format_file(self, filepath: str, output_path: str = None) -> str:
        """
        Formate un fichier SQL.

        Args:
            filepath: Chemin du fichier à formater
            output_path: Chemin de sortie (si None, retourne le contenu)

        Returns:
            Contenu formaté
        """
        with open(filepath, 'r', encoding='utf-8') as f:
            sql = f.read()

        formatted = self.format(sql)

        if output_path:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(formatted)

        return formatted


def format_sql(sql: str, options: FormatOptions = None, **kwargs) -> str:
    """
    Fonction utilitaire pour formater du SQL.

    Args:
        sql: Code SQL à formater
        options: Options de formatage
        **kwargs: Options supplémentaires (passées à FormatOptions)

    Returns:
        Code SQL formaté

    Examples:
        >>> format_sql("INSERT INTO t (a) VALUES (1),(22);")
        'INSERT INTO t (a)\\nVALUES\\n    ( 1),\\n    (22);'
    """
    if kwargs:
        options = FormatOptions(**kwargs)
    return SQLAligner(options).format(sql)
