"""
SQL Aligner - Un formateur SQL conservateur qui aligne les clauses VALUES en colonnes.

Ce module fournit:
- Scanner: Suivi caractère par caractère des chaînes, échappements, commentaires et parenthèses
- Segmenter: Découpage d'une clause en lignes et colonnes
- Classifier: Nature de chaque colonne (chaîne, nombre, NULL, fonction, opaque)
- Renderer: Largeur des colonnes et rendu aligné
- Locator: Recherche des instructions INSERT / CREATE TABLE dans un document
- Runner: Formatage de fichiers (découverte, sauvegarde, simulation)

Usage:
    from sql_aligner import format_sql, format_clause, SQLAligner, FormatOptions

    # Aligner un document
    formatted = format_sql("INSERT INTO t (a, b) VALUES (1, 'x'), (22, 'yy');")
    # INSERT INTO t (a, b)
    # VALUES
    #     ( 1, 'x' ),
    #     (22, 'yy');

    # Une clause seule ; une clause ambiguë est laissée intacte
    result = format_clause("(1, 2), (3, 4, 5);")
    result.formatted   # False
    result.reason      # UnchangedReason.RAGGED_ROWS
"""

from .scanner import SQLScanner, ScanState, ScanEvent, CharContext, scan, context_mask
from .segmenter import ClauseShape, Row, SegmentedClause, find_clause_extent, split_rows
from .classifier import ColumnKind, classify_value, classify_columns
from .renderer import compute_column_widths
from .statements import StatementKind, INSERT_VALUES, CREATE_TABLE
from .locator import find_statements, splice
from .formatter import (
    SQLAligner, FormatOptions, ClauseFormatResult, UnchangedReason,
    FormatReport, format_clause, format_sql,
)
from .runner import SQLAlignError, FileFormatError, RunConfig, find_sql_files, format_file

__version__ = "0.1.0"
__all__ = [
    "SQLAligner",
    "FormatOptions",
    "ClauseFormatResult",
    "UnchangedReason",
    "FormatReport",
    "format_clause",
    "format_sql",
    "SQLScanner",
    "ScanState",
    "ScanEvent",
    "CharContext",
    "ClauseShape",
    "Row",
    "SegmentedClause",
    "ColumnKind",
    "StatementKind",
    "INSERT_VALUES",
    "CREATE_TABLE",
    "SQLAlignError",
    "FileFormatError",
    "RunConfig",
]
