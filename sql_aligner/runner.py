"""
Traitement des fichiers SQL.

Découverte récursive des fichiers .sql, sauvegarde optionnelle, mode
simulation. C'est la seule partie du paquet qui touche au système de
fichiers ; le formatage lui-même reste une fonction pure du texte.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from .formatter import FormatOptions, SQLAligner


logger = logging.getLogger(__name__)

# Répertoires jamais parcourus (en plus des répertoires cachés)
SKIPPED_DIRECTORIES = {'target', '.git'}


class SQLAlignError(Exception):
    """Erreur de base du paquet."""


class FileFormatError(SQLAlignError):
    """Erreur de lecture ou d'écriture d'un fichier."""
    def __init__(self, path: Union[str, Path], message: str):
        self.path = Path(path)
        self.message = message
        super().__init__(f"{path}: {message}")


@dataclass
class RunConfig:
    """Configuration d'un passage sur des fichiers."""
    dry_run: bool = False
    backup: bool = False
    options: FormatOptions = field(default_factory=FormatOptions)


@dataclass
class FileResult:
    """Résultat du traitement d'un fichier."""
    path: Path
    changed: bool = False
    written: bool = False
    backup_path: Optional[Path] = None
    formatted_clauses: int = 0


def find_sql_files(root: Union[str, Path]) -> List[Path]:
    """
    Trouve récursivement les fichiers .sql.

    Les répertoires target, .git, les répertoires cachés et les liens
    symboliques vers des répertoires sont ignorés.

    Args:
        root: Répertoire de départ

    Returns:
        Chemins triés
    """
    root = Path(root)
    found = []

    for entry in sorted(root.iterdir()):
        if entry.is_dir():
            if entry.name in SKIPPED_DIRECTORIES or entry.name.startswith('.'):
                continue
            if entry.is_symlink():
                logger.debug("Skipping symlinked directory: %s", entry)
                continue
            found.extend(find_sql_files(entry))
        elif entry.suffix == '.sql':
            logger.debug("Found SQL file: %s", entry)
            found.append(entry)

    return found


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise FileFormatError(path, f"cannot read file ({e})") from e


def _write(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding='utf-8')
    except OSError as e:
        raise FileFormatError(path, f"cannot write file ({e})") from e


def format_file(path: Union[str, Path], config: RunConfig = None) -> FileResult:
    """
    Formate un fichier en place.

    Le fichier est lu une fois, formaté en mémoire puis écrit une fois,
    et seulement si son contenu change.

    Args:
        path: Fichier à formater
        config: Configuration du passage

    Returns:
        FileResult

    Raises:
        FileFormatError: Si le fichier ne peut être lu ou écrit
    """
    config = config or RunConfig()
    path = Path(path)
    result = FileResult(path)

    logger.debug("Reading file: %s", path)
    content = _read(path)

    if config.backup and not config.dry_run:
        result.backup_path = path.with_name(path.name + '.bak')
        logger.debug("Creating backup: %s", result.backup_path)
        _write(result.backup_path, content)

    report = SQLAligner(config.options).format_with_report(content)
    result.formatted_clauses = report.formatted_count
    for skipped in report.skipped:
        logger.debug("%s: %s statement at offset %d left unchanged (%s)",
                     path, skipped.statement, skipped.start, skipped.result.reason.value)

    result.changed = report.sql != content
    if not result.changed:
        logger.debug("No changes needed for: %s", path)
        return result

    if config.dry_run:
        logger.debug("Dry run - not writing changes to %s", path)
    else:
        _write(path, report.sql)
        result.written = True

    return result


def format_files(paths: Iterable[Union[str, Path]],
                 config: RunConfig = None) -> Tuple[List[FileResult], List[FileFormatError]]:
    """
    Formate plusieurs fichiers ; l'échec d'un fichier n'arrête pas les autres.

    Returns:
        (résultats, erreurs)
    """
    results = []
    errors = []
    for path in paths:
        try:
            results.append(format_file(path, config))
        except FileFormatError as e:
            logger.debug("Error formatting %s: %s", path, e)
            errors.append(e)
    return results, errors
