"""Used-key collection over a source tree."""

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Union

import structlog

from ..config.settings import DEFAULT_EXTENSIONS
from ..errors import ParseError
from .script import KeyReference, extract_from_script
from .vue import extract_from_vue

logger = structlog.get_logger(__name__)

IGNORED_DIRECTORIES = frozenset({"node_modules"})


def iter_source_files(
    src_roots: Iterable[Union[str, Path]],
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> Iterator[Path]:
    """Files under `src_roots` with one of `extensions`, in a stable order."""
    for root in src_roots:
        root = Path(root)
        if root.is_file():
            if root.suffix in extensions:
                yield root
            continue
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(
                d for d in dirnames if d not in IGNORED_DIRECTORIES and not d.startswith(".")
            )
            for filename in sorted(filenames):
                if os.path.splitext(filename)[1] in extensions:
                    yield Path(dirpath) / filename


def extract_key_references(path: Union[str, Path]) -> List[KeyReference]:
    """Key references of one source file.

    Raises:
        ParseError: the file (or its script block) cannot be parsed.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Cannot read {path}: {e}", filename=str(path), previous_error=e) from e

    if path.suffix == ".vue":
        return extract_from_vue(text, str(path))
    return extract_from_script(text, filename=str(path))


def collect_keys(
    src_roots: Iterable[Union[str, Path]],
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> List[str]:
    """Sorted set of literal keys used anywhere under `src_roots`.

    Files that fail to parse are logged and skipped.
    """
    keys = set()
    file_count = 0
    for path in iter_source_files(src_roots, extensions):
        file_count += 1
        try:
            references = extract_key_references(path)
        except ParseError as e:
            logger.warning("Skipping unparseable source file", file=str(path), error=e.message)
            continue
        keys.update(reference.key for reference in references)

    logger.debug("Collected used keys", files=file_count, keys=len(keys))
    return sorted(keys)
