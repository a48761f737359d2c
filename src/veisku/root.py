"""Document root discovery."""

import logging
from pathlib import Path

from .config import MARKER_DIR, config_file_path, default_config, load_config
from .errors import DocumentRootError
from .models import DocumentRoot

logger = logging.getLogger(__name__)


def locate_marker_dir(start: Path) -> Path | None:
    """Walk upward from ``start`` to the first directory holding the marker.

    Returns None when the filesystem root is reached without finding one.
    """
    directory = start
    while True:
        logger.debug(f"Checking if {directory} contains a configuration directory")
        if (directory / MARKER_DIR).is_dir():
            logger.debug(f"Found {directory / MARKER_DIR}; using {directory} as the document root")
            return directory
        if directory.parent == directory:
            return None
        directory = directory.parent


def load_root(start: str | Path | None = None) -> DocumentRoot:
    """Locate the document root and read its configuration.

    Without a marker directory the start directory becomes the root and
    the default configuration applies.
    """
    start_dir = Path(start).resolve() if start is not None else Path.cwd()

    marker_dir = locate_marker_dir(start_dir)
    if marker_dir is None:
        logger.debug(f"Could not locate a configuration directory; using {start_dir} as the document root")
        marker_dir = start_dir
        config = default_config()
        has_marker = False
    else:
        config = load_config(config_file_path(marker_dir))
        has_marker = True

    doc_dir = marker_dir / config["root"]
    try:
        doc_dir = doc_dir.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise DocumentRootError(f"Failed to locate the document directory {doc_dir}: {e}") from e
    if not doc_dir.is_dir():
        raise DocumentRootError(f"The document root {doc_dir} is not a directory")

    return DocumentRoot(marker_dir=marker_dir, path=doc_dir, config=config, has_marker=has_marker)
