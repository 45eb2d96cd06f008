"""
Configuration Module
Static settings for class extraction and the logging setup used by the entry points.
"""

import logging
import os
from typing import Dict, Final, Optional, Set, Tuple

# --- Expression parsing ---
# Class-joining helpers whose arguments are analysed, e.g. className={clsx(...)}
HELPER_FUNCTIONS: Final[Tuple[str, ...]] = (
    'clsx',
    'classnames',
    'classNames',
    'cn',
    'cx',
    'twMerge',
    'twJoin',
    'cva',
    'tw',
)

# Nesting levels (ternary chains, template interpolations) before a fragment is dropped
MAX_EXPRESSION_DEPTH: Final[int] = 200

# --- Source files ---
EXTENSION_GROUPS: Final[Dict[str, Set[str]]] = {
    'html': {'.html', '.htm'},
    'jsx': {'.jsx', '.tsx', '.js', '.ts'},
    'vue': {'.vue'},
    'svelte': {'.svelte'},
    'astro': {'.astro'},
}

# --- Logging ---
LOG_LEVEL_ENV: Final[str] = 'CLASS_EXTRACTOR_LOG_LEVEL'
DEFAULT_LOG_LEVEL: Final[str] = 'WARNING'
LOG_FORMAT: Final[str] = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


def source_extensions() -> Set[str]:
    """All file extensions that may contain class attributes."""
    extensions = set()
    for group in EXTENSION_GROUPS.values():
        extensions |= group
    return extensions


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the CLI and the web app."""
    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.WARNING), format=LOG_FORMAT)
