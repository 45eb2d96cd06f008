#!/usr/bin/env python3
"""
Template Class Extractor
Command-line entry point: lists the classes each class attribute applies, and when.

Usage:
    python main.py src/components/Button.tsx
    python main.py src/ --summary
    python main.py --expression "isActive ? 'bg-blue-500' : 'bg-gray-200'"
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from core.class_extractor import ClassExtractor, extract_all_class_attributes
from core.config import configure_logging
from core.expression_parser import parse_expression
from utils import file_utils

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='template-class-extractor',
        description='Extract conditional utility classes from JSX, Vue, Svelte, Angular, Solid and HTML templates.',
    )
    parser.add_argument('paths', nargs='*', help='Files or directories to scan')
    parser.add_argument('-e', '--expression', help='Parse a single class expression instead of files')
    parser.add_argument('--summary', action='store_true', help='Print class usage summaries instead of raw extractions')
    parser.add_argument('--log-level', default=None, help='Logging level (default: $CLASS_EXTRACTOR_LOG_LEVEL or WARNING)')
    return parser


def resolve_paths(paths: List[str]) -> List[Path]:
    """Expand directories into their template sources; missing paths raise FileNotFoundError."""
    files = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            files.extend(file_utils.get_all_files_by_extension(path))
        elif path.is_file():
            files.append(path)
        else:
            raise FileNotFoundError(f"No such file or directory: {raw}")
    return files


def scan_file(path: Path, summary: bool, extractor: ClassExtractor) -> Dict:
    content = file_utils.read_file_content(path)
    header = {'file': str(path), 'dialect': file_utils.dialect_for(path)}
    if summary:
        return {**header, **extractor.summarize(content)}
    return {
        **header,
        'extractions': [e.to_dict() for e in extract_all_class_attributes(content)],
    }


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.expression is not None:
        parsed = parse_expression(args.expression)
        print(json.dumps({
            'expression': args.expression,
            'matched': parsed is not None,
            'conditional_classes': [cc.to_dict() for cc in parsed or []],
        }, indent=2))
        return 0

    if not args.paths:
        build_parser().print_usage(sys.stderr)
        return 2

    try:
        files = resolve_paths(args.paths)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1

    extractor = ClassExtractor()
    results = []
    exit_code = 0
    for path in files:
        try:
            results.append(scan_file(path, args.summary, extractor))
        except OSError as e:
            logger.error(f"Error reading {path}: {str(e)}", exc_info=True)
            exit_code = 1

    print(json.dumps(results, indent=2))
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
