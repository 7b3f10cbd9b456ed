#!/usr/bin/env python3
"""
parse_releases.py - Release filename parsing to a metadata manifest

Reads filenames only. Never opens, renames or moves media files.

Input is either names given on the command line or the video files found in
a source directory (by extension). Each name is parsed with
release_parser.parser and written to a CSV (default) or JSON manifest.

Settings come from, in increasing priority:
  built-in defaults  →  --config YAML file  →  command-line flags

Usage:
  python parse_releases.py "Get.Out.2017.1080p.BluRay.x264-GRP.mkv"
  python parse_releases.py --source-dir /path/to/media --recursive
  python parse_releases.py --source-dir /path/to/media --format json --output -
  python parse_releases.py --config config.example.yaml --workers 8
"""

import sys
import csv
import json
import logging
import argparse
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from release_parser.extensions import is_video_file, remove_extension
from release_parser.parser import FilenameParser, ParseResult

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEFAULTS = {
    'source_dir': None,
    'output': 'output/parse_manifest.csv',
    'format': 'csv',
    'recursive': False,
    'tv': False,
    'workers': 1,
    'log_level': 'INFO',
}

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']

MANIFEST_FIELDS = [
    'filename', 'title', 'year', 'resolution', 'video_codec',
    'audio_codec', 'audio_channels', 'languages', 'multi',
    'edition', 'sources', 'group', 'provider', 'complete',
]


class ConfigError(Exception):
    """Configuration file missing, unreadable or malformed"""


def load_config(config_path: Path) -> dict:
    """Load parser settings from a YAML file"""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping, got {type(config).__name__}")

    unknown = sorted(set(config) - set(DEFAULTS))
    if unknown:
        logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")

    config = {key: value for key, value in config.items() if key in DEFAULTS}

    if 'workers' in config:
        try:
            config['workers'] = int(config['workers'])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"workers must be an integer in {config_path}, got {config['workers']!r}") from e

    if 'log_level' in config:
        level = str(config['log_level']).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(
                f"log_level must be one of {', '.join(LOG_LEVELS)} in {config_path}, got {config['log_level']!r}"
            )
        config['log_level'] = level

    return config


def resolve_settings(args: argparse.Namespace, config: dict) -> dict:
    """Merge defaults, config file values and explicit command-line flags"""
    settings = dict(DEFAULTS)
    settings.update(config)
    for key in DEFAULTS:
        value = getattr(args, key, None)
        if value is not None:
            settings[key] = value
    return settings


def scan_directory(source_dir: Path, recursive: bool = False) -> List[Path]:
    """Return all video files in source_dir (subfolders too when recursive)"""
    candidates = source_dir.rglob('*') if recursive else source_dir.iterdir()
    return sorted(f for f in candidates if f.is_file() and is_video_file(f))


def parse_names(
    names: List[str],
    is_tv: bool = False,
    workers: int = 1,
) -> List[Tuple[str, Optional[ParseResult]]]:
    """
    Parse a batch of filenames

    Args:
        names:   Filenames (not paths); a known video extension is stripped first
        is_tv:   Use the TV-shaped result
        workers: Thread pool size; 1 parses inline

    Returns:
        (name, result) pairs in input order. result is None when parsing
        that name failed; the failure is logged and the batch continues.
    """
    parser = FilenameParser()

    def _parse(name: str) -> Optional[ParseResult]:
        try:
            return parser.parse(remove_extension(name), is_tv)
        except Exception as e:
            logger.error(f"Error parsing {name}: {e}")
            return None

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(_parse, names))
    else:
        results = [_parse(name) for name in names]

    return list(zip(names, results))


def _manifest_row(name: str, result: ParseResult) -> dict:
    """Flatten a result into one CSV row"""
    provider = f"{result.provider.name}-{result.provider.id}" if result.provider else ''
    return {
        'filename': name,
        'title': result.title or '',
        'year': result.year or '',
        'resolution': result.resolution or '',
        'video_codec': result.video_codec or '',
        'audio_codec': result.audio_codec or '',
        'audio_channels': result.audio_channels or '',
        'languages': ';'.join(result.languages),
        'multi': result.multi,
        'edition': ';'.join(result.edition),
        'sources': ';'.join(result.sources),
        'group': result.group or '',
        'provider': provider,
        'complete': result.complete or '',
    }


def write_manifest(rows: List[Tuple[str, ParseResult]], stream) -> None:
    """Write parse results as a properly-quoted CSV manifest"""
    writer = csv.DictWriter(stream, fieldnames=MANIFEST_FIELDS, quoting=csv.QUOTE_ALL)
    writer.writeheader()
    for name, result in rows:
        writer.writerow(_manifest_row(name, result))


def write_json(rows: List[Tuple[str, ParseResult]], stream) -> None:
    """Write parse results as a JSON list (detected fields only)"""
    payload = [{'filename': name, **result.to_dict()} for name, result in rows]
    json.dump(payload, stream, indent=2, ensure_ascii=False)
    stream.write('\n')


def write_output(rows: List[Tuple[str, ParseResult]], output: str, fmt: str) -> None:
    writer = write_json if fmt == 'json' else write_manifest

    if output == '-':
        writer(rows, sys.stdout)
        return

    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', newline='', encoding='utf-8') as f:
        writer(rows, f)
    logger.info(f"Wrote {len(rows)} results to {output_path}")


def summarize(parsed: List[Tuple[str, Optional[ParseResult]]]) -> Counter:
    stats: Counter = Counter()
    for _, result in parsed:
        if result is None:
            stats['errors'] += 1
            continue
        stats['parsed'] += 1
        stats['with_year' if result.year else 'without_year'] += 1
        if result.group:
            stats['with_group'] += 1
    return stats


def print_summary(stats: Counter) -> None:
    """Print a human-readable summary of the run (to stderr, stdout may hold the manifest)"""
    out = sys.stderr
    print(file=out)
    print("=" * 60, file=out)
    print("PARSE COMPLETE", file=out)
    print("=" * 60, file=out)
    print(f"  parsed:        {stats['parsed']}", file=out)
    print(f"  with year:     {stats['with_year']}", file=out)
    print(f"  without year:  {stats['without_year']}", file=out)
    print(f"  with group:    {stats['with_group']}", file=out)
    print(f"  errors:        {stats['errors']}", file=out)
    print(file=out)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Parse scene-release filenames into a metadata manifest',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('names', nargs='*',
                        help='Filenames to parse (in addition to --source-dir)')
    parser.add_argument('--source-dir', type=Path, dest='source_dir',
                        help='Directory to scan for video files')
    parser.add_argument('--recursive', action='store_true', default=None,
                        help='Also scan subdirectories of --source-dir')
    parser.add_argument('--tv', action='store_true', default=None,
                        help='Produce TV-shaped results')
    parser.add_argument('--format', choices=['csv', 'json'],
                        help='Output format (default: csv)')
    parser.add_argument('--output', '-o',
                        help="Output path, '-' for stdout (default: output/parse_manifest.csv)")
    parser.add_argument('--workers', type=int,
                        help='Parse with a thread pool of this size (default: 1)')
    parser.add_argument('--config', type=Path,
                        help='Optional YAML file with default settings')
    parser.add_argument('--log-level', dest='log_level',
                        choices=LOG_LEVELS,
                        help='Logging level (default: INFO)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    config = {}
    if args.config is not None:
        if not args.config.exists():
            logger.error(f"Config file not found: {args.config}")
            return 1
        try:
            config = load_config(args.config)
        except ConfigError as e:
            logger.error(str(e))
            return 1

    settings = resolve_settings(args, config)
    if settings['format'] not in ('csv', 'json'):
        logger.error(f"Unsupported output format: {settings['format']}")
        return 1
    logging.getLogger().setLevel(str(settings['log_level']).upper())

    names = list(args.names)

    if settings['source_dir']:
        source_dir = Path(settings['source_dir'])
        # Hard gate: source directory must exist (drive must be mounted)
        if not source_dir.exists():
            logger.error(f"Source directory not found: {source_dir}")
            return 1
        if not source_dir.is_dir():
            logger.error(f"Not a directory: {source_dir}")
            return 1

        files = scan_directory(source_dir, recursive=bool(settings['recursive']))
        logger.info(f"Found {len(files)} video files in {source_dir}")
        names.extend(f.name for f in files)

    if not names:
        logger.error("Nothing to parse: give filenames or --source-dir")
        return 1

    parsed = parse_names(names, is_tv=bool(settings['tv']), workers=max(1, int(settings['workers'])))
    write_output([(name, result) for name, result in parsed if result is not None],
                 str(settings['output']), settings['format'])

    stats = summarize(parsed)
    print_summary(stats)

    return 0 if stats['errors'] == 0 else 1


if __name__ == '__main__':
    sys.exit(main())
