#!/usr/bin/env python3
"""
Title and year extraction for release filenames

Scene-release names use Title.Year.TechSpecs: everything after the year is
codec/language/resolution metadata. The extractor strips known noise, then
walks MOVIE_TITLE_YEAR_EXPS in priority order. A boundary pattern that matches
but whose title cleans down to nothing is skipped, not accepted.

When no boundary pattern fits, the title is everything in front of the first
resolution / codec / channel token (by position in the original string).
"""

import logging
import re
from typing import NamedTuple, Optional

from release_parser.matching import get_source
from release_parser.rules import (
    AUDIO_CHANNELS_EXPS, AUDIO_CODEC_EXPS, CLEAN_TORRENT_PREFIX_EXP,
    CLEAN_TORRENT_SUFFIX_EXP, COMMON_SOURCES_EXP, EDITION_EXP, GROUP_SUFFIX_EXP,
    LANGUAGE_EXP, LANGUAGE_EXPS, MOVIE_TITLE_YEAR_EXPS, REQUEST_INFO_EXP,
    RESOLUTION_EXPS, SCENE_GARBAGE_EXP, SIMPLE_TITLE_EXP, VIDEO_CODEC_EXPS,
    WEBDL_EXP, WEBSITE_PREFIX_EXP,
)

logger = logging.getLogger(__name__)

# Upper bound on codec tokens stripped by simplify_title
MAX_CODEC_STRIP = 5

# Longest filename most filesystems allow; the boundary walk never sees more
MAX_BOUNDARY_LENGTH = 255

# (pattern, count) - count=0 removes every occurrence, 1 only the first
_CLEANER_PATTERNS = [
    (REQUEST_INFO_EXP, 1),
    (COMMON_SOURCES_EXP, 0),
    (WEBDL_EXP, 1),
    (EDITION_EXP, 1),
    (LANGUAGE_EXP, 1),
    (SCENE_GARBAGE_EXP, 0),
] + [
    # Upper-cased language names that leaked in front of the year
    (re.compile(r'\b' + language.upper()), 1)
    for language in LANGUAGE_EXPS
]

# Facets whose position bounds the title when no boundary pattern matched
_POSITIONAL_FACETS = (RESOLUTION_EXPS, VIDEO_CODEC_EXPS, AUDIO_CHANNELS_EXPS, AUDIO_CODEC_EXPS)


class TitleYear(NamedTuple):
    title: str
    year: Optional[int]


def simplify_title(title: str) -> str:
    """
    Strip resolution, codec, source and site-branding noise from a filename

    Args:
        title: Raw filename

    Returns:
        Simplified, trimmed string
    """
    simplified = SIMPLE_TITLE_EXP.sub('', title, count=1)
    simplified = WEBSITE_PREFIX_EXP.sub('', simplified, count=1)
    simplified = CLEAN_TORRENT_PREFIX_EXP.sub('', simplified, count=1)
    simplified = CLEAN_TORRENT_SUFFIX_EXP.sub('', simplified, count=1)
    simplified = COMMON_SOURCES_EXP.sub('', simplified)
    simplified = WEBDL_EXP.sub('', simplified, count=1)

    for _ in range(MAX_CODEC_STRIP):
        source = get_source(simplified, VIDEO_CODEC_EXPS)
        if not source:
            break
        simplified = simplified.replace(source, '', 1)

    return simplified.strip()


def release_title_cleaner(title: str) -> Optional[str]:
    """
    Turn a dot/underscore-delimited release title into readable text

    Single-letter runs are kept together as acronyms ("U.S.A.Marshals" ->
    "U.S.A. Marshals"). The letter "a" only joins a run when the previous token
    was an acronym letter or the next token is a single character.

    Args:
        title: Raw title fragment

    Returns:
        Cleaned title, or None when the fragment is empty / degenerate
    """
    if not title or title == '(':
        return None

    trimmed = title.replace('_', ' ')
    for pattern, count in _CLEANER_PATTERNS:
        trimmed = pattern.sub('', trimmed, count=count).strip()

    # Anything after a double space / double dot is leftover noise
    trimmed = trimmed.split('  ')[0].split('..')[0]

    parts = trimmed.split('.')
    words = []
    previous_acronym = False

    for n, part in enumerate(parts):
        next_part = parts[n + 1] if n + 1 < len(parts) else ''

        if len(part) == 1 and part.lower() != 'a' and not part.isdigit():
            words.append(part + '.')
            previous_acronym = True
        elif part.lower() == 'a' and (previous_acronym or len(next_part) == 1):
            words.append(part + '.')
            previous_acronym = True
        else:
            if previous_acronym:
                words.append(' ')
                previous_acronym = False
            words.append(part + ' ')

    result = ''.join(words).strip()
    return result or None


def parse_title_and_year(title: str) -> TitleYear:
    """
    Extract the human-readable title and release year from a filename

    Args:
        title: Raw filename (extension may be present)

    Returns:
        TitleYear(title, year); year is None unless a boundary pattern supplied it
    """
    simplified = simplify_title(title)
    groupless = GROUP_SUFFIX_EXP.sub('', simplified, count=1)[:MAX_BOUNDARY_LENGTH]

    for index, exp in enumerate(MOVIE_TITLE_YEAR_EXPS):
        match = exp.search(groupless)
        if not match:
            continue

        cleaned = release_title_cleaner(match.group('title') or '')
        if cleaned is None:
            logger.debug(f"Boundary pattern {index} matched {groupless!r} but title cleaned to nothing")
            continue

        year = match.group('year')
        logger.debug(f"Boundary pattern {index} matched {groupless!r}: title={cleaned!r} year={year}")
        return TitleYear(cleaned, int(year) if year else None)

    # No boundary: title runs up to the first facet token
    positions = []
    for table in _POSITIONAL_FACETS:
        source = get_source(title, table)
        if source:
            position = title.find(source)
            if position > 0:
                positions.append(position)

    if positions:
        first = min(positions)
        logger.debug(f"No boundary pattern for {title!r}; title ends at facet token index {first}")
        cleaned = release_title_cleaner(title[:first])
        return TitleYear(cleaned or title.strip(), None)

    logger.debug(f"No boundary pattern or facet token in {title!r}; using whole name as title")
    return TitleYear(title.strip(), None)
