#!/usr/bin/env python3
"""
Release filename parser

Decomposes scene-release filenames into title, year, languages, codecs,
channel layout, resolution, edition flags, source flags, release group and
provider tags. No network access, no filesystem access, no shared state:
every call is a pure function of its input and is safe to run from any
number of threads.

Absent facets stay None / empty on the dataclass and are dropped from
to_dict(); multi is the one field that is always reported.
"""

import logging
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Dict, List, Optional

from release_parser.group import parse_release_group
from release_parser.matching import filter_empty, get_fields, get_value
from release_parser.rules import (
    AUDIO_CHANNELS_EXPS, AUDIO_CODEC_EXPS, COMPLETE_DVD_EXP, COMPLETE_EXP,
    EDITION_EXPS, LANGUAGE_EXPS, PROVIDER_EXP, RESOLUTION_EXPS, SOURCE_EXPS,
    VIDEO_CODEC_EXPS,
)
from release_parser.title import parse_title_and_year

logger = logging.getLogger(__name__)

FALLBACK_LANGUAGE = 'english'


@dataclass
class Provider:
    """Metadata provider tag embedded in a filename, e.g. {tmdb-603}"""
    name: str  # tmdb | imdb | tvdb
    id: str


@dataclass
class ParseResult:
    """Metadata extracted from a release filename"""
    title: Optional[str] = None
    year: Optional[int] = None
    audio_codec: Optional[str] = None
    audio_channels: Optional[str] = None
    video_codec: Optional[str] = None
    resolution: Optional[str] = None
    languages: List[str] = field(default_factory=list)
    edition: Dict[str, bool] = field(default_factory=dict)   # sparse: {flag: True}
    sources: Dict[str, bool] = field(default_factory=dict)   # sparse: {flag: True}
    provider: Optional[Provider] = None
    complete: Optional[bool] = None
    part: Optional[int] = None  # reserved; no rule populates it yet
    group: Optional[str] = None
    multi: bool = False

    def to_dict(self) -> dict:
        """Detected fields only; a missing key means "not detected" (multi is always kept)"""
        data = filter_empty(asdict(self))
        data['multi'] = self.multi
        return data


@dataclass
class TvParseResult(ParseResult):
    """
    TV-shaped result

    The season / episode fields are declared for consumers but no extraction
    rules exist for them yet, so they are always absent.
    """
    seasons: List[int] = field(default_factory=list)
    episode_numbers: List[int] = field(default_factory=list)
    air_date: Optional[date] = None
    full_season: Optional[bool] = None
    is_partial_season: Optional[bool] = None
    is_multi_season: Optional[bool] = None
    is_season_extra: Optional[bool] = None
    is_special: Optional[bool] = None
    season_part: Optional[int] = None


class FilenameParser:
    """Parse release metadata from scene-style filenames"""

    def _strip_title(self, filename: str, title: Optional[str]) -> str:
        """Lower-cased filename with dots as spaces and the title removed"""
        text = filename.replace('.', ' ').lower()
        if title:
            text = text.replace(title.lower(), '', 1)
        return text

    def _extract_languages(self, text: str) -> List[str]:
        """Languages in rule-table order, with the English fallback applied"""
        languages = get_fields(text, LANGUAGE_EXPS, as_array=True)

        # Nothing detected, or a bare MULTi/DUAL marker: the other track is English
        if not languages or ('multi' in languages and FALLBACK_LANGUAGE not in languages):
            languages.append(FALLBACK_LANGUAGE)

        return languages

    def _extract_provider(self, filename: str) -> Optional[Provider]:
        match = PROVIDER_EXP.search(filename)
        if not match:
            return None
        return Provider(name=match.group('name').lower(), id=match.group('id'))

    def _is_complete(self, filename: str) -> Optional[bool]:
        if COMPLETE_EXP.search(filename) or COMPLETE_DVD_EXP.search(filename):
            return True
        return None

    def parse(self, filename: str, is_tv: bool = False) -> ParseResult:
        """
        Extract metadata from a release filename

        Args:
            filename: Release name; the extension may be present
            is_tv: Return the TV-shaped result

        Returns:
            TvParseResult when is_tv is set, otherwise ParseResult. Empty input
            gives a result with every optional field absent.
        """
        result = TvParseResult() if is_tv else ParseResult()

        if not filename or not filename.strip():
            logger.debug("Empty filename, nothing to parse")
            return result

        parsed = parse_title_and_year(filename)
        without_title = self._strip_title(filename, parsed.title)

        languages = self._extract_languages(without_title)

        result.title = parsed.title or None
        result.year = parsed.year
        result.languages = languages
        result.multi = 'multi' in languages

        # Codec tokens can sit in front of the title boundary, so these use the full name
        result.audio_channels = get_value(filename, AUDIO_CHANNELS_EXPS)
        result.audio_codec = get_value(filename, AUDIO_CODEC_EXPS)
        result.video_codec = get_value(filename, VIDEO_CODEC_EXPS)
        result.resolution = get_value(filename, RESOLUTION_EXPS)

        result.edition = get_fields(without_title, EDITION_EXPS)
        result.sources = get_fields(without_title, SOURCE_EXPS)

        result.provider = self._extract_provider(filename)
        result.complete = self._is_complete(filename)
        result.group = parse_release_group(filename)

        logger.debug(f"Parsed {filename!r}: title={result.title!r} year={result.year}")
        return result


_default_parser = FilenameParser()


def parse_filename(filename: str, is_tv: bool = False) -> ParseResult:
    """Parse a release filename (TV-shaped result when is_tv is set)"""
    return _default_parser.parse(filename, is_tv)


def parse_movie_filename(filename: str) -> ParseResult:
    """Parse a release filename into the movie-shaped result"""
    return _default_parser.parse(filename, False)


def parse_tv_filename(filename: str) -> TvParseResult:
    """Parse a release filename into the TV-shaped result"""
    return _default_parser.parse(filename, True)
