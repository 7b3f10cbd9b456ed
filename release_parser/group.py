#!/usr/bin/env python3
"""
Release group extraction

Lookup order (after dropping site prefixes, a [REQ] tag and tracker suffixes):
  1. Anime-style [SubGroup] prefix
  2. Curated exception list (groups that don't use the -GROUP suffix)
  3. Last -GROUP token, ignoring tech tags like -DL / -HD and obfuscation
     suffixes such as -Pre, -postbot or -Obfuscated
"""

from typing import Optional

from release_parser.extensions import remove_extension
from release_parser.rules import (
    ANIME_RELEASE_GROUP_EXP, CLEAN_RELEASE_GROUP_EXP, CLEAN_TORRENT_PREFIX_EXP,
    CLEAN_TORRENT_SUFFIX_EXP, EXCEPTION_RELEASE_GROUP_EXP, RELEASE_GROUP_EXP,
    WEBSITE_PREFIX_EXP,
)


def parse_release_group(title: str) -> Optional[str]:
    """
    Return the release group of a filename, or None if there isn't one

    Args:
        title: Raw filename

    Returns:
        Group name as written in the filename; purely numeric candidates
        (episode / part numbers) are rejected
    """
    title = remove_extension(title.strip())
    title = WEBSITE_PREFIX_EXP.sub('', title, count=1)
    title = CLEAN_TORRENT_PREFIX_EXP.sub('', title, count=1).lstrip()
    title = CLEAN_TORRENT_SUFFIX_EXP.sub('', title, count=1)

    anime_match = ANIME_RELEASE_GROUP_EXP.search(title)
    if anime_match:
        return anime_match.group('subgroup')

    title = CLEAN_RELEASE_GROUP_EXP.sub('', title)

    exception_match = EXCEPTION_RELEASE_GROUP_EXP.search(title)
    if exception_match:
        return exception_match.group('releasegroup')

    matches = list(RELEASE_GROUP_EXP.finditer(title))
    if not matches:
        return None

    group = matches[-1].group('releasegroup')
    if group.isdigit():
        return None
    return group
