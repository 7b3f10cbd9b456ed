#!/usr/bin/env python3
"""
Known video file extensions

Extensions are only stripped when they are on this list, so a trailing
".DTS" or ".x264" token is never mistaken for an extension.
"""

from pathlib import Path

from release_parser.rules import FILE_EXTENSION_EXP

FILE_EXTENSIONS = {
    # Unknown
    '.webm',
    # SDTV
    '.m4v', '.3gp', '.nsv', '.ty', '.strm', '.rm', '.rmvb', '.m3u', '.ifo',
    '.mov', '.qt', '.divx', '.xvid', '.bivx', '.nrg', '.pva', '.wmv', '.asf',
    '.asx', '.ogm', '.ogv', '.m2v', '.avi', '.bin', '.dat', '.dvr-ms', '.mpg',
    '.mpeg', '.mp4', '.avc', '.vp3', '.svq3', '.nuv', '.viv', '.dv', '.fli',
    '.flv', '.wpl',
    # DVD
    '.img', '.iso', '.vob',
    # HD
    '.mkv', '.mk3d', '.ts', '.wtv',
    # Bluray
    '.m2ts',
}


def remove_extension(title: str) -> str:
    """Strip a trailing video extension; unknown suffixes are left alone"""
    match = FILE_EXTENSION_EXP.search(title)
    if match and match.group(0).lower() in FILE_EXTENSIONS:
        return title[:match.start()]
    return title


def is_video_file(path: Path) -> bool:
    """True for files with a known video extension (macOS ._ sidecars excluded)"""
    return path.suffix.lower() in FILE_EXTENSIONS and not path.name.startswith('._')
