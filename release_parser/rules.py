#!/usr/bin/env python3
"""
Rule tables for release filename parsing

Single source of truth for every facet pattern, noise pattern and title/year
boundary pattern. DO NOT duplicate these tables in other modules - import from
here instead.

Each facet table is an ordered dict of name -> compiled pattern. Declaration
order is load-bearing: single-winner facets take the first entry that matches.
"""

import re

_I = re.IGNORECASE

# =============================================================================
# LANGUAGE
# =============================================================================

# Multi-language marker. WEB-DL must not read as "DL".
MULTI_EXP = re.compile(r'(?<!WEB-)\b(MULTi|DUAL|DL)\b', _I)

LANGUAGE_EXPS = {
    'english': re.compile(r'(?:(?<!WEB-)\b(MULTi|DUAL|DL)\b|\b(english|eng|en|fi)\b)', _I),
    'french': re.compile(r'\b(fr|french|vostfr|vo|vff|vfq|vf2|truefrench|subfrench)\b', _I),
    'spanish': re.compile(r'\b(spanish)\b', _I),
    'german': re.compile(r'\b(german|videomann)\b', _I),
    'italian': re.compile(r'\b(ita|italian)\b', _I),
    'danish': re.compile(r'\b(dk|dan|danish)\b', _I),
    'dutch': re.compile(r'\b(nl|dutch)\b', _I),
    'japanese': re.compile(r'\b(japanese)\b', _I),
    'cantonese': re.compile(r'\b(cantonese)\b', _I),
    'mandarin': re.compile(r'\b(mandarin)\b', _I),
    'russian': re.compile(r'\b(russian|rus)\b', _I),
    'polish': re.compile(r'\b(polish|pl|pldub)\b', _I),
    'vietnamese': re.compile(r'\b(vietnamese)\b', _I),
    'nordic': re.compile(r'\b(nordic|nordicsubs)\b', _I),
    'swedish': re.compile(r'\b(swedish|se|swe)\b', _I),
    'norwegian': re.compile(r'\b(norwegian|no)\b', _I),
    'finnish': re.compile(r'\b(finnish)\b', _I),
    'turkish': re.compile(r'\b(turkish)\b', _I),
    'portuguese': re.compile(r'\b(portuguese)\b', _I),
    'flemish': re.compile(r'\b(flemish)\b', _I),
    'greek': re.compile(r'\b(greek)\b', _I),
    'korean': re.compile(r'\b(korean)\b', _I),
    'hungarian': re.compile(r'\b(hungarian|hundub|hun)\b', _I),
    'persian': re.compile(r'\b(persian)\b', _I),
    'bengali': re.compile(r'\b(bengali)\b', _I),
    'bulgarian': re.compile(r'\b(bulgarian)\b', _I),
    'brazilian': re.compile(r'\b(brazilian)\b', _I),
    'hebrew': re.compile(r'\b(hebrew|HebDub)\b', _I),
    'czech': re.compile(r'\b(czech|CZ|SK)\b', _I),
    'ukrainian': re.compile(r'\b(ukrainian|ukr)\b', _I),
    'catalan': re.compile(r'\b(catalan)\b', _I),
    'chinese': re.compile(r'\b(chinese|chi)\b', _I),
    'thai': re.compile(r'\b(thai)\b', _I),
    'hindi': re.compile(r'\b(hindi|hin)\b', _I),
    'tamil': re.compile(r'\b(tamil|tam)\b', _I),
    'arabic': re.compile(r'\b(arabic)\b', _I),
    'estonian': re.compile(r'\b(estonian)\b', _I),
    'icelandic': re.compile(r'\b(icelandic|ice)\b', _I),
    'latvian': re.compile(r'\b(latvian)\b', _I),
    'lithuanian': re.compile(r'\b(lithuanian)\b', _I),
    'romanian': re.compile(r'\b(ro|romanian|rodubbed)\b', _I),
    'slovak': re.compile(r'\b(slovak|sk)\b', _I),
    'serbian': re.compile(r'\b(serbian)\b', _I),
    'multi': MULTI_EXP,
}

# =============================================================================
# AUDIO
# =============================================================================

# dts-hd MUST stay ahead of dts: "DTS-HD" also satisfies the bare dts pattern
AUDIO_CODEC_EXPS = {
    'mp3': re.compile(r'\b((LAME(?:\d)+-?(?:\d)+)|(mp3))\b', _I),
    'mp2': re.compile(r'\b((mp2))\b', _I),
    'dolby digital': re.compile(r'\b((Dolby)|(Dolby-?Digital)|(DD)|(AC3D?))\b', _I),
    'dolby atmos': re.compile(r'\b((Dolby-?Atmos))\b', _I),
    'aac': re.compile(r'\b((AAC))(\d?.?\d?)(ch)?\b', _I),
    'dolby digital plus': re.compile(r'\b((EAC3|DDP|DD\+))\b', _I),
    'flac': re.compile(r'\b((FLAC))\b', _I),
    'dts-hd': re.compile(r'\b((DTS-?HD)|(DTS(?=-?MA)|(DTS-X)))\b', _I),
    'dts': re.compile(r'\b((DTS))\b', _I),
    'dolby truehd': re.compile(r'\b((True-?HD))\b', _I),
    'opus': re.compile(r'\b((Opus))\b', _I),
    'vorbis': re.compile(r'\b((Vorbis))\b', _I),
    'pcm': re.compile(r'\b((PCM))\b', _I),
    'lpcm': re.compile(r'\b((LPCM))\b', _I),
}

AUDIO_CHANNELS_EXPS = {
    '7.1': re.compile(r'\b(7.?[01])\b', _I),
    '5.1': re.compile(r'\b((6[\W]0(?:ch)?)(?=[^\d]|$)|(5[\W][01](?:ch)?)(?=[^\d]|$)|5ch|6ch)\b', _I),
    'stereo': re.compile(r'(((2[\W]0(?:ch)?)(?=[^\d]|$))|(stereo))', _I),
    'mono': re.compile(r'((1[\W]0(?:ch)?)(?=[^\d]|$)|(mono)|(1ch))', _I),
}

# =============================================================================
# VIDEO
# =============================================================================

# xvidhd MUST stay ahead of xvid
VIDEO_CODEC_EXPS = {
    'h264': re.compile(r'(h264)', _I),
    'h265': re.compile(r'(h265)', _I),
    'x265': re.compile(r'(x265)', _I),
    'hevc': re.compile(r'(HEVC)', _I),
    'x264': re.compile(r'(x264)', _I),
    'xvidhd': re.compile(r'(XvidHD)', _I),
    'xvid': re.compile(r'(X-?vid)', _I),
    'divx': re.compile(r'(divx)', _I),
    'wmv': re.compile(r'(WMV)', _I),
    'dvdr': re.compile(r'\b(DVD-R|DVDR)\b', _I),
}

RESOLUTION_EXPS = {
    '2160p': re.compile(r'(2160p|4k[-_. ](?:UHD|HEVC|BD)|(?:UHD|HEVC|BD)[-_. ]4k|\b(4k)\b|COMPLETE.UHD|UHD.COMPLETE)', _I),
    '1080p': re.compile(r'(1080(i|p)|1920x1080)(10bit)?', _I),
    '720p': re.compile(r'(720(i|p)|1280x720|960p)(10bit)?', _I),
    '576p': re.compile(r'(576(i|p))', _I),
    '540p': re.compile(r'(540(i|p))', _I),
    '480p': re.compile(r'(480(i|p)|640x480|848x480)', _I),
}

# =============================================================================
# SOURCE / ORIGIN
# =============================================================================

WEBDL_PATTERN = (
    r'\b(?P<webdl>WEB[-_. ]DL|HDRIP|WEBDL|WEB-DLMux|NF|APTV|NETFLIX|NetflixU?HD|DSNY|DSNP|HMAX|AMZN|'
    r'AmazonHD|iTunesHD|MaxdomeHD|WebHD\b|[. ]WEB[. ](?:[xh]26[45]|DD5[. ]1)|\d+0p[. ]WEB[. ]|'
    r'\b\s/\sWEB\s/\s\b|AMZN[. ]WEB[. ])\b'
)

SOURCE_EXPS = {
    'bluray': re.compile(
        r'\b(?P<bluray>M?Blu-?Ray|HDDVD|BD|UHDBD|BDISO|BDMux|BD25|BD50|BR.?DISK|Bluray(1080|720)p?|BD(1080|720)p?)\b', _I
    ),
    'webdl': re.compile(WEBDL_PATTERN, _I),
    'webrip': re.compile(r'\b(?P<webrip>WebRip|Web-Rip|WEBCap|WEBMux)\b', _I),
    'hdtv': re.compile(r'\b(?P<hdtv>HDTV)\b', _I),
    'bdrip': re.compile(r'\b(?P<bdrip>BDRip)\b', _I),
    'brrip': re.compile(r'\b(?P<brrip>BRRip)\b', _I),
    'dvdr': re.compile(r'\b(?P<dvdr>DVD-R|DVDR)\b', _I),
    'dvd': re.compile(r'\b(?P<dvd>DVD9?|DVDRip|NTSC|PAL|xvidvd|DvDivX)\b', _I),
    'dsr': re.compile(r'\b(?P<dsr>WS[-_. ]DSR|DSR)\b', _I),
    'regional': re.compile(r'\b(?P<regional>R[0-9]{1}|REGIONAL)\b', _I),
    'ppv': re.compile(r'\b(?P<ppv>PPV)\b', _I),
    'scr': re.compile(r'\b(?P<scr>SCR|SCREENER|DVDSCR|(DVD|WEB).?SCREENER)\b', _I),
    'ts': re.compile(r'\b(?P<ts>TS|TELESYNC|HD-TS|HDTS|PDVD|TSRip|HDTSRip)\b', _I),
    'tc': re.compile(r'\b(?P<tc>TC|TELECINE|HD-TC|HDTC)\b', _I),
    'cam': re.compile(r'\b(?P<cam>CAMRIP|CAM|HDCAM|HD-CAM)\b', _I),
    'workprint': re.compile(r'\b(?P<workprint>WORKPRINT|WP)\b', _I),
    'pdtv': re.compile(r'\b(?P<pdtv>PDTV)\b', _I),
    'sdtv': re.compile(r'\b(?P<sdtv>SDTV)\b', _I),
    'tvrip': re.compile(r'\b(?P<tvrip>TVRip)\b', _I),
}

# =============================================================================
# EDITION / CUT
# =============================================================================

EDITION_EXPS = {
    'internal': re.compile(r'\b(INTERNAL)\b', _I),
    'remastered': re.compile(r'\b(Remastered|Anniversary|Restored)\b', _I),
    'imax': re.compile(r'\b(IMAX)\b', _I),
    'unrated': re.compile(r'\b(Uncensored|Unrated)\b', _I),
    'extended': re.compile(r'\b(Extended|Uncut|Ultimate|Rogue|Collector)\b', _I),
    'theatrical': re.compile(r'\b(Theatrical)\b', _I),
    'directors': re.compile(r'\b(Directors?)\b', _I),
    'fan_edit': re.compile(r'\b(Despecialized|Fan.?Edit)\b', _I),
    'limited': re.compile(r'\b(LIMITED)\b', _I),
    'hdr': re.compile(r'\b(HDR)\b', _I),
    'three_d': re.compile(r'\b(3D)\b', _I),
    'hsbs': re.compile(r'\b(Half-?SBS|HSBS)\b', _I),
    'sbs': re.compile(r'\b((?<!H)(?<!HALF-)SBS)\b', _I),
    'hou': re.compile(r'\b(HOU)\b', _I),
    'uhd': re.compile(r'\b(UHD)\b', _I),
    'oar': re.compile(r'\b(OAR)\b', _I),
    'dolby_vision': re.compile(r'\b(DV(\b(HDR10|HLG|SDR))?)\b', _I),
    'hardcoded_subs': re.compile(
        r'\b((?P<hcsub>(\w+(?<!SOFT)(?<!HORRIBLE)SUBS?))|(?P<hc>(HC|SUBBED)))\b', _I
    ),
    'deleted_scenes': re.compile(r'\b((Bonus.)?Deleted.Scenes)\b', _I),
    'bonus_content': re.compile(
        r'\b((Bonus|Extras|Behind.the.Scenes|Making.of|Interviews|Featurettes|Outtakes|Bloopers|Gag.Reel)'
        r'.(?!(Deleted.Scenes)))\b', _I
    ),
    'bw': re.compile(r'\b(BW)\b', _I),
}

# =============================================================================
# RELEASE GROUP
# =============================================================================

# Obfuscation / reposting suffixes appended after the real group
CLEAN_RELEASE_GROUP_EXP = re.compile(
    r'(-(RP|1|NZBGeek|Obfuscated|Obfuscation|Scrambled|sample|Pre|postbot|xpost|Rakuv[a-z0-9]*|WhiteRev|'
    r'BUYMORE|AsRequested|AlternativeToRequested|GEROV|Z0iDS3N|Chamele0n|4P|4Planet|AlteZachen|RePACKPOST))+$',
    _I,
)

RELEASE_GROUP_EXP = re.compile(
    r'-(?P<releasegroup>[a-z0-9]+)'
    r'(?<!WEB-DL)(?<!WEB-RIP)(?<!480p)(?<!720p)(?<!1080p)(?<!2160p)'
    r'(?<!DTS-HD)(?<!DTS-X)(?<!DTS-MA)(?<!DTS-ES)(?<![a-zA-Z]{3}-ENG)'
    r'(?:\b|[-._ ])',
    _I,
)

# [SubGroup] Title - 01 [1080p].mkv
ANIME_RELEASE_GROUP_EXP = re.compile(r'^(?:\[(?P<subgroup>(?!\s).+?(?<!\s))\](?:_|-|\s|\.)?)', _I)

# Groups that do not follow the -GROUP suffix convention
EXCEPTION_RELEASE_GROUP_EXP = re.compile(
    r'(\[)?(?P<releasegroup>(Joy|YIFY|YTS.(MX|LT|AG)|FreetheFish|VH-PROD|FTW-HS|DX-TV|Blu-bits|afm72|Anna|'
    r'Bandi|Ghost|Kappa|MONOLITH|Qman|RZeroX|SAMPA|Silence|theincognito|D-Z0N3|t3nzin|Vyndros|HDO|'
    r'DusIctv|DHD|SEV|CtrlHD|-ZR-|ADC|XZVN|RH|Kametsu|r00t|HONE))(\])?$',
    _I,
)

# =============================================================================
# NOISE / CLEANING PATTERNS
# =============================================================================

FILE_EXTENSION_EXP = re.compile(r'\.[a-z0-9]{2,4}$', _I)

# Resolution, codec and bitrate tokens stripped before title/year detection
SIMPLE_TITLE_EXP = re.compile(
    r'\s*(?:480[ip]|576[ip]|720[ip]|1080[ip]|2160[ip]|HVEC|[xh][\W_]?26[45]|DD\W?5\W1|[<>?*:|]|'
    r'848x480|1280x720|1920x1080)((8|10)b(it))?',
    _I,
)

WEBSITE_PREFIX_EXP = re.compile(r'^\[\s*[a-z]+(\.[a-z]+)+\s*\][- ]*|^www\.[a-z]+\.(?:com|net)[ -]*', _I)

CLEAN_TORRENT_PREFIX_EXP = re.compile(r'^\[(?:REQ)\]', _I)

CLEAN_TORRENT_SUFFIX_EXP = re.compile(r'\[(?:ettv|rartv|rarbg|cttv)\]$', _I)

COMMON_SOURCES_EXP = re.compile(
    r'\b(Bluray|(dvdr?|BD)rip|HDTV|HDRip|TS|R5|CAM|SCR|(WEB|DVD)?.?SCREENER|DiVX|xvid|web-?dl)\b', _I
)

# Leading [request] / [tracker] brackets
REQUEST_INFO_EXP = re.compile(r'^(?:\[.+?\])+')

EDITION_EXP = re.compile(
    r'\b((Extended.|Ultimate.)?(Director.?s|Collector.?s|Theatrical|Anniversary|The.Uncut|DC|Ultimate|'
    r'Final(?=(.(Cut|Edition|Version)))|Extended|Special|Despecialized|unrated|\d{2,3}(th)?.Anniversary)'
    r'(.(Cut|Edition|Version))?(.(Extended|Uncensored|Remastered|Unrated|Uncut|IMAX|Fan.?Edit))?|'
    r'((Uncensored|Remastered|Unrated|Uncut|IMAX|Fan.?Edit|Edition|Restored|((2|3|4)in1)))){1,3}',
    _I,
)

LANGUAGE_EXP = re.compile(r'\b(TRUE.?FRENCH|videomann|SUBFRENCH|PLDUB|MULTI)', _I)

# Upper-case only: "Real Steel" is a title, "REAL.PROPER" is not
SCENE_GARBAGE_EXP = re.compile(r'\b(PROPER|REAL|READ.NFO)')

WEBDL_EXP = re.compile(WEBDL_PATTERN, _I)

PROVIDER_EXP = re.compile(r'\{(?P<name>tmdb|imdb|tvdb)-(?P<id>[a-zA-Z0-9]+)\}', _I)

COMPLETE_DVD_EXP = re.compile(r'\b(NTSC|PAL)?.DVDR\b', _I)

COMPLETE_EXP = re.compile(r'\b(COMPLETE)\b', _I)

# Trailing -GROUP, removed before boundary matching
GROUP_SUFFIX_EXP = re.compile(r'-([a-z0-9]+)$', _I)

# =============================================================================
# TITLE / YEAR BOUNDARY PATTERNS
# =============================================================================

# Plausible release years: 1800-2099
_YEAR = r'(?:1[89]|20)\d{2}'

# Separators between title and year. The look-behind rejects the separator
# character itself when it is a closing paren, an opening bracket or a bang.
_SEPARATORS = r'(?:[-_\W](?<![)\[!]))*'

# Tried in order against the groupless simplified filename. The first one that
# matches AND whose title survives cleaning wins.
MOVIE_TITLE_YEAR_EXPS = [
    # Folder format: Blade Runner 2049 (2017)
    re.compile(
        r'^(?P<title>(?![(\[]).+?)?' + _SEPARATORS +
        r'\((?P<year>' + _YEAR + r')\)',
        _I,
    ),
    # Scene format: Mission.Impossible.3.2011 / The Danish Girl 2015
    # A year followed by another year is part of the title (Wonder.Woman.1984.2020)
    re.compile(
        r'^(?P<title>(?![(\[]).+?)?' + _SEPARATORS +
        r'(?P<year>' + _YEAR + r')(?!p|i|\d|\]|\W' + _YEAR + r')(?:\W+|_|$)',
        _I,
    ),
    # Bracketed year: The Dark Knight [2008]
    re.compile(
        r'^(?P<title>(?![(\[]).+?)?' + _SEPARATORS +
        r'\[(?P<year>' + _YEAR + r')\]',
        _I,
    ),
    # Last resort for titles that themselves contain ( or [
    re.compile(
        r'^(?P<title>.+?)?' + _SEPARATORS +
        r'(?P<year>' + _YEAR + r')(?!p|i|\d|\]|\W\d)(?:\W+|_|$)',
        _I,
    ),
]
