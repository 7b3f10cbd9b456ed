#!/usr/bin/env python3
"""
Test suite for release_parser/parser.py — full filename parsing
"""

import pytest
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from release_parser.parser import (
    FilenameParser, ParseResult, Provider, TvParseResult,
    parse_filename, parse_movie_filename, parse_tv_filename,
)


@pytest.fixture
def parser():
    return FilenameParser()


class TestTitleYear:
    """Title and year through the public entry point"""

    @pytest.mark.parametrize("filename,title,year", [
        ("Ouija.Origin.of.Evil.2016.MULTi.TRUEFRENCH.1080p.BluRay.x264-MELBA", "Ouija Origin of Evil", 2016),
        ("Hannibal 2001 4K UHD Dolby Vision MP4 DD+5 1 H265-d3g", "Hannibal", 2001),
        ("Get Out 2017 BluRay 10Bit 1080p DD5 1 H265-d3g", "Get Out", 2017),
        ("Arabic.12.1982.1080p.BluRay.x264-ROVERS", "Arabic 12", 1982),
        ("The Danish Girl 2015", "The Danish Girl", 2015),
        ("Castle.2009.S01E14.English.HDTV.XviD-LOL", "Castle", 2009),
        ("The Dark Knight[2008]DvDrip-aXXo [pendhu]", "The Dark Knight", 2008),
        ("Blade Runner 2049 (2017) 1080p", "Blade Runner 2049", 2017),
    ])
    def test_title_and_year(self, parser, filename, title, year):
        result = parser.parse(filename)
        assert result.title == title
        assert result.year == year

    def test_no_year(self, parser):
        result = parser.parse("No.Country.for.Old.Men.1080p.BluRay.x264-HiGHTiMES")
        assert result.title == "No Country for Old Men"
        assert result.year is None
        assert 'year' not in result.to_dict()


class TestLanguages:

    @pytest.mark.parametrize("filename,expected", [
        ("Castle.2009.S01E14.English.HDTV.XviD-LOL", ['english']),
        ("Castle.2009.S01E14.French.HDTV.XviD-LOL", ['french']),
        ("Castle.2009.S01E14.HDTV.XviD.ENG.HUN-LOL", ['english', 'hungarian']),
        ("Seven.Years.of.Night.2018.PL.DUAL.1080p.BluRay.x264-FLAME", ['english', 'polish', 'multi']),
        ("Tenet 2020 1080p Multi Eng Hin Tam iMax BluRay 10Bit DD5 1 H265-IPT", ['english', 'hindi', 'tamil']),
        ("Revolution S01E03 No Quarter 2012 WEB-DL 720p Nordic-philipo mkv", ['nordic']),
        ("A.Serbian.Film.2010.SERBIAN.UnCut.DTS-HD.DTS.NORDICSUBS.1080p.BluRay.x264.HQ-TUSAHD", ['serbian', 'nordic']),
    ])
    def test_detected(self, parser, filename, expected):
        languages = parser.parse(filename).languages
        for language in expected:
            assert language in languages

    def test_multi_flag(self, parser):
        result = parser.parse("Ouija.Origin.of.Evil.2016.MULTi.TRUEFRENCH.1080p.BluRay.x264-MELBA")
        assert result.languages == ['english', 'french', 'multi']
        assert result.multi is True

    def test_bare_multi_adds_english(self, parser):
        result = parser.parse("Some.Movie.2019.MULTi.1080p.BluRay.x264-GRP")
        assert result.languages == ['english', 'multi']
        assert result.multi is True

    def test_english_fallback(self, parser):
        result = parser.parse("The Danish Girl 2015")
        assert result.languages == ['english']
        assert result.multi is False

    def test_no_fallback_when_language_found(self, parser):
        assert parser.parse("Everest.2015.FRENCH.VFQ.BDRiP.x264-CNF30").languages == ['french']

    def test_title_words_are_not_languages(self, parser):
        """'Arabic' is part of the title, not a language tag"""
        assert parser.parse("Arabic.12.1982.1080p.BluRay.x264-ROVERS").languages == ['english']


class TestAudio:

    @pytest.mark.parametrize("filename,codec", [
        ("Hannibal 2001 4K UHD Dolby Vision MP4 DD+5 1 H265-d3g", 'dolby digital'),
        ("Aladdin 1992 Diamond Edition BluRay 1080p AC3 5 1-OMEGA", 'dolby digital'),
        ("Abbot and Costello Meet Frankenstein 1948 BluRay 1080p HEVC Dts Stereo-D3FiL3R", 'dts'),
        ("The.Daily.Show.2015.07.01.Kevin.Hart.720p.CC.WEBRip.AAC2.0.x264-BTW", 'aac'),
        ("Girl on the Third Floor 2019 BRRip x264 AAC-SSN", 'aac'),
        ("South.Park.S21E01.Uncensored.1080p.WEB-DL.AAC2ch-NEBO666", 'aac'),
        ("Behind the Candelabra 2013 BDRip 1080p DTS-HD extra-HighCode", 'dts-hd'),
        ("Ex Machina 2015 UHD BluRay 2160p DTS-X 7 1 HDR x265 10bit-CHD", 'dts-hd'),
        ("Frozen.2013.1080p.BluRay.EAC3.x264-GRP", 'dolby digital plus'),
    ])
    def test_audio_codec(self, parser, filename, codec):
        assert parser.parse(filename).audio_codec == codec

    @pytest.mark.parametrize("filename,channels", [
        ("Hannibal 2001 4K UHD Dolby Vision MP4 DD+5 1 H265-d3g", '5.1'),
        ("Aladdin 1992 Diamond Edition BluRay 1080p AC3 5 1-OMEGA", '5.1'),
        ("Trespass Against Us (2017) 1080p BluRay x265 6ch -Dtech mkv", '5.1'),
        ("Abbot and Costello Meet Frankenstein 1948 BluRay 1080p HEVC Dts Stereo-D3FiL3R", 'stereo'),
        ("The.Daily.Show.2015.07.01.Kevin.Hart.720p.CC.WEBRip.AAC2.0.x264-BTW", 'stereo'),
    ])
    def test_audio_channels(self, parser, filename, channels):
        assert parser.parse(filename).audio_channels == channels


class TestVideo:

    @pytest.mark.parametrize("filename,codec", [
        ("Get Out 2017 BluRay 10Bit 1080p DD5 1 H265-d3g", 'h265'),
        ("Minions 2015 720p HC HDRip X265 AC3 TiTAN", 'x265'),
        ("The.Middle.720p.HEVC-MeGusta-Pre", 'hevc'),
        ("Terminator 3 Rise of The Machines 2003 HDDVD XvidHD 720p-NPW", 'xvidhd'),
        ("Hidden Figures 2016 DVDSCR XVID", 'xvid'),
        ("Cloud.Atlas.2012.BluRay.1080p.VC1.5.1.WMV-INSECTS", 'wmv'),
    ])
    def test_video_codec(self, parser, filename, codec):
        assert parser.parse(filename).video_codec == codec

    @pytest.mark.parametrize("filename", [
        "The Dark Knight[2008]DvDrip-aXXo [pendhu]",
        "Bridesmaids[2011][Unrated Edition]DvDrip AC3-aXXo",
    ])
    def test_no_video_codec(self, parser, filename):
        assert parser.parse(filename).video_codec is None

    @pytest.mark.parametrize("filename,resolution", [
        ("Hannibal 2001 4K UHD Dolby Vision MP4 DD+5 1 H265-d3g", '2160p'),
        ("Get Out 2017 BluRay 10Bit 1080p DD5 1 H265-d3g", '1080p'),
        ("Terminator 3 Rise of The Machines 2003 HDDVD XvidHD 720p-NPW", '720p'),
    ])
    def test_resolution(self, parser, filename, resolution):
        assert parser.parse(filename).resolution == resolution


class TestFlags:
    """Edition / source presence maps and the remaining scalar facets"""

    def test_edition(self, parser):
        result = parser.parse("Movie.2010.IMAX.EXTENDED.1080p.BluRay.x264-GRP")
        assert result.edition == {'imax': True, 'extended': True}

    def test_sources(self, parser):
        sources = parser.parse("Castle.2009.S01E14.English.HDTV.XviD-LOL").sources
        assert 'hdtv' in sources
        assert all(value is True for value in sources.values())

    def test_provider(self, parser):
        result = parser.parse("The Matrix (1999) {imdb-tt0133093}")
        assert result.provider == Provider(name='imdb', id='tt0133093')
        assert result.title == "The Matrix"

    def test_complete(self, parser):
        assert parser.parse("Friends.COMPLETE.SERIES.720p.BluRay.x264-GRP").complete is True
        assert parser.parse("Get Out 2017 BluRay 10Bit 1080p DD5 1 H265-d3g").complete is None

    def test_group(self, parser):
        assert parser.parse("Ouija.Origin.of.Evil.2016.MULTi.TRUEFRENCH.1080p.BluRay.x264-MELBA").group == 'MELBA'

    def test_request_tag_ignored(self, parser):
        result = parser.parse("[REQ] Movie.2019.1080p.BluRay.x264-GRP")
        assert result.group == 'GRP'
        assert result.title == "Movie"
        assert result.year == 2019


class TestToDict:

    def test_empty_input(self):
        assert parse_filename("").to_dict() == {'multi': False}
        assert parse_filename("   ").to_dict() == {'multi': False}

    def test_empty_input_fields(self):
        result = parse_filename("")
        assert result.title is None
        assert result.languages == []

    def test_absent_fields_omitted(self):
        data = parse_filename("Get Out 2017 BluRay 10Bit 1080p DD5 1 H265-d3g").to_dict()
        assert data['title'] == "Get Out"
        assert data['year'] == 2017
        assert data['multi'] is False
        assert 'provider' not in data
        assert 'part' not in data
        for key, value in data.items():
            if key != 'multi':
                assert value not in (None, '', [], {})

    def test_nested_provider(self):
        data = parse_filename("The Matrix (1999) {tmdb-603}").to_dict()
        assert data['provider'] == {'name': 'tmdb', 'id': '603'}


class TestEntryPoints:

    def test_movie_shape(self):
        result = parse_movie_filename("Get Out 2017 BluRay 10Bit 1080p DD5 1 H265-d3g")
        assert type(result) is ParseResult

    def test_default_is_movie(self):
        assert not isinstance(parse_filename("The Danish Girl 2015"), TvParseResult)

    def test_tv_shape(self):
        result = parse_tv_filename("Castle.2009.S01E14.English.HDTV.XviD-LOL")
        assert isinstance(result, TvParseResult)
        assert result.title == "Castle"
        assert result.seasons == []
        assert result.episode_numbers == []
        assert 'seasons' not in result.to_dict()

    def test_is_tv_flag(self):
        assert isinstance(parse_filename("Castle.2009.S01E14.HDTV.XviD-LOL", is_tv=True), TvParseResult)


class TestRobustness:

    @pytest.mark.parametrize("filename", [
        "-", "(", "[]", "....", "2160p", "x264", "-GROUP", "((((((", "1999", "[ ]", "{imdb-}",
    ])
    def test_never_raises(self, filename):
        data = parse_filename(filename).to_dict()
        assert 'multi' in data

    def test_deterministic(self):
        name = "Seven.Years.of.Night.2018.PL.DUAL.1080p.BluRay.x264-FLAME"
        assert parse_filename(name).to_dict() == parse_filename(name).to_dict()

    def test_concurrent_parsing_matches_sequential(self):
        names = [
            "Ouija.Origin.of.Evil.2016.MULTi.TRUEFRENCH.1080p.BluRay.x264-MELBA",
            "Hannibal 2001 4K UHD Dolby Vision MP4 DD+5 1 H265-d3g",
            "No.Country.for.Old.Men.1080p.BluRay.x264-HiGHTiMES",
            "The Dark Knight[2008]DvDrip-aXXo [pendhu]",
        ] * 25
        sequential = [parse_filename(name).to_dict() for name in names]
        with ThreadPoolExecutor(max_workers=8) as executor:
            concurrent = [r.to_dict() for r in executor.map(parse_filename, names)]
        assert concurrent == sequential
