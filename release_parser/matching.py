#!/usr/bin/env python3
"""
Primitive matchers over rule tables

Three deliberately different selection rules live here:

  get_value   first entry in DECLARATION order that matches (single-winner facets)
  get_fields  every entry that matches (multi-winner facets)
  get_source  matched text of the EARLIEST POSITION in the string (title boundary)

get_value and get_source must stay separate: merging them changes which facet
wins in ambiguous filenames.
"""

from typing import Dict, List, Mapping, Optional, Pattern, Union

RuleTable = Mapping[str, Pattern]


def get_value(text: str, regexes: RuleTable) -> Optional[str]:
    """Return the name of the first table entry whose pattern matches text"""
    for value, regex in regexes.items():
        if regex.search(text):
            return value
    return None


def get_values(text: str, regexes: RuleTable) -> Optional[List[str]]:
    """Return all matching entry names in table order, or None if nothing matched"""
    values = [value for value, regex in regexes.items() if regex.search(text)]
    return values or None


def get_fields(text: str, regexes: RuleTable,
               as_array: bool = False) -> Union[Dict[str, bool], List[str]]:
    """
    Test text against every entry of a rule table

    Args:
        text: Text to match against
        regexes: Rule table (name -> compiled pattern)
        as_array: Return an ordered list of names instead of a presence map

    Returns:
        {name: True} for each matching entry (non-matching names are omitted,
        never False), or the list of matching names when as_array is set
    """
    matched = [key for key, regex in regexes.items() if regex.search(text)]
    if as_array:
        return matched
    return {key: True for key in matched}


def get_source(text: str, regexes: RuleTable) -> Optional[str]:
    """
    Return the literal text of the earliest match across all entries

    Position wins over declaration order; on a tie at the same index the
    earlier-declared entry is kept.
    """
    best = None
    for regex in regexes.values():
        match = regex.search(text)
        if match and (best is None or match.start() < best.start()):
            best = match
    return best.group(0) if best else None


def filter_empty(mapping: Mapping) -> dict:
    """Drop every falsy value from a mapping"""
    return {key: value for key, value in mapping.items() if value}
