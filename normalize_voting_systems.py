"""
Normalize the scraped table of electoral systems.

Each country lists between one and three voting systems in a single
'answers' cell, enumerated as "a. <system> b. <system> ...". This module
breaks these apart into a long-form table with one row per country and
voting system, and expands abbreviated system names.

Functions included:
- replace_blanks: Turns empty cells into missing values.
- split_segments: Splits an 'answers' cell into up to three voting systems.
- expand_abbreviations: Expands a trailing ' V' or ' R' into the full word.
- normalize_voting_systems: Builds the long-form table.
- count_voting_systems: Counts how many countries use each voting system.
"""


import re

import numpy as np
import pandas as pd

# Constants
SEGMENT_SEPARATOR = re.compile(r'[a-z]+\. ')
SEGMENT_COLUMNS = ['voting_system_1', 'voting_system_2', 'voting_system_3']
ABBREVIATIONS = [
    (re.compile(r' V$'), ' Vote'),
    (re.compile(r' R$'), ' Representation'),
]


def replace_blanks(frame):
    """Return a copy of the DataFrame with empty strings replaced by NaN."""
    return frame.replace('', np.nan)


def split_segments(answers):
    """
    Split an 'answers' cell into its voting systems.

    The text before the first separator is discarded, as are any parts after
    the third voting system.

    Parameters:
        answers (str): The cell text, or a missing value.

    Returns:
        list: Three entries, each a voting system name or None.
    """
    if pd.isna(answers):
        return [None] * len(SEGMENT_COLUMNS)

    # Keep the preamble plus up to three voting systems, then drop the preamble.
    parts = SEGMENT_SEPARATOR.split(answers)[:len(SEGMENT_COLUMNS) + 1][1:]

    segments = []
    for part in parts:
        # Remove the full stop that closes each enumerated item.
        segment = part.strip()
        if segment.endswith('.'):
            segment = segment[:-1].rstrip()
        # An empty segment is absent and emits no row, rather than a row named ''.
        segments.append(segment or None)

    return segments + [None] * (len(SEGMENT_COLUMNS) - len(segments))


def expand_abbreviations(voting_system):
    """
    Expand an abbreviated ending of a voting system name.

    Sometimes the word 'Vote' is replaced with just a 'V', and
    'Representation' with just an 'R'.
    """
    for pattern, replacement in ABBREVIATIONS:
        voting_system = pattern.sub(replacement, voting_system)
    return voting_system


def normalize_voting_systems(systems):
    """
    Reshape the table of electoral systems so there is one row per voting system.

    Parameters:
        systems (pd.DataFrame): The scraped table, with 'country_territory' and 'answers' columns.

    Returns:
        pd.DataFrame: The 'country_territory' and 'voting_system' columns, in input row
        order and then in the order the voting systems were listed.
    """
    # Replace any blanks.
    systems = replace_blanks(systems).reset_index(drop=True)

    # Countries can have multiple voting systems denoted. Break these apart.
    segments = pd.DataFrame(
        systems['answers'].apply(split_segments).tolist(),
        index=systems.index, columns=SEGMENT_COLUMNS
    )
    wide = pd.concat([systems[['country_territory']], segments], axis=1)

    # Pivot the data so the voting systems are one column, keeping the row order.
    long = wide.melt(
        id_vars='country_territory', value_vars=SEGMENT_COLUMNS,
        var_name='segment', value_name='voting_system', ignore_index=False
    )
    long = long.sort_index(kind='stable').dropna(subset=['voting_system'])

    # Spell out the abbreviated voting system names.
    long = long.assign(voting_system=long['voting_system'].apply(expand_abbreviations))

    return long[['country_territory', 'voting_system']].reset_index(drop=True)


def count_voting_systems(normalized):
    """
    Count the number of rows for each voting system.

    Parameters:
        normalized (pd.DataFrame): The output of normalize_voting_systems.

    Returns:
        pd.DataFrame: The 'voting_system' and 'count' columns, most frequent first.
    """
    counts = normalized.groupby('voting_system').size().rename('count').reset_index()
    return counts.sort_values('count', ascending=False, kind='stable').reset_index(drop=True)
