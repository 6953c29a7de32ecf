"""
This script manages a short exploration of electoral systems. It loads a dataset of local electoral contests held under the Alternative Vote, downloads the ACE Project table of the electoral systems used around the world, reshapes it into one row per country and voting system, and plots how common each voting system is.

Functions included:
- load_av_dataset: Loads the Alternative Vote contest dataset from a Stata file.
- summarize_voting_systems: Describes the normalized voting system table in a sentence.
- build_plot: Draws the bar chart of the number of countries using each voting system.
- generate_plot: Saves that bar chart to an image file.

The table extraction and normalization steps live in extract_electoral_systems.py and normalize_voting_systems.py.
"""


import os

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from extract_electoral_systems import ES_TABLE_ID, extract_electoral_systems
from normalize_voting_systems import count_voting_systems, normalize_voting_systems

# Constants
BAR_COLOR = 'slateblue'
TITLE_COLOR = '#473C8B'  # slateblue4
SUBTITLE_COLOR = '#7A67EE'  # slateblue2
CAPTION_COLOR = 'darkgray'
CAPTION = "Data is accredited to the work of the ACE Project\nhttps://aceproject.org/epic-en?question=ES005&f=h"


def load_av_dataset(input_file):
    """
    Load the Alternative Vote contest dataset.

    Each observation is a seat up for election between 1995 and 2014 in one of 11 Californian cities, with
    whether the city adopted the Alternative Vote, whether the contest came after the adoption, and the
    district- and city-level electoral structure and demographics.

    Parameters:
        input_file (str): Path to the Stata (.dta) file.

    Returns:
        pd.DataFrame: The contest dataset.
    """
    av = pd.read_stata(input_file)

    print(f"Loaded {len(av)} contests with {len(av.columns)} variables from {input_file}.")
    print(av.head())

    return av


def summarize_voting_systems(normalized, counts):
    """
    Describe the normalized table of voting systems.

    Parameters:
        normalized (pd.DataFrame): One row per country and voting system.
        counts (pd.DataFrame): The number of rows per voting system, most frequent first.

    Returns:
        str: A sentence naming the number of countries and the most common voting system.
    """
    country_count = normalized['country_territory'].nunique()

    if counts.empty:
        return f"No voting systems were found across {country_count} countries/territories."

    top = counts.iloc[0]
    return (f"{len(normalized)} voting systems were recorded across {country_count} countries/territories; "
            f"the most common is {top['voting_system']} ({top['count']} countries/territories).")


def build_plot(counts, country_count):
    """
    Draw the number of countries using each voting system as a horizontal bar chart.

    Parameters:
        counts (pd.DataFrame): The 'voting_system' and 'count' columns, most frequent first.
        country_count (int): The number of distinct countries/territories in the data.

    Returns:
        matplotlib.figure.Figure: The chart, not yet saved.
    """
    # Put the most frequent voting system at the top.
    positions = np.arange(len(counts))[::-1]

    fig, ax = plt.subplots(figsize=(10, 7))
    ax.barh(positions, counts['count'], color=BAR_COLOR)

    # Keep a classic look: no grid, only the left and bottom axes.
    ax.spines['top'].set_visible(False)
    ax.spines['right'].set_visible(False)
    ax.grid(False)

    # Hide the voting system names on the y axis.
    ax.set_yticks([])
    ax.set_xlabel('Count')
    ax.set_ylabel('Electoral System')

    # Title, subtitle and caption
    fig.suptitle('Number of Electoral Systems', x=0.02, ha='left', color=TITLE_COLOR, fontsize=14)
    ax.set_title(f"Data is broken out across {country_count} countries/territories,",
                 loc='left', color=SUBTITLE_COLOR, fontsize=10)
    fig.text(0.98, 0.01, CAPTION, ha='right', va='bottom', color=CAPTION_COLOR, fontsize=10, style='italic')
    fig.tight_layout(rect=(0, 0.06, 1, 0.95))

    return fig


def generate_plot(counts, country_count, output_file):
    """
    Plot the number of countries using each voting system and save the chart.

    Parameters:
        counts (pd.DataFrame): The 'voting_system' and 'count' columns, most frequent first.
        country_count (int): The number of distinct countries/territories in the data.
        output_file (str): Path to save the image to.
    """
    fig = build_plot(counts, country_count)

    # Ensure the output directory exists
    output_dir = os.path.dirname(output_file)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    fig.savefig(output_file)
    plt.close(fig)


if __name__ == '__main__':
    av_file = 'Data/AV_database.dta'
    es_url = 'https://aceproject.org/epic-en/CDTable?view=country&question=ES005'
    output_file = 'Viz/Number of Electoral Systems.jpg'

    # The same list is also available from Wikipedia, as the 4th table of the article body:
    # extract_electoral_systems('https://en.wikipedia.org/wiki/List_of_electoral_systems_by_country',
    #                           table_id=None, position=4, container_id='mw-content-text')

    storage = []

    av = load_av_dataset(av_file)
    storage.append(f"The Alternative Vote dataset has {len(av)} contests.")

    electoral_systems = extract_electoral_systems(es_url, table_id=ES_TABLE_ID)

    voting_systems = normalize_voting_systems(electoral_systems)
    voting_system_counts = count_voting_systems(voting_systems)
    storage.append(summarize_voting_systems(voting_systems, voting_system_counts))

    generate_plot(voting_system_counts, voting_systems['country_territory'].nunique(), output_file)
    storage.append(f"Saved the chart to {output_file}.")

    print(storage)
