"""
Extract a table of electoral systems from a web page.

The ACE Project publishes the electoral system used by each country or
territory as a single HTML table. This module downloads the page, finds the
table and turns it into a DataFrame with the first row used as the headers.
"""


import re

import numpy as np
import pandas as pd
import requests
from bs4 import BeautifulSoup

# Constants
ES_TABLE_ID = 'tblData'


class TableNotFoundError(LookupError):
    """Raised when the requested table is not present in the page."""


def fetch_html(url):
    """
    Download the HTML content of a page.

    Parameters:
        url (str): The URL of the page.

    Returns:
        str: The HTML content of the page.
    """
    response = requests.get(url)

    # Fail loudly on anything other than a successful response.
    response.raise_for_status()

    return response.text


def find_table(html, table_id=None, position=None, container_id=None):
    """
    Locate a single table in an HTML document.

    A table is found either by its id (``//*[@id="tblData"]``) or by its
    1-based position among the tables under the first ``div`` of the element
    with ``container_id`` (``//*[@id="mw-content-text"]/div[1]/table[4]``).

    Parameters:
        html (str): The HTML content to search.
        table_id (str): The id of the table.
        position (int): The 1-based position of the table.
        container_id (str): The id of the element holding the tables.

    Returns:
        bs4.element.Tag: The table element.
    """
    soup = BeautifulSoup(html, 'html.parser')

    if table_id is not None:
        table = soup.find(id=table_id)
        if table is None:
            raise TableNotFoundError(f"No element with id '{table_id}' found.")
        return table

    if position is None:
        raise ValueError("Either table_id or position must be given.")

    # Narrow the search down to the first div of the container, if any.
    scope = soup
    if container_id is not None:
        container = soup.find(id=container_id)
        scope = container.find('div', recursive=False) if container is not None else None
        if scope is None:
            raise TableNotFoundError(f"No content block found under '{container_id}'.")

    tables = scope.find_all('table', recursive=container_id is None)
    if not 1 <= position <= len(tables):
        raise TableNotFoundError(f"Table {position} requested, but only {len(tables)} found.")

    return tables[position - 1]


def table_to_dataframe(table):
    """
    Convert an HTML table into a DataFrame, using its first row as the headers.

    Parameters:
        table (bs4.element.Tag): The table element.

    Returns:
        pd.DataFrame: One row per remaining table row.
    """
    # Collect the text of every cell, skipping rows without any cells.
    rows = []
    for row in table.find_all('tr'):
        cols = row.find_all(['td', 'th'])
        if cols:
            rows.append([col.text.strip() for col in cols])

    if not rows:
        raise TableNotFoundError("The table has no rows.")

    # Pad short rows so every row has the same number of cells.
    width = max(len(row) for row in rows)
    rows = [row + [np.nan] * (width - len(row)) for row in rows]

    # Make the first row the headers.
    headers = ['' if pd.isna(name) else name for name in rows[0]]

    return pd.DataFrame(rows[1:], columns=headers)


def clean_column_name(name):
    """Lowercase a column name and join its words with underscores."""
    cleaned = re.sub(r'[^0-9a-zA-Z]+', '_', str(name)).strip('_').lower()
    return cleaned or 'x'


def clean_column_names(frame):
    """
    Return a copy of the DataFrame with cleaned, unique column names.

    For example, 'Country/Territory' becomes 'country_territory'. Repeated
    names get a numeric suffix ('answers', 'answers_2', ...).
    """
    seen = {}
    columns = []
    for name in frame.columns:
        cleaned = clean_column_name(name)
        seen[cleaned] = seen.get(cleaned, 0) + 1
        columns.append(cleaned if seen[cleaned] == 1 else f"{cleaned}_{seen[cleaned]}")

    cleaned_frame = frame.copy()
    cleaned_frame.columns = columns
    return cleaned_frame


def extract_electoral_systems(url, table_id=ES_TABLE_ID, position=None, container_id=None):
    """
    Download a page and extract its table of electoral systems.

    Parameters:
        url (str): The URL of the page.
        table_id (str): The id of the table. Pass None to locate by position.
        position (int): The 1-based position of the table, used when table_id is None.
        container_id (str): The id of the element holding the positioned tables.

    Returns:
        pd.DataFrame: The table with cleaned column names.
    """
    html = fetch_html(url)

    table = find_table(html, table_id=table_id, position=position, container_id=container_id)

    systems = clean_column_names(table_to_dataframe(table))

    print(f"Extracted {len(systems)} rows with columns {', '.join(systems.columns)}.")

    return systems
