#!/usr/bin/env python3
# =============================================================================
#     File: data.py
#  Created: 2026-10-16 14:20
#
"""
  Description: Load the Howell1 census data of the !Kung San.
"""
# =============================================================================

import pandas as pd

from .errors import InvalidInputError

HOWELL_URL = ('https://raw.githubusercontent.com/rmcelreath/rethinking/'
              'master/data/Howell1.csv')

GROUP_LABELS = {1: 'female', 2: 'male'}

HOWELL_COLUMNS = ['height', 'weight', 'age', 'male']


def load_howell(path=None, adults_only=True, sep=';'):
    """Load the Howell1 dataset.

    Parameters
    ----------
    path : str or Path, optional
        Location of the CSV file. Defaults to the copy in the rethinking
        repository on GitHub.
    adults_only : bool, optional
        If True, keep only individuals with age >= 18.
    sep : str, optional
        Field separator. The rethinking copy is ';'-separated.

    Returns
    -------
    df : DataFrame
        height [cm], weight [kg], age [yr], male [0, 1], and
        sex [1 = female, 2 = male].
    """
    df = pd.read_csv(HOWELL_URL if path is None else path, sep=sep)
    return prepare_howell(df, adults_only=adults_only)


def prepare_howell(df, adults_only=True):
    """Filter the raw Howell1 table and add the 1-based `sex` index."""
    missing = set(HOWELL_COLUMNS) - set(df.columns)
    if missing:
        raise InvalidInputError(f"Howell data is missing columns {sorted(missing)}.")

    if adults_only:
        df = df[df['age'] >= 18]

    df = df.reset_index(drop=True)
    df['sex'] = df['male'].astype(int) + 1
    return df

# =============================================================================
# =============================================================================
