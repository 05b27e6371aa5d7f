#!/usr/bin/env python3
# =============================================================================
#     File: test_data.py
#  Created: 2026-10-16 17:50
#
"""
Description: Test loading and filtering of the Howell1 data.
"""
# =============================================================================

import pandas as pd
import pytest

import howell_contrast as hc


@pytest.fixture
def raw():
    return pd.DataFrame({
        'height': [151.765, 139.7, 136.525, 121.92],
        'weight': [47.826, 36.486, 31.864, 19.618],
        'age': [63.0, 63.0, 65.0, 12.0],
        'male': [1, 0, 0, 1],
    })


def test_prepare_adults(raw):
    df = hc.prepare_howell(raw)
    assert len(df) == 3
    assert (df['age'] >= 18).all()
    assert list(df['sex']) == [2, 1, 1]
    # input is left untouched
    assert 'sex' not in raw.columns


def test_prepare_all_ages(raw):
    df = hc.prepare_howell(raw, adults_only=False)
    assert len(df) == 4
    assert list(df['sex']) == [2, 1, 1, 2]


def test_prepare_missing_column(raw):
    with pytest.raises(hc.InvalidInputError):
        hc.prepare_howell(raw.drop(columns='male'))


def test_load_howell(raw, tmp_path):
    path = tmp_path / 'Howell1.csv'
    raw.to_csv(path, sep=';', index=False)
    df = hc.load_howell(path)
    assert list(df.columns) == ['height', 'weight', 'age', 'male', 'sex']
    assert len(df) == 3

# =============================================================================
# =============================================================================
