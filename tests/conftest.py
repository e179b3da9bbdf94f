"""Shared fixtures: small long-format cross-section tables on disk."""

import matplotlib

matplotlib.use('Agg')

import numpy as np
import pandas as pd
import pytest

ENERGIES = np.logspace(-1, 2, 60)


def make_table(curves):
    """Long-format table from {(directory, category): (x, y)}."""
    frames = [
        pd.DataFrame({'directory': d, 'category': c, 'energy': x, 'xsec': y})
        for (d, c), (x, y) in curves.items()
    ]
    return pd.concat(frames, ignore_index=True)


def current_curves():
    return {
        ('nu_mu_O16', 'tot_cc'): (ENERGIES, 0.7 * ENERGIES),
        ('nu_mu_O16', 'qel_cc_n'): (ENERGIES, 1.0 - np.exp(-ENERGIES)),
        ('nu_e_n', 'qel_cc_n'): (ENERGIES, 1.0 - np.exp(-ENERGIES)),
    }


def reference_curves():
    return {
        ('nu_mu_O16', 'tot_cc'): (ENERGIES, 0.7 * ENERGIES * 1.05),
        ('nu_mu_O16', 'qel_cc_n'): (ENERGIES, 0.95 * (1.0 - np.exp(-ENERGIES))),
    }


@pytest.fixture
def current_csv(tmp_path):
    path = tmp_path / 'current.csv'
    make_table(current_curves()).to_csv(path, index=False)
    return path


@pytest.fixture
def reference_csv(tmp_path):
    path = tmp_path / 'reference.csv'
    make_table(reference_curves()).to_csv(path, index=False)
    return path


@pytest.fixture
def current_parquet(tmp_path):
    path = tmp_path / 'current.parquet'
    make_table(current_curves()).to_parquet(path, engine='pyarrow', index=False)
    return path


def write_root(path, curves):
    """ROOT file with one TDirectory per directory and one TGraph per category."""
    uproot = pytest.importorskip('uproot')
    with uproot.recreate(str(path)) as f:
        for (directory, category), (x, y) in curves.items():
            f[f'{directory}/{category}'] = uproot.as_TGraph(pd.DataFrame({'x': x, 'y': y}))
    return path


@pytest.fixture
def current_root(tmp_path):
    return write_root(tmp_path / 'current.root', current_curves())
