"""
Physics Module
==============

Domain vocabulary of neutrino cross-section sources.

Key Components:
    Probe / InitialState / decode_directory: Probe+target decoding of
        directory names such as 'nu_mu_bar_O16'
    CategorySpec / CATALOG / categories_for: Category names, titles and
        applicability rules
"""

from nuxsec.physics.initial_state import (
    Probe,
    InitialState,
    PROBE_TOKENS,
    decode_directory,
    match_probe,
)
from nuxsec.physics.categories import (
    CategorySpec,
    CATALOG,
    RESONANCES,
    categories_for,
    get_category,
)

__all__ = [
    "Probe",
    "InitialState",
    "PROBE_TOKENS",
    "decode_directory",
    "match_probe",
    "CategorySpec",
    "CATALOG",
    "RESONANCES",
    "categories_for",
    "get_category",
]
