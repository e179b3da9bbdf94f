"""
Probe / Target Decoding
=======================

Cross-section sources group curves into directories named
``<probe>_<target>`` (e.g. ``nu_mu_bar_O16``, ``nu_e_n``, ``nu_mu_H1``).
This module decodes such a name once into an ``InitialState``.

Probe tokens are matched through an explicit table ordered most specific
first: ``nu_mu`` is a prefix of ``nu_mu_bar``, so the antineutrino token has
to be tried before the neutrino one.

Targets:
    'n'   - free neutron
    'H1'  - free proton
    other - nucleus (holds both protons and neutrons)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


class Probe(Enum):
    """Neutrino flavours, valued by PDG code."""

    NU_E = 12
    NU_E_BAR = -12
    NU_MU = 14
    NU_MU_BAR = -14
    NU_TAU = 16
    NU_TAU_BAR = -16

    @property
    def pdg(self) -> int:
        return self.value

    @property
    def is_neutrino(self) -> bool:
        return self.value > 0

    @property
    def is_antineutrino(self) -> bool:
        return self.value < 0

    @property
    def label(self) -> str:
        """Matplotlib mathtext label."""
        return PROBE_LABELS[self]


PROBE_LABELS = {
    Probe.NU_E: r'$\nu_{e}$',
    Probe.NU_E_BAR: r'$\bar{\nu}_{e}$',
    Probe.NU_MU: r'$\nu_{\mu}$',
    Probe.NU_MU_BAR: r'$\bar{\nu}_{\mu}$',
    Probe.NU_TAU: r'$\nu_{\tau}$',
    Probe.NU_TAU_BAR: r'$\bar{\nu}_{\tau}$',
}

# Most specific token first
PROBE_TOKENS: Tuple[Tuple[str, Probe], ...] = (
    ('nu_e_bar', Probe.NU_E_BAR),
    ('nu_e', Probe.NU_E),
    ('nu_mu_bar', Probe.NU_MU_BAR),
    ('nu_mu', Probe.NU_MU),
    ('nu_tau_bar', Probe.NU_TAU_BAR),
    ('nu_tau', Probe.NU_TAU),
)

FREE_NEUTRON = 'n'
FREE_PROTON = 'H1'


@dataclass(frozen=True)
class InitialState:
    """Probe and target decoded from a directory name.

    Attributes:
        directory: Original directory name
        probe: Neutrino flavour
        target: Target token as written in the directory name
        has_protons: Target holds protons (False only for a free neutron)
        has_neutrons: Target holds neutrons (False only for a free proton)
    """

    directory: str
    probe: Probe
    target: str
    has_protons: bool
    has_neutrons: bool

    @property
    def is_free_nucleon(self) -> bool:
        return not (self.has_protons and self.has_neutrons)

    @property
    def probe_label(self) -> str:
        return self.probe.label

    @property
    def target_label(self) -> str:
        """Label appended to page titles; empty for free nucleons."""
        if self.is_free_nucleon:
            return ''
        return f'({self.target})'


def match_probe(directory: str) -> Optional[Tuple[str, Probe, int]]:
    """
    Find the probe token in a directory name.

    Returns:
        (token, probe, position) of the first table entry found, or None
    """
    for token, probe in PROBE_TOKENS:
        position = directory.find(token)
        if position < 0:
            continue
        end = position + len(token)
        # 'nu_e' must not claim 'nu_e_bar_...'; the table order already
        # handles that, this guards names like 'nu_ex'
        if end < len(directory) and directory[end] != '_':
            continue
        return token, probe, position
    return None


def decode_directory(directory: str) -> Optional[InitialState]:
    """
    Decode a ``<probe>_<target>`` directory name.

    Args:
        directory: Directory name from a cross-section source

    Returns:
        InitialState, or None when no probe token is present
    """
    match = match_probe(directory)
    if match is None:
        logger.warning(f"Cannot determine probe from directory name '{directory}'")
        return None

    token, probe, position = match
    target = directory[position + len(token) + 1:]

    free_neutron = target == FREE_NEUTRON
    free_proton = target == FREE_PROTON

    return InitialState(
        directory=directory,
        probe=probe,
        target=target,
        has_protons=not free_neutron,
        has_neutrons=not free_proton,
    )
