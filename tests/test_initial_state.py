"""Tests for probe/target decoding of directory names."""

import pytest

from nuxsec.physics import Probe, decode_directory, match_probe


class TestDecodeDirectory:
    @pytest.mark.parametrize('directory, probe, target', [
        ('nu_e_O16', Probe.NU_E, 'O16'),
        ('nu_e_bar_O16', Probe.NU_E_BAR, 'O16'),
        ('nu_mu_C12', Probe.NU_MU, 'C12'),
        ('nu_mu_bar_Fe56', Probe.NU_MU_BAR, 'Fe56'),
        ('nu_tau_Ar40', Probe.NU_TAU, 'Ar40'),
        ('nu_tau_bar_Pb208', Probe.NU_TAU_BAR, 'Pb208'),
    ])
    def test_probe_and_target(self, directory, probe, target):
        state = decode_directory(directory)
        assert state.probe is probe
        assert state.target == target
        assert state.directory == directory

    def test_antineutrino_not_read_as_neutrino(self):
        assert decode_directory('nu_mu_bar_H1').probe is Probe.NU_MU_BAR

    def test_nucleus(self):
        state = decode_directory('nu_mu_O16')
        assert state.has_protons
        assert state.has_neutrons
        assert not state.is_free_nucleon
        assert state.target_label == '(O16)'

    def test_free_neutron(self):
        state = decode_directory('nu_e_n')
        assert not state.has_protons
        assert state.has_neutrons
        assert state.is_free_nucleon
        assert state.target_label == ''

    def test_free_proton(self):
        state = decode_directory('nu_mu_bar_H1')
        assert state.has_protons
        assert not state.has_neutrons
        assert state.is_free_nucleon

    def test_unknown_probe(self, caplog):
        assert decode_directory('e_O16') is None
        assert "Cannot determine probe" in caplog.text

    def test_token_boundary(self):
        assert match_probe('nu_ex_O16') is None


class TestProbe:
    def test_pdg_codes(self):
        assert Probe.NU_E.pdg == 12
        assert Probe.NU_MU_BAR.pdg == -14
        assert Probe.NU_TAU.pdg == 16

    def test_flavour(self):
        assert Probe.NU_MU.is_neutrino
        assert not Probe.NU_MU.is_antineutrino
        assert Probe.NU_E_BAR.is_antineutrino

    def test_labels(self):
        assert Probe.NU_MU.label == r'$\nu_{\mu}$'
        assert Probe.NU_E_BAR.label == r'$\bar{\nu}_{e}$'
        assert decode_directory('nu_tau_O16').probe_label == r'$\nu_{\tau}$'
