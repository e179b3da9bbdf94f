"""
Cross-Section Category Catalog
==============================

The fixed vocabulary of category names found in every probe+target
directory of a cross-section source, with the rules deciding which of them
apply to a given initial state and the page title shown for each.

Applicability:
    - Totals off the whole target (tot_cc, tot_nc): nuclear targets only
    - Per-nucleon categories (suffix _n / _p): target must hold that nucleon
    - QEL CC: neutrino off neutron, antineutrino off proton
    - DIS CC per-quark and charm channels: flavour specific (see below)

Example:
    >>> from nuxsec.physics import decode_directory, categories_for
    >>> state = decode_directory('nu_mu_O16')
    >>> [c.name for c in categories_for(state)][:3]
    ['tot_cc', 'tot_nc', 'tot_cc_n']
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from nuxsec.physics.initial_state import InitialState

NEUTRINO = 'nu'
ANTINEUTRINO = 'nubar'

RESONANCES = (
    '1232P33', '1535S11', '1520D13', '1650S11', '1700D13', '1675D15',
    '1620S31', '1700D33', '1440P11', '1720P13', '1680F15', '1910P31',
    '1920P33', '1905F35', '1950F37', '1710P11',
)

# Quark contribution token -> mathtext
QUARK_LABELS = {
    'uval': r'$u_{val}$',
    'dval': r'$d_{val}$',
    'usea': r'$u_{sea}$',
    'dsea': r'$d_{sea}$',
    'ssea': r'$s_{sea}$',
    'ubarsea': r'$\bar{u}_{sea}$',
    'dbarsea': r'$\bar{d}_{sea}$',
    'sbarsea': r'$\bar{s}_{sea}$',
}

DIS_CC_QUARKS = {
    NEUTRINO: ('ubarsea', 'dval', 'dsea', 'ssea'),
    ANTINEUTRINO: ('sbarsea', 'dbarsea', 'uval', 'usea'),
}
DIS_NC_QUARKS = (
    'sbarsea', 'ubarsea', 'dbarsea', 'dval', 'dsea', 'uval', 'usea', 'ssea',
)
DIS_CC_CHARM = {
    NEUTRINO: ('dval', 'dsea', 'ssea'),
    ANTINEUTRINO: ('dbarsea', 'sbarsea'),
}


@dataclass(frozen=True)
class CategorySpec:
    """One category of the catalog.

    Attributes:
        name: Curve name inside a directory (e.g. 'res_cc_n_1232P33')
        process: Process label (e.g. 'RES CC')
        nucleon: 'n', 'p', or None for whole-target totals
        detail: Extra title text (e.g. ', P33(1232)')
        flavour: NEUTRINO, ANTINEUTRINO, or None for both
    """

    name: str
    process: str
    nucleon: Optional[str] = None
    detail: str = ''
    flavour: Optional[str] = None

    def applies_to(self, state: InitialState) -> bool:
        if self.flavour == NEUTRINO and not state.probe.is_neutrino:
            return False
        if self.flavour == ANTINEUTRINO and not state.probe.is_antineutrino:
            return False
        if self.nucleon is None:
            return not state.is_free_nucleon
        if self.nucleon == 'n':
            return state.has_neutrons
        return state.has_protons

    def title(self, state: InitialState) -> str:
        target = state.target_label
        if self.nucleon is None:
            head = f"{state.probe_label} + {target}"
        else:
            head = f"{state.probe_label} + {self.nucleon} {target}".rstrip()
        return f"{head}, {self.process}{self.detail}"


def _resonance_detail(code: str) -> str:
    return f", {code[4:]}({code[:4]})"


def _charm_detail(quark: str, flavour: str) -> str:
    charm = r'$\bar{c}$' if flavour == ANTINEUTRINO else 'c'
    return f" ({QUARK_LABELS[quark]} -> {charm})"


def _nucleon_categories(nucleon: str) -> List[CategorySpec]:
    qel_cc_flavour = NEUTRINO if nucleon == 'n' else ANTINEUTRINO
    specs = [
        CategorySpec(f'tot_cc_{nucleon}', 'TOT CC', nucleon),
        CategorySpec(f'tot_nc_{nucleon}', 'TOT NC', nucleon),
        CategorySpec(f'qel_cc_{nucleon}', 'QEL CC', nucleon, flavour=qel_cc_flavour),
        CategorySpec(f'qel_nc_{nucleon}', 'NCEL', nucleon),
        CategorySpec(f'res_cc_{nucleon}', 'RES CC', nucleon),
        CategorySpec(f'res_nc_{nucleon}', 'RES NC', nucleon),
    ]
    for current in ('cc', 'nc'):
        for code in RESONANCES:
            specs.append(CategorySpec(
                f'res_{current}_{nucleon}_{code}', f'RES {current.upper()}',
                nucleon, _resonance_detail(code),
            ))
    specs.append(CategorySpec(f'dis_cc_{nucleon}', 'DIS CC', nucleon))
    specs.append(CategorySpec(f'dis_nc_{nucleon}', 'DIS NC', nucleon))
    for flavour in (NEUTRINO, ANTINEUTRINO):
        for quark in DIS_CC_QUARKS[flavour]:
            specs.append(CategorySpec(
                f'dis_cc_{nucleon}_{quark}', 'DIS CC', nucleon,
                f" ({QUARK_LABELS[quark]})", flavour,
            ))
    for quark in DIS_NC_QUARKS:
        specs.append(CategorySpec(
            f'dis_nc_{nucleon}_{quark}', 'DIS NC', nucleon, f" ({QUARK_LABELS[quark]})",
        ))
    for flavour in (NEUTRINO, ANTINEUTRINO):
        for quark in DIS_CC_CHARM[flavour]:
            specs.append(CategorySpec(
                f'dis_cc_{nucleon}_{quark}_charm', 'DIS CC', nucleon,
                _charm_detail(quark, flavour), flavour,
            ))
    return specs


def build_catalog() -> Tuple[CategorySpec, ...]:
    """Full catalog in page order."""
    specs = [
        CategorySpec('tot_cc', 'TOT CC'),
        CategorySpec('tot_nc', 'TOT NC'),
    ]
    specs.extend(_nucleon_categories('n'))
    specs.extend(_nucleon_categories('p'))
    return tuple(specs)


CATALOG = build_catalog()


def categories_for(state: InitialState) -> List[CategorySpec]:
    """Catalog entries applicable to an initial state, in page order."""
    return [spec for spec in CATALOG if spec.applies_to(state)]


def get_category(name: str) -> Optional[CategorySpec]:
    for spec in CATALOG:
        if spec.name == name:
            return spec
    return None
