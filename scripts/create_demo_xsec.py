#!/usr/bin/env python
"""
Create synthetic neutrino cross-section sources for demonstration.

Writes two long-format parquet tables (columns: directory, category,
energy, xsec) that nuxsec-xsec-comp can read directly:

    data/demo_xsec_current.parquet
    data/demo_xsec_reference.parquet

The reference set differs from the current one by a few percent with a
slow energy dependence, so the ratio pages show some structure.

Shapes (per nucleon, in 1e-38 cm^2, E in GeV):
- QEL: rises from threshold and saturates near 1
- RES: rises from ~0.3 GeV and saturates near 0.6
- DIS: linear in E above ~1 GeV (0.67 E for neutrinos, 0.33 E for antineutrinos)
"""

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

sys.path.insert(0, str(Path(__file__).parent.parent))

from nuxsec.physics import categories_for, decode_directory

DIRECTORIES = ['nu_mu_O16', 'nu_mu_bar_O16', 'nu_e_n', 'nu_e_bar_H1']


def rising(E, threshold, scale, plateau):
    """Smooth threshold turn-on saturating at ``plateau``."""
    t = np.clip(E - threshold, 0.0, None)
    return plateau * (1.0 - np.exp(-t / scale))


def process_shape(category, E, antineutrino):
    dis_slope = 0.33 if antineutrino else 0.67
    if category.startswith('qel'):
        return rising(E, 0.1, 0.4, 0.9)
    if category.startswith('res'):
        sigma = rising(E, 0.3, 0.8, 0.6)
        if category.count('_') == 3:
            # Single resonance: fraction of the total, heavier ones turn on later
            mass = int(category.rsplit('_', 1)[1][:4]) / 1000.0
            sigma = rising(E, mass - 0.9, 0.8, 0.6) / (1.0 + 4.0 * (mass - 1.2))
        return sigma
    if category.startswith('dis'):
        sigma = dis_slope * rising(E, 1.0, 2.0, 1.0) * E
        if category.endswith('charm'):
            sigma *= 0.05
        elif category.count('_') == 3:
            sigma *= 0.2
        return sigma
    return None


def create_directory(directory, E, distortion=None):
    state = decode_directory(directory)
    frames = []
    for spec in categories_for(state):
        if spec.name.startswith('tot'):
            continue
        sigma = process_shape(spec.name, E, state.probe.is_antineutrino)
        if sigma is None:
            continue
        if spec.name.startswith('qel') or spec.name.startswith('res'):
            if '_nc' in spec.name:
                sigma = 0.3 * sigma
        if distortion is not None:
            sigma = sigma * distortion
        frames.append(pd.DataFrame({
            'directory': directory,
            'category': spec.name,
            'energy': E,
            'xsec': sigma,
        }))

    df = pd.concat(frames, ignore_index=True)

    # Totals: sum of the per-process totals
    totals = []
    for current in ('cc', 'nc'):
        parts = df[df['category'].isin([f'qel_{current}_n', f'qel_{current}_p',
                                        f'res_{current}_n', f'res_{current}_p',
                                        f'dis_{current}_n', f'dis_{current}_p'])]
        if parts.empty:
            continue
        for nucleon in ('n', 'p'):
            sub = parts[parts['category'].str.endswith(f'_{nucleon}')]
            if sub.empty:
                continue
            total = sub.groupby('energy', sort=True)['xsec'].sum()
            totals.append(pd.DataFrame({
                'directory': directory,
                'category': f'tot_{current}_{nucleon}',
                'energy': total.index.to_numpy(),
                'xsec': total.to_numpy(),
            }))
        if not state.is_free_nucleon:
            total = parts.groupby('energy', sort=True)['xsec'].sum()
            totals.append(pd.DataFrame({
                'directory': directory,
                'category': f'tot_{current}',
                'energy': total.index.to_numpy(),
                'xsec': total.to_numpy(),
            }))

    return pd.concat([df] + totals, ignore_index=True)


def main():
    parser = argparse.ArgumentParser(description="Create demo cross-section sources")
    parser.add_argument('--output-dir', default='data', help='Output directory (default: data)')
    parser.add_argument('--n-points', type=int, default=400, help='Energy points per curve')
    parser.add_argument('--seed', type=int, default=42)
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)
    E = np.logspace(-2, 2.3, args.n_points)  # 10 MeV - 200 GeV
    distortion = 1.0 + 0.04 * np.sin(np.log10(E) * 2.0) + rng.normal(0, 0.005, len(E))

    print("=" * 70)
    print("Creating demo neutrino cross-section sources")
    print("=" * 70)

    current = pd.concat([create_directory(d, E) for d in DIRECTORIES], ignore_index=True)
    reference = pd.concat(
        [create_directory(d, E, distortion) for d in DIRECTORIES], ignore_index=True
    )

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    for name, df in (('current', current), ('reference', reference)):
        path = output_dir / f'demo_xsec_{name}.parquet'
        pq.write_table(pa.Table.from_pandas(df, preserve_index=False), path)
        print(f"✓ {name:9s}: {df.groupby(['directory', 'category']).ngroups} curves -> {path}")

    print("\nTry:")
    print(f"  nuxsec-xsec-comp -f {output_dir}/demo_xsec_current.parquet,v3 "
          f"-r {output_dir}/demo_xsec_reference.parquet,v2 -o demo_xsec.pdf")
    print("=" * 70)


if __name__ == '__main__':
    main()
