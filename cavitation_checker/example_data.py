"""
Example data generator for the Pump Cavitation Checker.

Creates two synthetic pump test logs for demonstration:

- ``pump_test_standard.csv``: single table with French headers and a
  measured NPSHr column.  One row carries a sensor dropout (``n/a``)
  so the skipped-row path is visible in the GUI.
- ``pump_test_sectioned.csv``: ``# Operating Data`` section with
  English headers and no NPSHr column, followed by a
  ``# NPSHr Curve`` section from the pump data sheet.

NPSHa is derived from suction pressure and the water vapour pressure
at the logged temperature, so hot, low-pressure points at high flow
end up at cavitation risk.
"""

import math
import os
import random

# m of water column per bar
_HEAD_PER_BAR = 10.197
# Suction-side friction / entrance losses (m)
_SUCTION_LOSSES = 1.2

# Data sheet NPSHr curve: (flow m3/h, NPSHr m)
_DATASHEET_CURVE = [
    (0.0, 2.1), (25.0, 2.3), (50.0, 2.8), (75.0, 3.4),
    (100.0, 4.0), (125.0, 5.1), (150.0, 6.6),
]


def _vapour_head(temp_c: float) -> float:
    """Water vapour pressure head (m), Magnus approximation."""
    p_kpa = 0.61121 * math.exp(17.62 * temp_c / (243.12 + temp_c))
    return p_kpa / 100.0 * _HEAD_PER_BAR


def _datasheet_npshr(flow: float) -> float:
    for (q0, h0), (q1, h1) in zip(_DATASHEET_CURVE, _DATASHEET_CURVE[1:]):
        if flow <= q1:
            return h0 + (flow - q0) * (h1 - h0) / (q1 - q0)
    return _DATASHEET_CURVE[-1][1]


def _operating_points(rng: random.Random, n_points: int):
    """Yield ``(temperature, pressure, flow, npsha)`` tuples."""
    for i in range(n_points):
        # Flow sweeps the allowable range, temperature drifts upward
        flow = 45.0 + i * (95.0 / max(n_points - 1, 1)) + rng.uniform(-3.0, 3.0)
        temp = 20.0 + i * (65.0 / max(n_points - 1, 1)) + rng.gauss(0.0, 2.0)
        pressure = rng.uniform(0.55, 1.15)
        npsha = pressure * _HEAD_PER_BAR - _vapour_head(temp) - _SUCTION_LOSSES
        yield temp, pressure, flow, npsha


def generate_example_csvs(output_dir: str) -> dict:
    """Generate both example CSV files in *output_dir*.

    Returns
    -------
    dict
        ``{"standard": path, "sectioned": path}``
    """
    os.makedirs(output_dir, exist_ok=True)

    # Reproducible randomness
    rng = random.Random(42)

    # ── Standard layout (French headers, measured NPSHr) ─────────────
    standard_path = os.path.join(output_dir, 'pump_test_standard.csv')
    points = list(_operating_points(rng, 24))
    dropout = rng.randrange(len(points))
    with open(standard_path, 'w', encoding='utf-8', newline='') as fh:
        fh.write('Température (°C),Pression (bar),Débit (m3/h),'
                 'NPSHr (m),NPSHa (m)\n')
        for idx, (temp, pressure, flow, npsha) in enumerate(points):
            # Test-stand NPSHr scatters around the data sheet value
            npshr = _datasheet_npshr(flow) * rng.uniform(0.95, 1.08)
            npsha_text = 'n/a' if idx == dropout else f'{npsha:.2f}'
            fh.write(f'{temp:.1f},{pressure:.3f},{flow:.1f},'
                     f'{npshr:.2f},{npsha_text}\n')

    # ── Sectioned layout (operating data + data sheet curve) ─────────
    sectioned_path = os.path.join(output_dir, 'pump_test_sectioned.csv')
    with open(sectioned_path, 'w', encoding='utf-8', newline='') as fh:
        fh.write('# Operating Data\n')
        fh.write('Temperature (°C),Pressure (bar),Flow (m3/h),NPSHa (m)\n')
        for temp, pressure, flow, npsha in _operating_points(rng, 18):
            fh.write(f'{temp:.1f},{pressure:.3f},{flow:.1f},{npsha:.2f}\n')
        fh.write('\n')
        fh.write('# NPSHr Curve\n')
        fh.write('Flow (m3/h),NPSHr (m)\n')
        for flow, npshr in _DATASHEET_CURVE:
            fh.write(f'{flow:g},{npshr:g}\n')

    return {'standard': standard_path, 'sectioned': sectioned_path}


if __name__ == '__main__':
    import tempfile
    out_dir = os.path.join(tempfile.gettempdir(), 'cavitation_checker_example')
    paths = generate_example_csvs(out_dir)
    for name, path in paths.items():
        size = os.path.getsize(path)
        print(f"  {name}: {path} ({size:,} bytes)")
