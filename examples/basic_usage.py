"""Basic usage example for cafarank."""

import numpy as np

from cafarank import BootstrapSample, CurationConfig, ReferenceIds, Roster, select_top_k
from cafarank.reporting import export_report_markdown
from cafarank.utils import setup_logging


def synthetic_pool(n_models: int = 25, n_boot: int = 100, seed: int = 0):
    """Build a roster and bootstrap samples for a made-up evaluation."""
    rng = np.random.default_rng(seed)
    pis = ["Smith", "Jones", "Garcia", "Chen", "Okafor", "Novak", "Haddad", "Ito"]

    lines = [
        "BN4S NAIVE-1 organizers n Naive Organizers",
        "BB4S BLAST-1 organizers b BLAST Organizers",
    ]
    samples = [
        BootstrapSample("BN4S", rng.normal(0.80, 0.02, n_boot), np.ones(n_boot), np.full(n_boot, 500.0)),
        BootstrapSample("BB4S", rng.normal(0.70, 0.02, n_boot), np.ones(n_boot), np.full(n_boot, 480.0)),
    ]
    for i in range(n_models):
        pi = pis[i % len(pis)]
        mid = f"M{i + 1:03d}"
        lines.append(f"{mid} T{i // 3:02d}-{i % 3 + 1} team{i // 3:02d} q Team{i // 3:02d} {pi}")
        centre = rng.uniform(0.45, 0.75)
        coverage = rng.uniform(0.2, 1.0, n_boot) if i % 7 else np.zeros(n_boot)
        samples.append(
            BootstrapSample(mid, rng.normal(centre, 0.03, n_boot), coverage, np.round(coverage * 500))
        )
    return Roster.from_lines(lines), samples


def main():
    setup_logging()

    roster, samples = synthetic_pool()
    result = select_top_k(
        samples,
        roster,
        ReferenceIds(naive="BN4S", blast="BB4S"),
        CurationConfig(top_k=10),
    )

    print(f"\nQualified models: {len(result.all_qualified_ids)}")
    for rank, (mid, bar) in enumerate(zip(result.selected_ids, result.selected), 1):
        print(f"  {rank:2d}. {bar.tag:<10} {mid}  Smin={bar.mean:.3f} [{bar.q05:.3f}, {bar.q95:.3f}]")
    for bar in result.baselines:
        print(f"  ref {bar.tag:<10} Smin={bar.mean:.3f}")
    if result.degraded:
        print(f"\nOnly {len(result.selected)} distinct PIs qualified")

    export_report_markdown(result, "results/leaderboard.md")


if __name__ == "__main__":
    main()
