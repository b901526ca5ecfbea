"""
Trend/Growth Calculator

Turns asset snapshots into a net-worth series with period-over-period growth.
Input snapshots must already be in chronological order (oldest first).
"""
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from src.db.core import AssetCategory, AssetDetailDB, AssetSnapshotDB
from src.models.asset import AssetTrendPoint, AssetTrends, AssetTrendSummary
from src.services.metrics import ZERO, to_decimal, to_float


def snapshot_totals(details: Iterable[AssetDetailDB]) -> Tuple[Decimal, Decimal]:
    """Return (total assets, total liabilities) for one snapshot's details."""
    assets = ZERO
    liabilities = ZERO
    for detail in details:
        if detail.category == AssetCategory.ASSET:
            assets += to_decimal(detail.amount)
        elif detail.category == AssetCategory.LIABILITY:
            liabilities += to_decimal(detail.amount)
    return assets, liabilities


def snapshot_net_worth(details: Iterable[AssetDetailDB]) -> Decimal:
    assets, liabilities = snapshot_totals(details)
    return assets - liabilities


def growth_rate(current: Decimal, previous: Optional[Decimal]) -> Decimal:
    """Percent change from ``previous``; 0 with no baseline or a zero baseline."""
    if previous is None or previous == 0:
        return ZERO
    return (current - previous) / abs(previous) * 100


def growth_rates(net_worths: Sequence[Decimal]) -> List[Decimal]:
    rates = []
    previous = None
    for current in net_worths:
        rates.append(growth_rate(current, previous))
        previous = current
    return rates


def average_growth_rate(rates: Sequence[Decimal]) -> Decimal:
    # The first rate has no baseline and is left out of the mean
    if len(rates) < 2:
        return ZERO
    return sum(rates[1:], ZERO) / (len(rates) - 1)


def build_asset_trends(snapshots: Sequence[AssetSnapshotDB]) -> AssetTrends:
    totals = [snapshot_totals(snapshot.details) for snapshot in snapshots]
    net_worths = [assets - liabilities for assets, liabilities in totals]
    rates = growth_rates(net_worths)

    points = [
        AssetTrendPoint(
            date=snapshot.date,
            total_assets=to_float(assets),
            total_liabilities=to_float(liabilities),
            net_worth=to_float(net_worth),
            growth_rate=to_float(rate),
        )
        for snapshot, (assets, liabilities), net_worth, rate in zip(snapshots, totals, net_worths, rates)
    ]

    return AssetTrends(
        trends=points,
        summary=AssetTrendSummary(
            current_net_worth=to_float(net_worths[-1]) if net_worths else 0.0,
            average_growth_rate=to_float(average_growth_rate(rates)),
        ),
    )
