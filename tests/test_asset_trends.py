from datetime import date
from decimal import Decimal

from src.db.core import AssetCategory, AssetDetailDB, AssetSnapshotDB
from src.services.asset_trends import average_growth_rate, build_asset_trends, growth_rates, snapshot_totals


def snapshot(day, assets, liabilities="0"):
    db_snapshot = AssetSnapshotDB(user_id="user-a", date=day)
    db_snapshot.details = [
        AssetDetailDB(asset_type="savings", asset_name="Savings", amount=Decimal(assets), category=AssetCategory.ASSET),
        AssetDetailDB(asset_type="card", asset_name="Card", amount=Decimal(liabilities), category=AssetCategory.LIABILITY),
    ]
    return db_snapshot


def test_snapshot_totals_split_assets_and_liabilities():
    assets, liabilities = snapshot_totals(snapshot(date(2024, 1, 1), "1500", "500").details)
    assert assets == Decimal("1500")
    assert liabilities == Decimal("500")


def test_growth_rates_first_point_has_no_baseline():
    rates = growth_rates([Decimal("1000"), Decimal("1100"), Decimal("990")])
    assert rates == [Decimal("0"), Decimal("10"), Decimal("-10")]
    assert average_growth_rate(rates) == Decimal("0")


def test_zero_baseline_gives_zero_growth():
    assert growth_rates([Decimal("0"), Decimal("500")]) == [Decimal("0"), Decimal("0")]


def test_build_asset_trends_series():
    trends = build_asset_trends([
        snapshot(date(2024, 1, 1), "1200", "200"),
        snapshot(date(2024, 2, 1), "1300", "200"),
        snapshot(date(2024, 3, 1), "1190", "200"),
    ])

    assert [point.net_worth for point in trends.trends] == [1000.0, 1100.0, 990.0]
    assert [point.growth_rate for point in trends.trends] == [0.0, 10.0, -10.0]
    assert trends.summary.current_net_worth == 990.0
    assert trends.summary.average_growth_rate == 0.0


def test_build_asset_trends_empty():
    trends = build_asset_trends([])
    assert trends.trends == []
    assert trends.summary.current_net_worth == 0.0
    assert trends.summary.average_growth_rate == 0.0
