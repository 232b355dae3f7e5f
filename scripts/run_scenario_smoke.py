# scripts/run_scenario_smoke.py
from __future__ import annotations

from src.core.scenario_config import build_default_input
from src.core.scenario_engine import run_scenario, scenario_to_dataframe
from src.core.scenario_models import PurchaseTiming, ScenarioOutput


def main() -> None:
    inp = build_default_input(
        years=10,
        dca_amount=500.0,
        purchase_timing=PurchaseTiming.YEAR_2,
    )

    result: ScenarioOutput = run_scenario(inp)
    final = result.summary.final_year
    buy = result.summary.buy_house_details
    dca = result.summary.dca_details

    print("=== Scenario engine smoke test ===")
    print(f"Years: {result.years_labels[0]}–{result.years_labels[-1]}")
    print(f"Hold all BTC ($): {final.hold_all:,.0f}")
    print(f"Buy a house ($): {final.buy_house:,.0f}")
    print(f"Rent forever ($): {final.rent_forever:,.0f}")
    print(f"Best strategy: {final.best_strategy}")
    print(f"Monthly payment ($): {buy.monthly_payment:,.2f}")
    print(f"BTC sold for down payment: {buy.btc_sold_for_down:,.4f}")
    print(f"External cash needed ($): {buy.external_cash_needed:,.0f}")
    print(f"DCA BTC accumulated: {dca.btc_accumulated:,.4f}")
    print()
    print(scenario_to_dataframe(result).to_string(index=False))


if __name__ == "__main__":
    main()
