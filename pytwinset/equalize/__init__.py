from .equalize import (TransferStep, CylinderSummary, group_pressure, equalize, scenario_description, run_scenario,
                       manifold_configurations, compare_configurations, summary_table, SUMMARY_COLUMNS)
