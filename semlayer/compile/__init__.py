"""semlayer compilation layer: view definition → CREATE VIEW SQL."""
from semlayer.compile.base import CompiledView, ViewDialect
from semlayer.compile.bigquery import BigQueryDialect
from semlayer.compile.builder import ViewBuilder
from semlayer.compile.join_plan import JoinPlan, JoinPlanEntry, build_join_plan, pick_base_table

__all__ = [
    "CompiledView",
    "ViewDialect",
    "BigQueryDialect",
    "ViewBuilder",
    "JoinPlan",
    "JoinPlanEntry",
    "build_join_plan",
    "pick_base_table",
]
