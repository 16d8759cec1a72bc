"""
Stock snapshot column layout.

The snapshot export has 76 columns in a fixed order. Columns that are also
StockLine attributes are read into the line directly; the rest are kept in
StockLine.extra under their column name.
"""

from typing import List, Tuple

STOCK_COLUMNS: List[Tuple[str, str]] = [
    ("sequence_number", "int"),
    ("item_number", "str"),
    ("client", "int"),
    ("batch1", "str"),
    ("batch2", "str"),
    ("serial_number", "str"),
    ("customer_order_number", "str"),
    ("customer_order_position", "str"),
    ("pallet_number", "str"),
    ("handling_unit_number", "str"),
    ("location", "str"),
    ("condition", "int"),
    ("lock_flag", "int"),
    ("handling_unit_type", "int"),
    ("weight", "decimal"),
    ("quantity_incoming", "decimal"),
    ("quantity_on_hand", "decimal"),
    ("quantity_reserved", "decimal"),
    ("order_number", "str"),
    ("order_position", "str"),
    ("strategy_date", "date"),
    ("inventory_date", "date"),
    ("inventory_time", "str"),
    ("inventory_user", "str"),
    ("movement_date", "date"),
    ("movement_time", "str"),
    ("inventory_flag", "str"),
    ("position_on_pallet", "int"),
    ("best_before", "str"),
    ("unstable", "str"),
    ("receipt_strategy", "int"),
    ("receipt_date", "date"),
    ("receipt_number", "str"),
    ("receipt_position", "int"),
    ("broken_pack_flag", "str"),
    ("qa_flag", "str"),
    ("qa_difference", "decimal"),
    ("quantity_base_units", "decimal"),
    ("base_unit_numerator", "int"),
    ("base_unit_denominator", "int"),
    ("net_weight", "decimal"),
    ("gross_weight", "decimal"),
    ("ref_base_unit", "int"),
    ("ref_counting_unit", "int"),
    ("ref_delivery_unit", "int"),
    ("ref_sales_unit", "int"),
    ("ref_pallet", "int"),
    ("created_date", "date"),
    ("created_time", "str"),
    ("created_user", "str"),
    ("changed_date", "date"),
    ("changed_time", "str"),
    ("changed_user", "str"),
    ("labelled_user", "str"),
    ("labelled_time", "str"),
    ("labelled_date", "date"),
    ("pick_sequence", "int"),
    ("purchase_order_number", "str"),
    ("purchase_order_position", "str"),
    ("confirmation_date", "date"),
    ("confirmation_time", "str"),
    ("confirmation_sequence", "int"),
    ("confirmation_flag", "str"),
    ("plant_number", "str"),
    ("text1", "str"),
    ("text2", "str"),
    ("qa_checked", "str"),
    ("bypass_flag", "str"),
    ("check_flag", "str"),
    ("aswh_picking_flag", "str"),
    ("aswh_capable_flag", "str"),
    ("aswh_weight_tolerance", "decimal"),
    ("storage_location", "str"),
    ("ref_inner_unit", "int"),
    ("ref_master_unit", "int"),
    ("confirmation_sequence_original", "int"),
]

EXPECTED_FIELD_COUNT = len(STOCK_COLUMNS)
COLUMN_NAMES = [name for name, _ in STOCK_COLUMNS]
