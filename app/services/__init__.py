from app.services.dashboard_service import dashboard_summary
from app.services.medicine_service import (
    create_medicine,
    delete_medicine,
    expiring_medicines,
    low_stock_medicines,
    update_medicine,
)
from app.services.sale_service import process_sale, sales_report
from app.services.supplier_links import count_supplier_medicines, supplied_medicine_ids

__all__ = [
    "count_supplier_medicines",
    "create_medicine",
    "dashboard_summary",
    "delete_medicine",
    "expiring_medicines",
    "low_stock_medicines",
    "process_sale",
    "sales_report",
    "supplied_medicine_ids",
    "update_medicine",
]
