import importlib

from app.models.medicine import Medicine
from app.models.prescription import Prescription, PrescriptionItem
from app.models.sales import Sale, SaleItem
from app.models.supplier import Supplier, supplier_medicines
from app.models.user import User


def import_all_models() -> None:
    for module_name in (
        "app.models.medicine",
        "app.models.prescription",
        "app.models.sales",
        "app.models.supplier",
        "app.models.user",
    ):
        importlib.import_module(module_name)


__all__ = [
    "Medicine",
    "Prescription",
    "PrescriptionItem",
    "Sale",
    "SaleItem",
    "Supplier",
    "User",
    "import_all_models",
    "supplier_medicines",
]
