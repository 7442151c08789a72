PRESCRIPTION_STATUSES = ("pending", "fulfilled", "cancelled")
PAYMENT_METHODS = ("cash", "card", "online")
SALE_STATUSES = ("completed", "pending", "cancelled")
USER_ROLES = ("admin", "pharmacist")

ROLE_ADMIN = "admin"
ROLE_PHARMACIST = "pharmacist"

DEFAULT_PRESCRIPTION_STATUS = "pending"
DEFAULT_PAYMENT_METHOD = "cash"
DEFAULT_SALE_STATUS = "completed"
