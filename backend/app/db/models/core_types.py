import enum


class OrderStatus(str, enum.Enum):
    pending = "PENDING"
    in_preparation = "IN_PREPARATION"
    approved = "APPROVED"
    delivered = "DELIVERED"


class MovementType(str, enum.Enum):
    stock_in = "IN"
    stock_out = "OUT"
