from staywise.models.property import Property, Room
from staywise.models.reservation import Reservation
from staywise.models.pricing_rule import PricingRule

__all__ = [
    "PricingRule",
    "Property",
    "Reservation",
    "Room",
]
