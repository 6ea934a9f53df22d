"""Launch-parameter building: schedules, curves, encoding and the auction factory."""

from .curves import Curve, normalize_curves
from .encoder import CreateParams
from .factory import AuctionFactory, DynamicAuctionPlan, OrderedAuctionPlan
from .schedule import AuctionSchedule, build_schedule, compute_gamma

__all__ = [
    "AuctionFactory",
    "AuctionSchedule",
    "CreateParams",
    "Curve",
    "DynamicAuctionPlan",
    "OrderedAuctionPlan",
    "build_schedule",
    "compute_gamma",
    "normalize_curves",
]
