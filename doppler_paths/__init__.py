__version__ = "0.1.0"

from doppler_paths.auction import AuctionFactory, DynamicAuctionPlan, OrderedAuctionPlan
from doppler_paths.core import BaseAdapter, ProtocolParams

__all__ = [
    "__version__",
    "AuctionFactory",
    "BaseAdapter",
    "DynamicAuctionPlan",
    "OrderedAuctionPlan",
    "ProtocolParams",
]
