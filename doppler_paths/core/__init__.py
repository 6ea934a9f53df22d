from doppler_paths.core.adapters.BaseAdapter import BaseAdapter
from doppler_paths.core.config import ProtocolParams

__all__ = [
    "BaseAdapter",
    "ProtocolParams",
]
