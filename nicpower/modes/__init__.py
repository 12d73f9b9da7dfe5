# nicpower/modes/__init__.py
from .inventory_mode import InventoryMode
from .tune_mode import TuneMode

__all__ = ["InventoryMode", "TuneMode"]
