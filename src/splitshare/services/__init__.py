from splitshare.services.balances import compute_balances
from splitshare.services.settlement import SETTLE_TOLERANCE, compute_settlements

__all__ = ["SETTLE_TOLERANCE", "compute_balances", "compute_settlements"]
