from splitshare.handlers.balances import balances_router
from splitshare.handlers.basic import basic_router
from splitshare.handlers.expenses import expenses_router
from splitshare.handlers.friends import friends_router

__all__ = ["balances_router", "basic_router", "expenses_router", "friends_router"]
