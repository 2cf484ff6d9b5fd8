"""
Wait-time recommendations.

Responsibilities:
- Score menu items by expected wait (prep time plus queued orders).
- Pick the item, or the canteen, with the shortest expected wait.
- Build scoring snapshots from the live menu and the open orders.
"""
