"""
Learned preparation-time insights.

Responsibilities:
- Measure actual prep time of completed orders.
- Rate items and canteens by speed and by how often they beat the estimate.
- Suggest the quickest canteen for the current time of day.
"""
