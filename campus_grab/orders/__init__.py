"""
Student orders.

Responsibilities:
- Place orders with a daily sequential token number.
- Track order status through pending -> preparing -> ready -> completed.
- Keep the student's cart in the session until checkout.
- Summarise order history for students and canteen vendors.
"""
