"""
Canteen menus.

Responsibilities:
- Hold each canteen admin's menu items in memory.
- Add, update, delete and toggle availability of items.
- Seed a canteen's menu from the bundled CSV.
"""
