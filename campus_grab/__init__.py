"""
Campus Grab: campus canteen ordering service.

Students browse canteen menus, fill a cart and place orders; canteen
admins manage their menu and work through incoming orders. A small
heuristic recommends the item or canteen with the shortest expected wait.
"""
