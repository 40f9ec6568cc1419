"""
Customers module.

Customers are created implicitly when a project names a customer that does
not exist yet. Names are not unique; lookups are case-insensitive.
"""
