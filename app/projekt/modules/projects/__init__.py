"""
Projects module.

Scope:
- list / get / create / rename / delete
- every project belongs to exactly one customer (customers.id)
"""
