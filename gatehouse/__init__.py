"""
Gatehouse - Role-Based Access Control

Users hold roles, roles hold permissions, and request gates allow or deny
FastAPI requests based on them. Roles and permissions are declared in
configuration and reconciled into the database with seed or sync runs.
"""

__version__ = "1.0.0"
