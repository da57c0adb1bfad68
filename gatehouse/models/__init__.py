"""
Gatehouse - Models Package

Database models live in models.database, configuration models in models.config.
"""
