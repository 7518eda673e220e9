"""Domain layer for daily wellness goals.

This package holds the goal calculation business logic, decoupled from
the GraphQL presentation layer and from infrastructure.
"""
