"""Ingestion adapters (offline): sheet value grids -> IndicatorSeries.

- sheets.py: pt-BR number parsing, trend/type labels, grouping by indicator
"""
