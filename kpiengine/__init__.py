"""KPI goal-attainment engine.

- periods: competency parsing/ordering and the inactivation split
- attainment: ratio, aggregation modes, horizon projection, status bands
- ingestion: raw sheet rows -> indicator series
- api: Flask surface and result cache
"""
