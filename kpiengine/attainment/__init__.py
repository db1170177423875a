"""Attainment computation.

- ratio.py: polarity-aware attainment % of one target/actual pair
- aggregator.py: evolution / average / accumulated modes
- projector.py: partial (to date) and annual horizons, headline value
- status.py: status bands, best period, attention list
- engine.py: series -> AttainmentResult pipeline
"""
