"""HTTP surface (Flask) over the attainment engine.

- server.py: /attainment, /attainment/batch, /health
- cache.py: content-hash keyed LRU of rendered results
"""
