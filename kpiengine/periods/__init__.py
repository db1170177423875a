"""Period handling: competency parsing/ordering and the inactivation split.

- normalizer.py: validate raw records, derive year*100+month keys, sort
- inactivation.py: active/inactive partition, first inactive competency
"""
