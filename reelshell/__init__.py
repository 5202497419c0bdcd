"""Movie database explorer (hash table, director skip list, actor graph) and a tiny job-control shell."""

__version__ = "0.1.0"