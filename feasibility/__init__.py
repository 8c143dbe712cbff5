"""SSE feasibility checker - input language front end and decision engine."""

__version__ = "0.2.0"
