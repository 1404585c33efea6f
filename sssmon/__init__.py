"""sss-mon: periodic host metrics sampler."""

__version__ = "1.0.0"
