"""Background worker keeping an agent's auto.fun intel data fresh."""

__version__ = "0.1.0"
