"""Bridge between markdown task lines and Remember The Milk tasks."""

__version__ = "0.1.0"
