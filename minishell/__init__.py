"""Building blocks of a small command shell: expansion, parsing, redirections and execution."""

__version__ = "0.1.0"