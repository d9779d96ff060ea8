"""dexsearch: fuzzy Pokédex lookup from the terminal."""

__version__ = "0.1.0"
