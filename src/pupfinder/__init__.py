"""pupfinder: browse a list of adoptable dogs and their details."""

__version__ = "0.1.0"
