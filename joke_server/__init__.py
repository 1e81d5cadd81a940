"""HTTP service for a collection of jokes stored in a JSON file"""

__version__ = "0.1.0"
