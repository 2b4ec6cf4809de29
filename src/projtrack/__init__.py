# projtrack
# Rev 0.3.0

__version__ = "0.3.0"
