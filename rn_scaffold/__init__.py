"""rn-scaffold: React Native project structure generator."""

__version__ = "0.1.0"
