"""NeuralPulse admin panel and blog state store."""

__version__ = "0.1.0"
