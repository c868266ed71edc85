"""cubetimer: speedcubing timer with inspection, CFOP step splits and solve statistics."""

__version__ = "0.1.0"

__all__ = ["__version__"]
