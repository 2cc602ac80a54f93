"""SmartTax Optimizer: individual income tax calculation and optimization strategies."""

from smarttax.optimizer import TaxOptimizer

__version__ = "0.1.0"

__all__ = ["TaxOptimizer", "__version__"]
