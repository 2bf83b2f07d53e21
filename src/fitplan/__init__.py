"""fitplan: daily workout and meal plans, nutrition adherence and mood analytics."""

__version__ = "0.1.0"
