"""Resource models, watch filters and update-strategy dispatch for a control plane machine set controller."""

__version__ = "0.1.0"
__all__ = ["models", "updates", "watch_filters"]