"""Near-real-time bus stops and arrivals for A Coruña."""

__version__ = "1.0.0"
