"""
pricecast
Next-day closing price forecaster built on a windowed LSTM regressor.
"""
__version__ = "0.1.0"
