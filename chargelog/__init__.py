"""ChargeLog: charging and parking expense tracking for an electric vehicle."""

__version__ = "1.0.0"
