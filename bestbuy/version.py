"""Client version and the User-Agent it is sent under."""

__version__ = "1.0.0"

# Sent on every request so the service can attribute traffic to this client.
USER_AGENT = f"bestbuy-sdk-python/{__version__};python"
