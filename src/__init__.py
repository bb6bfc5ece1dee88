"""Gallery API Service Package."""

__version__ = "1.0.0"
__description__ = (
    "Serverless gallery API using AWS Lambda, MongoDB and the Telegram Bot API"
)

__all__ = ["handlers", "core"]
