from passlab.models.account import Account

__all__ = ["Account"]
