"""tizenbridge - push, install and run web apps on Tizen devices via sdb."""

__version__ = "0.1.0"
