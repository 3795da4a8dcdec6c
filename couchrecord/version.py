__version__ = "0.4.0"

WEBSITE = ""

LICENSE = "MIT"
