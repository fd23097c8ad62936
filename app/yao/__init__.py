"""yao - repository and AUR package installer for Arch Linux."""

__version__ = "0.1.0"
