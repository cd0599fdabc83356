"""Portable SDK environment manager: SDK discovery, toolchain steps and activation scripts."""

__version__ = "0.1.0"