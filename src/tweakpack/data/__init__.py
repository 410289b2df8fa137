"""Packaged configuration mapping and sample Lua bundle."""
