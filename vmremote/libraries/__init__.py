"""Keyword libraries shipped with vmremote."""
