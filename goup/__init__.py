"""
goup - Go version manager and multiplexer.

goup installs versions of Go to your user directory and switches between
installed versions with a symlink.
"""

__version__ = "0.1.0"
