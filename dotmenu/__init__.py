"""Interactive menus for git, GitHub, Rails templates and dotfiles."""

from importlib import metadata

try:
    __version__ = metadata.version(__name__)
except metadata.PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0"
