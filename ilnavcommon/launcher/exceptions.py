"""Exceptions for launching the viewer."""


class ViewerLaunchError(Exception):
    """The viewer process could not be created."""
