"""Command line front end for dot2shader."""
