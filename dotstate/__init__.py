"""Typed paths, serialization formats, persistent state, encryption, glob pattern sets and filesystem systems for managing dotfiles."""

__version__ = "0.1.0"

__all__ = [
    "encryption",
    "formats",
    "lazy",
    "merge",
    "paths",
    "patternset",
    "persistentstate",
    "readonlysystem",
    "realsystem",
    "shellquote",
    "system",
]