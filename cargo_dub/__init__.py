"""
cargo-dub: run DUB, the D package manager, through familiar subcommands.
"""
__version__ = '0.3.0'
